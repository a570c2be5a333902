"""
Pixel statistics for basic mode (no landmarks) and landmark-bounded image regions.

All statistics are computed in RGB order on 8-bit images. Input arrays follow the
OpenCV convention (BGR, BGRA or grayscale) and are converted with cv2.cvtColor.
"""
import math
from dataclasses import dataclass
from typing import Dict, Tuple

import cv2
import numpy as np

from ..config.constants import (
    BASIC_MODE_DEFAULT_RANGE,
    BASIC_MODE_SCORE_RANGES,
    BASIC_MODE_SEED_MULTIPLIERS,
)
from ..models import PixelStats
from ..utils import get_logger
from ..utils.exceptions import InvalidImageError
from ..utils.math_utils import clamp, round_half_up
from ..utils.validators import validate_image

logger = get_logger(__name__)


def to_rgb(image: np.ndarray) -> np.ndarray:
    """
    OpenCV 이미지를 float64 RGB 배열로 변환

    Args:
        image: uint8 BGR (H, W, 3), BGRA (H, W, 4) 또는 Grayscale (H, W) / (H, W, 1)

    Returns:
        (H, W, 3) float64 RGB 배열
    """
    validate_image(image)

    if image.dtype != np.uint8:
        raise InvalidImageError(f"Image must be 8-bit (uint8), got {image.dtype}")

    if image.ndim == 3 and image.shape[2] == 1:
        image = np.ascontiguousarray(image[:, :, 0])

    if image.ndim == 2:
        rgb = cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    elif image.shape[2] == 4:
        rgb = cv2.cvtColor(image, cv2.COLOR_BGRA2RGB)
    else:
        rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)

    return rgb.astype(np.float64)


@dataclass(frozen=True)
class ImageRegion:
    """
    직사각형 영역 샘플

    pixels 는 이미지 안쪽 픽셀만 담고, pixel_count 는 영역 전체 크기.
    이미지 밖 픽셀은 검정(0, 0, 0)으로 취급한다.
    """

    pixels: np.ndarray  # (n, 3) float64 RGB
    pixel_count: int

    @property
    def is_empty(self) -> bool:
        return self.pixel_count == 0

    @property
    def outside_count(self) -> int:
        return self.pixel_count - self.pixels.shape[0]

    def channel_means(self) -> np.ndarray:
        """채널별 평균 (R, G, B)"""
        return self.pixels.sum(axis=0) / self.pixel_count

    def color_deviation(self) -> float:
        """sqrt(mean((dR² + dG² + dB²) / 3)) - 피부 매끄러움 지표"""
        means = self.channel_means()
        inside = np.sum((self.pixels - means) ** 2) / 3
        outside = self.outside_count * np.sum(means ** 2) / 3
        return math.sqrt((inside + outside) / self.pixel_count)

    def gray_mean_std(self) -> Tuple[float, float]:
        """픽셀별 (R+G+B)/3 의 평균과 표준편차"""
        gray = self.pixels.sum(axis=1) / 3
        mean = gray.sum() / self.pixel_count
        squared = np.sum((gray - mean) ** 2) + self.outside_count * mean ** 2
        return float(mean), math.sqrt(squared / self.pixel_count)


def sample_region(rgb: np.ndarray, x: float, y: float, width: float, height: float) -> ImageRegion:
    """
    영역 샘플링 (canvas getImageData 와 같은 규칙)

    - 좌표와 크기는 0 방향으로 절삭
    - 음수 크기는 원점을 반대쪽으로 이동
    - 이미지 밖 픽셀은 검정으로 포함

    Args:
        rgb: to_rgb() 결과
        x, y: 좌상단 좌표
        width, height: 영역 크기

    Returns:
        ImageRegion
    """
    x, y, width, height = int(x), int(y), int(width), int(height)
    if width < 0:
        x, width = x + width, -width
    if height < 0:
        y, height = y + height, -height

    image_height, image_width = rgb.shape[:2]
    x0, x1 = max(x, 0), min(x + width, image_width)
    y0, y1 = max(y, 0), min(y + height, image_height)

    if x1 > x0 and y1 > y0:
        pixels = rgb[y0:y1, x0:x1].reshape(-1, 3)
    else:
        pixels = np.empty((0, 3), dtype=np.float64)

    return ImageRegion(pixels=pixels, pixel_count=width * height)


def full_region(rgb: np.ndarray) -> ImageRegion:
    """이미지 전체 영역"""
    return ImageRegion(pixels=rgb.reshape(-1, 3), pixel_count=rgb.shape[0] * rgb.shape[1])


class PixelStatisticsEngine:
    """
    랜드마크 없이 이미지 픽셀만으로 점수 산출 (기본 모드)

    동일 이미지에 대해 항상 같은 결과를 낸다 (난수 미사용).
    """

    def compute(self, image: np.ndarray) -> PixelStats:
        """
        전역 이미지 통계 계산

        Args:
            image: OpenCV 이미지 (BGR / BGRA / Grayscale, uint8)

        Returns:
            PixelStats
        """
        pixels = to_rgb(image).reshape(-1, 3)

        mean_r, mean_g, mean_b = (float(v) for v in pixels.mean(axis=0))
        std_r, std_g, std_b = (float(v) for v in pixels.std(axis=0))

        brightness = (mean_r + mean_g + mean_b) / 3
        contrast = abs(mean_r - mean_g) + abs(mean_g - mean_b) + abs(mean_b - mean_r)
        texture = (std_r + std_g + std_b) / 3

        brightest = max(mean_r, mean_g, mean_b)
        color_balance = min(mean_r, mean_g, mean_b) / brightest if brightest > 0 else 1.0

        signature = int(math.floor(
            (mean_r * 7 + mean_g * 13 + mean_b * 17 + contrast * 3 + texture * 2) * 1000
        )) % 1000

        stats = PixelStats(
            brightness=brightness,
            mean_r=mean_r,
            mean_g=mean_g,
            mean_b=mean_b,
            std_r=std_r,
            std_g=std_g,
            std_b=std_b,
            contrast=contrast,
            texture=texture,
            color_balance=color_balance,
            image_signature=signature,
        )
        logger.debug(f"Pixel stats: {stats}")
        return stats

    @staticmethod
    def base_score(stats: PixelStats) -> float:
        """(밝기 + R + G + B) / 12 를 45 ~ 85 로 제한"""
        return clamp((stats.brightness + stats.mean_r + stats.mean_g + stats.mean_b) / 12, 45, 85)

    @staticmethod
    def varied_score(
        stats: PixelStats,
        seed_multiplier: int,
        base: float,
        score_range: Tuple[int, int] = BASIC_MODE_DEFAULT_RANGE,
    ) -> int:
        """
        이미지 시그니처 기반 결정적 변동 점수

        Args:
            stats: 이미지 통계
            seed_multiplier: 특징별 시드 배수
            base: 기본 점수
            score_range: (최솟값, 최댓값)

        Returns:
            정수 점수
        """
        seed = (stats.image_signature * seed_multiplier) % 100
        variation = (seed / 100) * 30 - 15
        texture_bonus = min(10, stats.texture / 10)
        contrast_bonus = min(8, stats.contrast / 20)

        low, high = score_range
        return round_half_up(clamp(base + variation + texture_bonus + contrast_bonus, low, high))

    @staticmethod
    def skin_quality_score(stats: PixelStats) -> int:
        """밝기/색 균형 기반 피부 점수 (시그니처 미사용)"""
        raw = 100 - (255 - stats.brightness) * 0.4 + stats.contrast * 0.1 + stats.color_balance * 15
        return round_half_up(clamp(raw, 30, 95))

    def score_features(self, stats: PixelStats) -> Dict[str, int]:
        """
        10개 특징 점수 산출

        Returns:
            외부 출력 키 → 정수 점수
        """
        base = self.base_score(stats)

        scores = {
            name: self.varied_score(
                stats,
                multiplier,
                base,
                BASIC_MODE_SCORE_RANGES.get(name, BASIC_MODE_DEFAULT_RANGE),
            )
            for name, multiplier in BASIC_MODE_SEED_MULTIPLIERS.items()
        }
        scores['skinQuality'] = self.skin_quality_score(stats)
        return scores
