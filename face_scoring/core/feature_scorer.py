"""
측정값 → 10개 특징 점수 (실수, 0-100)

반올림은 FeatureScores.from_raw() 에서만 한다.
"""
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from ..config.constants import (
    GOLDEN_RATIO,
    HAIR_REGION_HEIGHT_RATIO,
    HAIR_REGION_LANDMARKS,
    SKIN_REGION_LANDMARKS,
)
from ..config.settings import AnalysisSettings
from ..models import LandmarkSet, RawMeasurements
from ..utils import get_logger
from ..utils.math_utils import clamp
from .geometry import GeometryCalculator
from .pixel_statistics import ImageRegion, full_region, sample_region

logger = get_logger(__name__)

Region = Tuple[float, float, float, float]


def symmetry_score(
    offsets: Sequence[Tuple[float, float]], face_width: float, min_denominator: float = 1e-6
) -> float:
    """좌/우 오프셋 쌍마다 최대 25점"""
    total = 0.0
    for left, right in offsets:
        diff = GeometryCalculator.safe_ratio(abs(left - right), face_width, min_denominator)
        total += (1 - min(diff, 1)) * 25
    return min(total, 100)


def jawline_score(jaw_ratio: float) -> float:
    return min(60 + max(0.0, jaw_ratio - 0.85) * 400, 100)


def cheekbone_score(cheekbone_ratio: float) -> float:
    return min(65 + max(0.0, cheekbone_ratio - 0.95) * 800, 100)


def nose_score(nose_ratio: float) -> float:
    """좁은 코일수록 높음 (최소 40)"""
    return min(max(40.0, 100 - (nose_ratio - 0.15) * 400), 100)


def eye_area_score(eye_to_face_ratio: float, eye_spacing_ratio: float) -> float:
    spacing_bonus = 20 if eye_spacing_ratio > 0.4 else 0
    return min(100.0, eye_to_face_ratio * 400 + spacing_bonus + 40)


def face_shape_score(face_ratio: float) -> float:
    """황금비(1.618)와의 차이 (최소 50)"""
    return max(50.0, 100 - abs(face_ratio - GOLDEN_RATIO) * 60)


def forehead_score(forehead_ratio: float) -> float:
    return min(60 + max(0.0, forehead_ratio - 0.9) * 600, 100)


def masculinity_score(jawline: float, cheekbones: float, forehead: float) -> float:
    return min(jawline * 0.4 + cheekbones * 0.3 + forehead * 0.3, 100)


def skin_quality_score(region: ImageRegion) -> float:
    """
    피부 영역 점수

    매끄러움(색 편차가 작을수록) 60% + 밝기(140 근처일수록) 40%
    """
    brightness = float(np.mean(region.channel_means()))
    smoothness = max(0.0, 100 - region.color_deviation() * 0.8)
    brightness_score = max(0.0, 100 - abs(brightness - 140) * 0.5)
    return smoothness * 0.6 + brightness_score * 0.4


def hairstyle_score(region: ImageRegion) -> float:
    """머리카락 영역의 어두움(존재 여부)과 명암 편차"""
    gray_mean, gray_std = region.gray_mean_std()
    presence = 70 if gray_mean < 180 else 40
    return min(100.0, presence + min(30.0, gray_std * 0.5))


def skin_region(landmarks: LandmarkSet) -> Region:
    """눈 사이 ~ 윗입술 영역 (x, y, width, height)"""
    left_eye = landmarks.point(SKIN_REGION_LANDMARKS['left_eye_outer'])
    right_eye = landmarks.point(SKIN_REGION_LANDMARKS['right_eye_inner'])
    nose_bridge_y = landmarks.y(SKIN_REGION_LANDMARKS['nose_bridge'])
    lip_top_y = landmarks.y(SKIN_REGION_LANDMARKS['lip_top'])

    return (
        min(left_eye[0], right_eye[0]),
        nose_bridge_y,
        abs(right_eye[0] - left_eye[0]),
        lip_top_y - nose_bridge_y,
    )


def hair_region(landmarks: LandmarkSet, face_height: float) -> Region:
    """이마 위쪽 영역 (얼굴 높이의 30%)"""
    forehead_left_x = landmarks.x(HAIR_REGION_LANDMARKS['forehead_left'])
    forehead_right_x = landmarks.x(HAIR_REGION_LANDMARKS['forehead_right'])
    top_y = landmarks.y(HAIR_REGION_LANDMARKS['forehead_top'])

    y = max(0.0, top_y - face_height * HAIR_REGION_HEIGHT_RATIO)
    return (forehead_left_x, y, forehead_right_x - forehead_left_x, top_y - y)


class FeatureScorer:
    """
    특징 점수 계산기

    기하 점수 8개는 측정값만, 피부/헤어 점수는 이미지 영역 픽셀을 사용한다.
    """

    def __init__(self, settings: Optional[AnalysisSettings] = None):
        self.settings = settings or AnalysisSettings()

    def _sample(self, rgb: np.ndarray, region: Region, name: str) -> Tuple[ImageRegion, bool]:
        sampled = sample_region(rgb, *region)
        if sampled.is_empty:
            logger.warning(f"Empty {name} region {region}, using full image")
            return full_region(rgb), True
        return sampled, False

    def score(
        self, measurements: RawMeasurements, landmarks: LandmarkSet, rgb: np.ndarray
    ) -> Tuple[Dict[str, float], bool]:
        """
        10개 특징 점수 계산

        Args:
            measurements: LandmarkFeatureExtractor.extract() 결과
            landmarks: 같은 랜드마크
            rgb: to_rgb() 로 변환한 이미지

        Returns:
            (외부 출력 키 → 실수 점수, 영역 degenerate 여부)
        """
        jawline = jawline_score(measurements.jaw_ratio)
        cheekbones = cheekbone_score(measurements.cheekbone_ratio)
        forehead = forehead_score(measurements.forehead_ratio)

        skin, skin_degenerate = self._sample(rgb, skin_region(landmarks), 'skin')
        hair, hair_degenerate = self._sample(
            rgb, hair_region(landmarks, measurements.face_height), 'hair'
        )

        scores = {
            'symmetry': symmetry_score(
                measurements.symmetry_offsets,
                measurements.face_width,
                self.settings.min_denominator,
            ),
            'jawline': jawline,
            'cheekbones': cheekbones,
            'noseShape': nose_score(measurements.nose_ratio),
            'eyeArea': eye_area_score(
                measurements.eye_to_face_ratio, measurements.eye_spacing_ratio
            ),
            'faceShape': face_shape_score(measurements.face_ratio),
            'forehead': forehead,
            'masculinity': masculinity_score(jawline, cheekbones, forehead),
            'skinQuality': skin_quality_score(skin),
            'hairstyle': hairstyle_score(hair),
        }
        scores = {name: clamp(value, 0, 100) for name, value in scores.items()}

        logger.debug(f"Raw feature scores: {scores}")
        return scores, skin_degenerate or hair_degenerate
