"""데이터 모델 정의"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple, Union

import numpy as np

from ..config.constants import BASIC_MODE_NOTE, FEATURE_NAMES, MAX_LANDMARK_COORDINATE
from ..utils.exceptions import InvalidLandmarksError
from ..utils.math_utils import clamp, round_half_up
from ..utils.validators import validate_landmark_count


class FaceShapeType(Enum):
    """얼굴형 분류"""
    OBLONG = "Oblong"
    SQUARE = "Square"
    ROUND = "Round"
    HEART = "Heart"
    OVAL = "Oval"
    DIAMOND = "Diamond"
    RECTANGULAR = "Rectangular"
    TRIANGLE = "Triangle"


class EyeType(Enum):
    """눈 형태 분류"""
    HUNTER = "Hunter Eyes"
    NARROW = "Narrow"
    LARGE_AND_CLOSE = "Large & Close"
    LARGE = "Large"
    ELONGATED = "Elongated"
    ROUND = "Round"
    ASYMMETRIC = "Asymmetric"
    ALMOND = "Almond"


class CanthalTilt(Enum):
    """눈꼬리 기울기 분류"""
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"
    SLIGHTLY_POSITIVE = "Slightly Positive"
    SLIGHTLY_NEGATIVE = "Slightly Negative"


class MaxillaDevelopment(Enum):
    """상악(중안부) 발달 정도"""
    VERY_STRONG = "Very Strong"
    STRONG = "Strong"
    NEUTRAL = "Neutral"
    BELOW_AVERAGE = "Below Average"
    WEAK = "Weak"


class NoseShape(Enum):
    """코 형태 분류"""
    WIDE_AND_LONG = "Wide & Long"
    WIDE_AND_CURVED = "Wide & Curved"
    WIDE = "Wide"
    BUTTON = "Button"
    NARROW_AND_AQUILINE = "Narrow & Aquiline"
    NARROW = "Narrow"
    ROMAN = "Roman"
    CURVED = "Curved"
    LONG_AND_ASYMMETRIC = "Long & Asymmetric"
    LONG = "Long"
    UPTURNED = "Upturned"
    SLIGHTLY_ASYMMETRIC = "Slightly Asymmetric"
    STRAIGHT = "Straight"


Point = Tuple[float, float]


class LandmarkSet:
    """
    MediaPipe FaceMesh 번호 체계의 (x, y) 픽셀 좌표 집합

    (x, y) 또는 (x, y, z) 시퀀스를 받아 (N, 2) float64 배열로 보관한다.
    생성 후 수정 불가.
    """

    def __init__(self, points: Union[np.ndarray, Iterable[Sequence[float]]], min_landmarks: int = 468):
        try:
            array = np.array(points, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidLandmarksError(f"Landmarks must be numeric (x, y) points: {e}")

        if array.ndim != 2 or array.shape[1] < 2:
            raise InvalidLandmarksError(
                f"Landmarks must have shape (N, 2) or (N, 3), got {array.shape}"
            )

        validate_landmark_count(array.shape[0], min_landmarks)

        array = np.ascontiguousarray(array[:, :2])
        if not np.all(np.isfinite(array)):
            raise InvalidLandmarksError("Landmarks contain NaN or infinite coordinates")
        if np.any(np.abs(array) > MAX_LANDMARK_COORDINATE):
            raise InvalidLandmarksError(
                f"Landmark coordinates must be within ±{MAX_LANDMARK_COORDINATE:g} pixels"
            )

        array.setflags(write=False)
        self._points = array

    @property
    def points(self) -> np.ndarray:
        """읽기 전용 (N, 2) 배열"""
        return self._points

    def point(self, index: int) -> Point:
        """인덱스의 (x, y) 좌표"""
        x, y = self._points[index]
        return float(x), float(y)

    def x(self, index: int) -> float:
        return float(self._points[index, 0])

    def y(self, index: int) -> float:
        return float(self._points[index, 1])

    def __len__(self) -> int:
        return self._points.shape[0]

    def __repr__(self):
        return f"LandmarkSet(count={len(self)})"


@dataclass(frozen=True)
class RawMeasurements:
    """랜드마크에서 얻은 거리/비율 측정값 (픽셀 단위)"""

    face_width: float
    face_height: float
    jaw_width: float
    cheekbone_width: float
    forehead_width: float
    nose_width: float
    mouth_width: float
    left_eye_width: float
    right_eye_width: float
    eye_distance: float
    left_eye_angle: float      # 도 단위, 133 → 33
    right_eye_angle: float     # 도 단위, 362 → 263
    # 코끝 기준 좌/우 수평 거리 쌍 (대칭 점수용)
    symmetry_offsets: Tuple[Tuple[float, float], ...]

    # 얼굴 너비 대비 비율
    jaw_ratio: float
    cheekbone_ratio: float
    nose_ratio: float
    forehead_ratio: float
    eye_to_face_ratio: float
    eye_spacing_ratio: float
    face_ratio: float          # 높이 / 너비

    degenerate: bool = False

    @property
    def avg_eye_width(self) -> float:
        return (self.left_eye_width + self.right_eye_width) / 2

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            'face_width': round(self.face_width, 2),
            'face_height': round(self.face_height, 2),
            'jaw_width': round(self.jaw_width, 2),
            'cheekbone_width': round(self.cheekbone_width, 2),
            'forehead_width': round(self.forehead_width, 2),
            'nose_width': round(self.nose_width, 2),
            'mouth_width': round(self.mouth_width, 2),
            'left_eye_width': round(self.left_eye_width, 2),
            'right_eye_width': round(self.right_eye_width, 2),
            'eye_distance': round(self.eye_distance, 2),
            'left_eye_angle': round(self.left_eye_angle, 3),
            'right_eye_angle': round(self.right_eye_angle, 3),
            'face_ratio': round(self.face_ratio, 4),
            'degenerate': self.degenerate,
        }


@dataclass(frozen=True)
class FeatureScores:
    """10개 특징 점수 (정수 0-100)"""

    symmetry: int
    jawline: int
    cheekbones: int
    nose_shape: int
    eye_area: int
    face_shape: int
    forehead: int
    masculinity: int
    skin_quality: int
    hairstyle: int

    # 외부 출력 키 ↔ 필드 이름
    _FIELDS = {
        'symmetry': 'symmetry',
        'jawline': 'jawline',
        'cheekbones': 'cheekbones',
        'noseShape': 'nose_shape',
        'eyeArea': 'eye_area',
        'faceShape': 'face_shape',
        'forehead': 'forehead',
        'masculinity': 'masculinity',
        'skinQuality': 'skin_quality',
        'hairstyle': 'hairstyle',
    }

    @classmethod
    def from_raw(cls, raw_scores: Mapping[str, float]) -> "FeatureScores":
        """
        실수 점수를 정수로 변환 (반올림은 여기서만 수행)

        Args:
            raw_scores: 외부 출력 키(camelCase) → 실수 점수

        Returns:
            FeatureScores
        """
        missing = [name for name in FEATURE_NAMES if name not in raw_scores]
        if missing:
            raise KeyError(f"Missing feature scores: {missing}")

        values = {
            cls._FIELDS[name]: int(clamp(round_half_up(raw_scores[name]), 0, 100))
            for name in FEATURE_NAMES
        }
        return cls(**values)

    def get(self, name: str) -> int:
        """외부 출력 키로 점수 조회"""
        return getattr(self, self._FIELDS[name])

    def to_dict(self) -> Dict[str, int]:
        """딕셔너리로 변환"""
        return {name: self.get(name) for name in FEATURE_NAMES}


@dataclass(frozen=True)
class Classifications:
    """5개 형태 분류 결과"""

    face_shape: FaceShapeType
    eye_type: EyeType
    canthal_tilt: CanthalTilt
    maxilla_development: MaxillaDevelopment
    nose_shape: NoseShape

    def to_dict(self) -> Dict[str, str]:
        """딕셔너리로 변환"""
        return {
            'faceShape': self.face_shape.value,
            'eyeType': self.eye_type.value,
            'canthalTilt': self.canthal_tilt.value,
            'maxillaDevelopment': self.maxilla_development.value,
            'noseShape': self.nose_shape.value,
        }


@dataclass(frozen=True)
class PixelStats:
    """기본 모드 이미지 통계 (RGB 순서)"""

    brightness: float
    mean_r: float
    mean_g: float
    mean_b: float
    std_r: float
    std_g: float
    std_b: float
    contrast: float
    texture: float
    color_balance: float
    image_signature: int

    def to_dict(self) -> Dict[str, Any]:
        """기본 모드 measurements 블록으로 변환"""
        return {
            'note': BASIC_MODE_NOTE,
            'brightness': round_half_up(self.brightness),
            'contrast': round_half_up(self.contrast),
            'texture': round_half_up(self.texture),
            'colorBalance': f"{round_half_up(self.color_balance * 100)}%",
        }


@dataclass(frozen=True)
class AnalysisResult:
    """통합 분석 결과"""

    current: int
    potential: int
    is_basic_mode: bool
    features: FeatureScores
    measurements: Union[Classifications, PixelStats]
    conditions: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        result = {
            'current': self.current,
            'potential': self.potential,
            'isBasicMode': self.is_basic_mode,
            'features': self.features.to_dict(),
            'measurements': self.measurements.to_dict(),
        }
        if self.conditions:
            result['conditions'] = list(self.conditions)
        return result
