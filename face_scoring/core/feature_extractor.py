"""랜드마크 기반 얼굴 측정값 추출"""

from typing import Optional

from ..config.constants import (
    EYE_LANDMARKS,
    MEASUREMENT_LANDMARKS,
    SYMMETRY_LEFT_POINTS,
    SYMMETRY_NOSE_TIP,
    SYMMETRY_RIGHT_POINTS,
)
from ..config.settings import AnalysisSettings
from ..models import LandmarkSet, RawMeasurements
from ..utils import get_logger
from .geometry import GeometryCalculator

logger = get_logger(__name__)


class LandmarkFeatureExtractor:
    """
    고정 인덱스 랜드마크에서 거리/비율 측정값 계산

    얼굴 너비가 분모 최솟값보다 작으면 degenerate 로 표시하고
    모든 비율은 분모 최솟값으로 보호한다.
    """

    def __init__(self, settings: Optional[AnalysisSettings] = None):
        self.settings = settings or AnalysisSettings()
        self.geometry = GeometryCalculator()

    def _measure(self, landmarks: LandmarkSet, name: str) -> float:
        start, end = MEASUREMENT_LANDMARKS[name]
        return self.geometry.distance(landmarks.point(start), landmarks.point(end))

    def _ratio(self, numerator: float, denominator: float) -> float:
        return self.geometry.safe_ratio(numerator, denominator, self.settings.min_denominator)

    def extract(self, landmarks: LandmarkSet) -> RawMeasurements:
        """
        측정값 추출

        Args:
            landmarks: 468개 이상의 랜드마크

        Returns:
            RawMeasurements
        """
        face_width = self._measure(landmarks, 'face_width')
        face_height = self._measure(landmarks, 'face_height')
        jaw_width = self._measure(landmarks, 'jaw_width')
        cheekbone_width = self._measure(landmarks, 'cheekbone_width')
        forehead_width = self._measure(landmarks, 'forehead_width')
        nose_width = self._measure(landmarks, 'nose_width')
        mouth_width = self._measure(landmarks, 'mouth_width')

        left_eye_width = self._measure(landmarks, 'left_eye_width')
        right_eye_width = self._measure(landmarks, 'right_eye_width')
        eye_distance = self._measure(landmarks, 'eye_distance')

        # 눈꼬리 각도: 안쪽 → 바깥쪽 (왼쪽 133 → 33, 오른쪽 362 → 263)
        left_eye = EYE_LANDMARKS['left_eye']
        right_eye = EYE_LANDMARKS['right_eye']
        left_eye_angle = self.geometry.line_angle_deg(
            landmarks.point(left_eye['inner_corner']),
            landmarks.point(left_eye['outer_corner']),
        )
        right_eye_angle = self.geometry.line_angle_deg(
            landmarks.point(right_eye['inner_corner']),
            landmarks.point(right_eye['outer_corner']),
        )

        nose_tip_x = landmarks.x(SYMMETRY_NOSE_TIP)
        symmetry_offsets = tuple(
            (abs(landmarks.x(left) - nose_tip_x), abs(landmarks.x(right) - nose_tip_x))
            for left, right in zip(SYMMETRY_LEFT_POINTS, SYMMETRY_RIGHT_POINTS)
        )

        degenerate = face_width < self.settings.min_denominator
        if degenerate:
            logger.warning(f"Degenerate face geometry: face width {face_width:.3g}px")

        avg_eye_width = (left_eye_width + right_eye_width) / 2

        measurements = RawMeasurements(
            face_width=face_width,
            face_height=face_height,
            jaw_width=jaw_width,
            cheekbone_width=cheekbone_width,
            forehead_width=forehead_width,
            nose_width=nose_width,
            mouth_width=mouth_width,
            left_eye_width=left_eye_width,
            right_eye_width=right_eye_width,
            eye_distance=eye_distance,
            left_eye_angle=left_eye_angle,
            right_eye_angle=right_eye_angle,
            symmetry_offsets=symmetry_offsets,
            jaw_ratio=self._ratio(jaw_width, face_width),
            cheekbone_ratio=self._ratio(cheekbone_width, face_width),
            nose_ratio=self._ratio(nose_width, face_width),
            forehead_ratio=self._ratio(forehead_width, face_width),
            eye_to_face_ratio=self._ratio(avg_eye_width, face_width),
            eye_spacing_ratio=self._ratio(eye_distance, face_width),
            face_ratio=self._ratio(face_height, face_width),
            degenerate=degenerate,
        )

        logger.debug(f"Measurements: {measurements.to_dict()}")
        return measurements
