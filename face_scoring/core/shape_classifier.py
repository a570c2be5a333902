"""
형태 분류 (얼굴형, 눈 형태, 눈꼬리 기울기, 상악 발달, 코 형태)

각 분류는 랜드마크 좌표에서 만든 작은 보정값(mod 연산)을 더한 뒤
고정 임계값 결정 트리로 라벨을 고른다.
"""
from typing import Optional

from ..config.constants import EYE_LANDMARKS, MAXILLA_LANDMARKS, NOSE_LANDMARKS, FACE_SHAPE_OFFSET_LANDMARKS
from ..config.settings import AnalysisSettings
from ..models import (
    CanthalTilt,
    Classifications,
    EyeType,
    FaceShapeType,
    LandmarkSet,
    MaxillaDevelopment,
    NoseShape,
    RawMeasurements,
)
from ..utils import get_logger
from ..utils.math_utils import truncated_mod
from .geometry import GeometryCalculator

logger = get_logger(__name__)


def decide_face_shape(face_ratio: float, jaw_ratio: float, cheekbone_ratio: float) -> FaceShapeType:
    """보정된 비율로 얼굴형 결정"""
    jaw_cheek_diff = abs(jaw_ratio - cheekbone_ratio)

    if face_ratio > 1.38:
        return FaceShapeType.OBLONG
    if face_ratio < 1.12:
        return FaceShapeType.SQUARE if jaw_cheek_diff < 0.03 else FaceShapeType.ROUND
    if face_ratio > 1.28:
        return FaceShapeType.HEART if cheekbone_ratio > jaw_ratio + 0.02 else FaceShapeType.OVAL
    if face_ratio > 1.18:
        return FaceShapeType.DIAMOND if jaw_ratio > cheekbone_ratio + 0.03 else FaceShapeType.RECTANGULAR
    return FaceShapeType.TRIANGLE if jaw_cheek_diff > 0.04 else FaceShapeType.OVAL


def decide_eye_type(
    eye_to_face_ratio: float, spacing: float, asymmetry: float, aspect_ratio: float
) -> EyeType:
    """
    눈 형태 결정

    Args:
        eye_to_face_ratio: 평균 눈 너비 / 얼굴 너비
        spacing: 눈 사이 거리 / 평균 눈 너비
        asymmetry: |왼쪽 - 오른쪽 눈 너비| / 평균 눈 너비
        aspect_ratio: 평균 눈 너비 / 평균 눈 높이
    """
    if eye_to_face_ratio < 0.27 and aspect_ratio > 3.5:
        return EyeType.HUNTER
    if eye_to_face_ratio < 0.30 and spacing > 3.3:
        return EyeType.NARROW
    if eye_to_face_ratio > 0.36:
        return EyeType.LARGE_AND_CLOSE if spacing < 2.7 else EyeType.LARGE
    if aspect_ratio > 4.0:
        return EyeType.ELONGATED
    if aspect_ratio < 3.0:
        return EyeType.ROUND
    return EyeType.ASYMMETRIC if asymmetry > 0.1 else EyeType.ALMOND


def decide_canthal_tilt(adjusted_tilt: float) -> CanthalTilt:
    """보정된 기울기(도)로 결정. 음수일수록 눈꼬리가 올라감"""
    if adjusted_tilt < -3:
        return CanthalTilt.POSITIVE
    if adjusted_tilt > 3:
        return CanthalTilt.NEGATIVE
    if abs(adjusted_tilt) < 1:
        return CanthalTilt.NEUTRAL
    return CanthalTilt.SLIGHTLY_POSITIVE if adjusted_tilt < 0 else CanthalTilt.SLIGHTLY_NEGATIVE


def decide_maxilla(
    cheekbone_ratio: float, mid_to_lower_ratio: float, cheekbone_to_jaw_ratio: float
) -> MaxillaDevelopment:
    if cheekbone_ratio > 0.70 and mid_to_lower_ratio > 1.1 and cheekbone_to_jaw_ratio > 1.05:
        return MaxillaDevelopment.VERY_STRONG
    if cheekbone_ratio > 0.65 and mid_to_lower_ratio > 0.9:
        return MaxillaDevelopment.STRONG
    if cheekbone_ratio < 0.58 or mid_to_lower_ratio < 0.7:
        return MaxillaDevelopment.WEAK
    if cheekbone_ratio < 0.62 and mid_to_lower_ratio < 0.85:
        return MaxillaDevelopment.BELOW_AVERAGE
    return MaxillaDevelopment.NEUTRAL


def decide_nose_shape(
    nose_ratio: float,
    face_ratio: float,
    height: float,
    bridge_curvature: float,
    tip_projection: float,
    nostril_asymmetry: float,
) -> NoseShape:
    """보정된 코 비율과 세로 측정값(픽셀)으로 코 형태 결정"""
    if nose_ratio > 0.26:
        if height > 35:
            return NoseShape.WIDE_AND_LONG
        return NoseShape.WIDE_AND_CURVED if bridge_curvature > 5 else NoseShape.WIDE
    if nose_ratio < 0.17:
        if tip_projection < 8:
            return NoseShape.BUTTON
        return NoseShape.NARROW_AND_AQUILINE if bridge_curvature > 4 else NoseShape.NARROW
    if bridge_curvature > 6:
        return NoseShape.ROMAN if face_ratio > 1.3 else NoseShape.CURVED
    if height > 40:
        return NoseShape.LONG_AND_ASYMMETRIC if nostril_asymmetry > 2 else NoseShape.LONG
    if tip_projection < 10:
        return NoseShape.UPTURNED
    return NoseShape.SLIGHTLY_ASYMMETRIC if nostril_asymmetry > 1.5 else NoseShape.STRAIGHT


class ShapeClassifier:
    """랜드마크 + 측정값 → 5개 분류"""

    def __init__(self, settings: Optional[AnalysisSettings] = None):
        self.settings = settings or AnalysisSettings()

    def _ratio(self, numerator: float, denominator: float) -> float:
        return GeometryCalculator.safe_ratio(numerator, denominator, self.settings.min_denominator)

    def classify_face_shape(
        self, face_ratio: float, jaw_ratio: float, cheekbone_ratio: float, landmarks: LandmarkSet
    ) -> FaceShapeType:
        forehead_top = landmarks.point(FACE_SHAPE_OFFSET_LANDMARKS['forehead_top'])
        chin = landmarks.point(FACE_SHAPE_OFFSET_LANDMARKS['chin'])
        face_left = landmarks.point(FACE_SHAPE_OFFSET_LANDMARKS['face_left'])

        offset = truncated_mod(forehead_top[0] + chin[1] + face_left[0], 100) / 1000

        adjusted_face = face_ratio + offset
        adjusted_jaw = jaw_ratio + offset * 0.1
        adjusted_cheek = cheekbone_ratio + offset * 0.08

        logger.debug(
            f"Face shape: offset={offset:.4f}, face={adjusted_face:.4f}, "
            f"jaw={adjusted_jaw:.4f}, cheek={adjusted_cheek:.4f}"
        )
        return decide_face_shape(adjusted_face, adjusted_jaw, adjusted_cheek)

    def classify_eye_type(self, measurements: RawMeasurements, landmarks: LandmarkSet) -> EyeType:
        left_eye = EYE_LANDMARKS['left_eye']
        right_eye = EYE_LANDMARKS['right_eye']

        avg_width = measurements.avg_eye_width
        left_height = abs(landmarks.y(left_eye['top_center']) - landmarks.y(left_eye['bottom_center']))
        right_height = abs(landmarks.y(right_eye['top_center']) - landmarks.y(right_eye['bottom_center']))
        avg_height = (left_height + right_height) / 2

        spacing = self._ratio(measurements.eye_distance, avg_width)
        asymmetry = self._ratio(abs(measurements.left_eye_width - measurements.right_eye_width), avg_width)
        aspect_ratio = self._ratio(avg_width, avg_height)

        logger.debug(
            f"Eye type: spacing={spacing:.3f}, asymmetry={asymmetry:.3f}, aspect={aspect_ratio:.3f}"
        )
        return decide_eye_type(measurements.eye_to_face_ratio, spacing, asymmetry, aspect_ratio)

    def classify_canthal_tilt(self, measurements: RawMeasurements, landmarks: LandmarkSet) -> CanthalTilt:
        left_eye = EYE_LANDMARKS['left_eye']
        right_eye = EYE_LANDMARKS['right_eye']

        left_angle = measurements.left_eye_angle
        right_angle = measurements.right_eye_angle
        avg_angle = (left_angle + right_angle) / 2

        variability = truncated_mod(
            landmarks.x(left_eye['outer_corner']) + landmarks.x(right_eye['outer_corner'])
            + landmarks.y(left_eye['inner_corner']) + landmarks.y(right_eye['inner_corner']),
            10,
        ) - 5
        adjusted = avg_angle + variability * 0.5

        logger.debug(f"Canthal tilt: L={left_angle:.2f}, R={right_angle:.2f}, adjusted={adjusted:.2f}")
        return decide_canthal_tilt(adjusted)

    def classify_maxilla(self, cheekbone_ratio: float, landmarks: LandmarkSet) -> MaxillaDevelopment:
        cheek_left = landmarks.point(MAXILLA_LANDMARKS['cheekbone_left'])
        cheek_right = landmarks.point(MAXILLA_LANDMARKS['cheekbone_right'])
        jaw_left_x = landmarks.x(MAXILLA_LANDMARKS['jaw_left'])
        jaw_right_x = landmarks.x(MAXILLA_LANDMARKS['jaw_right'])

        avg_cheek_y = (cheek_left[1] + cheek_right[1]) / 2
        mid_face = abs(landmarks.y(MAXILLA_LANDMARKS['nose_base']) - avg_cheek_y)
        lower_face = abs(landmarks.y(MAXILLA_LANDMARKS['chin']) - landmarks.y(MAXILLA_LANDMARKS['lip_top']))

        mid_to_lower = self._ratio(mid_face, lower_face)
        cheek_to_jaw = self._ratio(abs(cheek_left[0] - cheek_right[0]), abs(jaw_left_x - jaw_right_x))

        logger.debug(f"Maxilla: mid/lower={mid_to_lower:.3f}, cheek/jaw={cheek_to_jaw:.3f}")
        return decide_maxilla(cheekbone_ratio, mid_to_lower, cheek_to_jaw)

    def classify_nose_shape(self, landmarks: LandmarkSet, nose_ratio: float, face_ratio: float) -> NoseShape:
        tip = landmarks.point(NOSE_LANDMARKS['tip'])
        bridge = landmarks.point(NOSE_LANDMARKS['bridge'])
        top_y = landmarks.y(NOSE_LANDMARKS['top'])
        left = landmarks.point(NOSE_LANDMARKS['left'])
        right_y = landmarks.y(NOSE_LANDMARKS['right'])
        bottom_y = landmarks.y(NOSE_LANDMARKS['bottom'])

        height = abs(top_y - bottom_y)
        bridge_curvature = abs(bridge[1] - (top_y + tip[1]) / 2)
        tip_projection = abs(tip[1] - bottom_y)
        nostril_asymmetry = abs(left[1] - right_y)

        offset = truncated_mod(tip[0] + bridge[1] + left[0], 20) / 100
        adjusted = nose_ratio + offset

        logger.debug(
            f"Nose: ratio={adjusted:.3f}, height={height:.1f}, curvature={bridge_curvature:.1f}, "
            f"tip={tip_projection:.1f}, asymmetry={nostril_asymmetry:.1f}"
        )
        return decide_nose_shape(
            adjusted, face_ratio, height, bridge_curvature, tip_projection, nostril_asymmetry
        )

    def classify(self, measurements: RawMeasurements, landmarks: LandmarkSet) -> Classifications:
        """
        5개 분류 수행

        Args:
            measurements: LandmarkFeatureExtractor.extract() 결과
            landmarks: 같은 랜드마크

        Returns:
            Classifications
        """
        return Classifications(
            face_shape=self.classify_face_shape(
                measurements.face_ratio, measurements.jaw_ratio, measurements.cheekbone_ratio, landmarks
            ),
            eye_type=self.classify_eye_type(measurements, landmarks),
            canthal_tilt=self.classify_canthal_tilt(measurements, landmarks),
            maxilla_development=self.classify_maxilla(measurements.cheekbone_ratio, landmarks),
            nose_shape=self.classify_nose_shape(landmarks, measurements.nose_ratio, measurements.face_ratio),
        )
