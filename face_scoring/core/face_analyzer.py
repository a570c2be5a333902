"""
Face Score Analyzer
랜드마크 경로 / 기본 모드(픽셀 통계) 통합 진입점
"""
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np

from ..config.constants import CONDITION_DEGENERATE_FACE
from ..config.settings import AnalysisSettings
from ..models import AnalysisResult, FeatureScores, LandmarkSet
from ..utils import get_config, get_logger
from ..utils.exceptions import DegenerateFaceError
from .feature_extractor import LandmarkFeatureExtractor
from .feature_scorer import FeatureScorer
from .pixel_statistics import PixelStatisticsEngine, to_rgb
from .score_aggregator import OverallScoreAggregator
from .shape_classifier import ShapeClassifier

logger = get_logger(__name__)

LandmarksInput = Union[LandmarkSet, np.ndarray, Iterable[Sequence[float]]]


class FaceScoreAnalyzer:
    """
    얼굴 점수 분석기

    Features:
    - 랜드마크 경로: 측정값 → 10개 점수 → 종합 점수 + 5개 분류
    - 기본 모드: 랜드마크가 없으면 이미지 픽셀 통계만으로 결정적 점수 산출

    인스턴스는 불변 설정만 보관하므로 스레드 간 공유 가능.
    """

    def __init__(self, settings: Optional[AnalysisSettings] = None):
        """
        초기화

        Args:
            settings: 분석 설정 (None이면 config.yaml 의 analysis 섹션 사용)
        """
        self.settings = settings or AnalysisSettings.from_config(get_config())

        self.extractor = LandmarkFeatureExtractor(self.settings)
        self.scorer = FeatureScorer(self.settings)
        self.classifier = ShapeClassifier(self.settings)
        self.aggregator = OverallScoreAggregator()
        self.pixel_engine = PixelStatisticsEngine()

    def analyze(self, image: np.ndarray, landmarks: Optional[LandmarksInput] = None) -> AnalysisResult:
        """
        얼굴 점수 분석

        Args:
            image: OpenCV 이미지 (BGR / BGRA / Grayscale, uint8)
            landmarks: MediaPipe FaceMesh 랜드마크 (픽셀 좌표). None이면 기본 모드

        Returns:
            AnalysisResult

        Raises:
            InvalidImageError: 이미지가 유효하지 않은 경우
            InvalidLandmarksError: 랜드마크가 유효하지 않은 경우
            DegenerateFaceError: raise_on_degenerate 설정 시 퇴화된 얼굴 입력
        """
        if landmarks is None:
            logger.info("No landmarks provided, using basic estimation mode")
            return self._analyze_basic(image)

        if not isinstance(landmarks, LandmarkSet):
            landmarks = LandmarkSet(landmarks, self.settings.min_landmarks)

        logger.info(f"Analyzing with {len(landmarks)} landmarks")
        return self._analyze_landmarks(image, landmarks)

    def _analyze_landmarks(self, image: np.ndarray, landmarks: LandmarkSet) -> AnalysisResult:
        rgb = to_rgb(image)
        conditions: List[str] = []

        measurements = self.extractor.extract(landmarks)
        if measurements.degenerate:
            self._degenerate(conditions, f"face width {measurements.face_width:.3g}px")

        raw_scores, region_degenerate = self.scorer.score(measurements, landmarks, rgb)
        if region_degenerate:
            self._degenerate(conditions, "empty skin or hair region")

        current = self.aggregator.current(raw_scores)
        result = AnalysisResult(
            current=current,
            potential=self.aggregator.potential(current),
            is_basic_mode=False,
            features=FeatureScores.from_raw(raw_scores),
            measurements=self.classifier.classify(measurements, landmarks),
            conditions=tuple(conditions),
        )

        logger.info(f"Analysis complete: current={result.current}, potential={result.potential}")
        return result

    def _analyze_basic(self, image: np.ndarray) -> AnalysisResult:
        stats = self.pixel_engine.compute(image)
        scores = self.pixel_engine.score_features(stats)

        current = self.aggregator.basic_current(scores['symmetry'], scores['skinQuality'])
        result = AnalysisResult(
            current=current,
            potential=self.aggregator.potential(current),
            is_basic_mode=True,
            features=FeatureScores.from_raw(scores),
            measurements=stats,
        )

        logger.info(f"Basic analysis complete: current={result.current}, potential={result.potential}")
        return result

    def _degenerate(self, conditions: List[str], reason: str) -> None:
        if self.settings.raise_on_degenerate:
            raise DegenerateFaceError(f"Degenerate face input: {reason}")

        logger.warning(f"Degenerate face input ({reason}), scores are not meaningful")
        if CONDITION_DEGENERATE_FACE not in conditions:
            conditions.append(CONDITION_DEGENERATE_FACE)


def analyze(image: np.ndarray, landmarks: Optional[LandmarksInput] = None) -> AnalysisResult:
    """
    기본 설정으로 분석 (FaceScoreAnalyzer().analyze 단축)

    Args:
        image: OpenCV 이미지
        landmarks: 랜드마크 또는 None

    Returns:
        AnalysisResult
    """
    return FaceScoreAnalyzer().analyze(image, landmarks)
