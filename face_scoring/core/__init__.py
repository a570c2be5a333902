"""
Core scoring engine package.
"""
from .face_analyzer import FaceScoreAnalyzer, analyze
from .feature_extractor import LandmarkFeatureExtractor
from .feature_scorer import FeatureScorer
from .geometry import GeometryCalculator
from .pixel_statistics import PixelStatisticsEngine
from .recommendations import (
    FallbackRecommendationProvider,
    RecommendationProvider,
    RecommendationService,
)
from .score_aggregator import OverallScoreAggregator
from .shape_classifier import ShapeClassifier

__all__ = [
    'FaceScoreAnalyzer',
    'analyze',
    'LandmarkFeatureExtractor',
    'FeatureScorer',
    'GeometryCalculator',
    'PixelStatisticsEngine',
    'FallbackRecommendationProvider',
    'RecommendationProvider',
    'RecommendationService',
    'OverallScoreAggregator',
    'ShapeClassifier',
]
