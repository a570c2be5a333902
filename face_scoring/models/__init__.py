"""
Data models for facial feature scoring.
"""
from .analysis_models import (
    AnalysisResult,
    CanthalTilt,
    Classifications,
    EyeType,
    FaceShapeType,
    FeatureScores,
    LandmarkSet,
    MaxillaDevelopment,
    NoseShape,
    PixelStats,
    RawMeasurements,
)

__all__ = [
    'AnalysisResult',
    'CanthalTilt',
    'Classifications',
    'EyeType',
    'FaceShapeType',
    'FeatureScores',
    'LandmarkSet',
    'MaxillaDevelopment',
    'NoseShape',
    'PixelStats',
    'RawMeasurements',
]
