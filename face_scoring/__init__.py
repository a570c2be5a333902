"""
Facial Feature Scoring
MediaPipe FaceMesh 랜드마크 기반 얼굴 특징 점수 계산
"""

__version__ = "0.1.0"

from .core import FaceScoreAnalyzer, analyze
from .models import AnalysisResult, LandmarkSet

__all__ = ['FaceScoreAnalyzer', 'analyze', 'AnalysisResult', 'LandmarkSet', '__version__']
