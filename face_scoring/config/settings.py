"""시스템 설정 클래스 정의"""

from dataclasses import dataclass

from ..utils.exceptions import ConfigurationError


@dataclass(frozen=True)
class AnalysisSettings:
    """얼굴 점수 분석 설정"""

    # 비율 분모 최솟값 (퇴화된 얼굴에서 0 나누기 방지)
    min_denominator: float = 1e-6
    # True: 퇴화 시 DegenerateFaceError, False: 조건만 기록
    raise_on_degenerate: bool = False
    # 랜드마크 최소 개수
    min_landmarks: int = 468

    def __post_init__(self):
        """설정 값 검증"""
        if not self.min_denominator > 0:
            raise ConfigurationError("min_denominator must be > 0")
        if self.min_landmarks < 455:
            # 측정에 사용하는 최대 인덱스가 454
            raise ConfigurationError("min_landmarks must be >= 455")

    @classmethod
    def from_config(cls, config) -> "AnalysisSettings":
        """
        config.yaml의 analysis 섹션으로 설정 생성

        Args:
            config: Config 인스턴스

        Returns:
            AnalysisSettings
        """
        return cls(
            min_denominator=float(config.get('analysis.min_denominator', 1e-6)),
            raise_on_degenerate=bool(config.get('analysis.raise_on_degenerate', False)),
            min_landmarks=int(config.get('analysis.min_landmarks', 468)),
        )
