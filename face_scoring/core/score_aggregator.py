"""종합 점수(current / potential) 계산"""

from typing import Mapping

from ..config.constants import OVERALL_WEIGHTS, POTENTIAL_BONUS, POTENTIAL_CAP
from ..utils.math_utils import clamp, round_half_up


class OverallScoreAggregator:
    """
    특징 점수의 가중 합

    skinQuality, hairstyle 은 current 에 포함하지 않는다.
    """

    @staticmethod
    def current(scores: Mapping[str, float]) -> int:
        """
        가중 평균 점수

        Args:
            scores: 외부 출력 키 → 점수 (반올림 전 실수 권장)

        Returns:
            0-100 정수
        """
        total = sum(scores[name] * weight for name, weight in OVERALL_WEIGHTS.items())
        return int(clamp(round_half_up(total), 0, 100))

    @staticmethod
    def potential(current: int) -> int:
        """current + 15, 최대 95. current 가 95 를 넘으면 current 그대로"""
        return int(clamp(max(current, min(current + POTENTIAL_BONUS, POTENTIAL_CAP)), 0, 100))

    @staticmethod
    def basic_current(symmetry: float, skin_quality: float) -> int:
        """기본 모드: 대칭 점수와 피부 점수의 평균"""
        return int(clamp(round_half_up((symmetry + skin_quality) / 2), 0, 100))
