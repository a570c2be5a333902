"""얼굴 기하학 계산 유틸리티"""

import math
from typing import Sequence

from ..utils.exceptions import DegenerateFaceError


class GeometryCalculator:
    """2D 점 기반 거리/각도 계산"""

    @staticmethod
    def distance(p1: Sequence[float], p2: Sequence[float]) -> float:
        """
        두 점 간 유클리드 거리 계산

        Args:
            p1, p2: (x, y) 좌표

        Returns:
            거리 (픽셀 단위, 항상 >= 0)
        """
        return math.hypot(p1[0] - p2[0], p1[1] - p2[1])

    @staticmethod
    def angle_deg(p1: Sequence[float], p2: Sequence[float], p3: Sequence[float]) -> float:
        """
        p2를 꼭짓점으로 하는 각도 (코사인 법칙)

        Args:
            p1, p2, p3: (x, y) 좌표

        Returns:
            각도 (도 단위, 0 ~ 180)

        Raises:
            DegenerateFaceError: p1 == p2 또는 p2 == p3 인 경우
        """
        a = GeometryCalculator.distance(p2, p3)
        b = GeometryCalculator.distance(p1, p3)
        c = GeometryCalculator.distance(p1, p2)

        if a == 0 or c == 0:
            raise DegenerateFaceError(
                f"Angle undefined for coincident points: {tuple(p1)}, {tuple(p2)}, {tuple(p3)}"
            )

        cosine = (a * a + c * c - b * b) / (2 * a * c)
        # 부동소수점 오차로 [-1, 1]을 벗어나는 경우 보정
        cosine = max(-1.0, min(1.0, cosine))
        return math.degrees(math.acos(cosine))

    @staticmethod
    def line_angle_deg(p_from: Sequence[float], p_to: Sequence[float]) -> float:
        """
        p_from → p_to 선분의 수평선 대비 각도

        Returns:
            각도 (도 단위, -180 ~ 180)
        """
        return math.degrees(math.atan2(p_to[1] - p_from[1], p_to[0] - p_from[0]))

    @staticmethod
    def safe_ratio(numerator: float, denominator: float, min_denominator: float = 1e-6) -> float:
        """
        분모 최솟값을 보장하는 비율 계산

        분모가 min_denominator 보다 작으면 min_denominator 를 사용한다.
        """
        return numerator / max(denominator, min_denominator)
