"""점수 계산용 수치 헬퍼"""

import math


def round_half_up(value: float) -> int:
    """0.5를 항상 위로 올리는 반올림 (64.5 → 65, -2.5 → -2)"""
    return int(math.floor(value + 0.5))


def truncated_mod(value: float, divisor: float) -> float:
    """피제수 부호를 따르는 나머지 연산 (-7 mod 10 = -7)"""
    return math.fmod(value, divisor)


def clamp(value: float, lower: float, upper: float) -> float:
    """value를 [lower, upper] 범위로 제한"""
    return max(lower, min(upper, value))
