"""수치 연산 / 클램프 / 반올림

전부 순수 함수, 외부 의존 없음.
"""

import math
from typing import Callable

from src.core.attributes.models import (
    ATTRIBUTE_MAX,
    ATTRIBUTE_MIN,
    RELATIONSHIP_MAX,
    RELATIONSHIP_MIN,
    NumericOp,
)

ClampFn = Callable[[int], int]


def round_half_away_from_zero(value: float) -> int:
    """가장 가까운 정수로 반올림. 동률(.5)은 0에서 먼 쪽.

    Python 내장 round()는 은행가 반올림이므로 사용하지 않는다.
    2.5 → 3, -2.5 → -3, 2.4 → 2.
    """
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return int(whole) if value >= 0 else -int(whole)


def clamp_attribute(value: int) -> int:
    """0 ~ 100 클램프."""
    return max(ATTRIBUTE_MIN, min(ATTRIBUTE_MAX, value))


def clamp_relationship(value: int) -> int:
    """-100 ~ +100 클램프."""
    return max(RELATIONSHIP_MIN, min(RELATIONSHIP_MAX, value))


def apply_numeric_op(
    current: int,
    op: NumericOp,
    value: int,
    clamp_fn: ClampFn,
) -> int:
    """연산 적용 후 클램프.

    add: current + value
    set: value
    scale: value를 백분율 배수로 취급. round(current * value / 100)
    """
    if op == NumericOp.ADD:
        result = current + value
    elif op == NumericOp.SET:
        result = value
    elif op == NumericOp.SCALE:
        result = round_half_away_from_zero(float(current) * (float(value) / 100.0))
    else:
        raise TypeError(f"Unknown numeric op: {op!r}")

    return clamp_fn(result)
