"""숫자 표시/반올림 유틸리티."""

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Optional

# float의 정확한 10진 전개를 자릿수 손실 없이 담을 수 있는 정밀도
_ROUNDING_CONTEXT = Context(prec=400)


def format_number(value: Any) -> str:
    """
    문서/제안서에 표시할 숫자 문자열.

    정수값을 가진 float는 소수점 없이 표시합니다 (18000.0 → "18000").
    숫자가 아닌 값은 str()로 변환합니다.
    """
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def is_number(value: Any) -> bool:
    """bool을 제외한 int/float 여부."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_finite_float(value: Any) -> Optional[float]:
    """
    숫자를 유한한 float로 변환.

    숫자가 아니거나 NaN/Infinity, 또는 float 범위를 넘는 정수이면 None.
    """
    if not is_number(value):
        return None
    try:
        converted = float(value)
    except OverflowError:
        return None
    return converted if math.isfinite(converted) else None


def round_half_up(value: float, digits: int = 0) -> float:
    """
    소수점 이하 digits 자리로 반올림 (동률은 0에서 먼 쪽).

    float의 실제 이진 값을 기준으로 판단합니다 (9 / 8 = 1.125 → 1.13,
    1.005 → 1.0). 정수와 유한하지 않은 값은 그대로 반환합니다.
    """
    if isinstance(value, int) or not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_ROUNDING_CONTEXT)
    return float(rounded)
