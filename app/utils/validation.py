"""입력 유효성 검증 유틸리티.

추정/내보내기 요청 본문의 형태를 검사합니다.
값 자체의 보정(잘못된 숫자 → 0 등)은 정규화 레이어가 담당하며,
여기서는 필수 키와 타입만 확인합니다.
"""

import math
from typing import Any

from app.exceptions import InputValidationError
from app.utils.dates import parse_iso_datetime
from app.utils.formatting import is_number


def _is_nan_or_oversized(amount: float) -> bool:
    """NaN 또는 float로 표현할 수 없는 정수 여부 (Infinity는 통과)."""
    try:
        return math.isnan(amount)
    except OverflowError:
        return True


def collect_estimate_input_errors(body: Any) -> list[str]:
    """
    추정 입력의 검증 메시지 목록 수집.

    Args:
        body: JSON 디코딩된 요청 본문

    Returns:
        검증 실패 메시지 목록 (문제가 없으면 빈 목록)
    """
    if not isinstance(body, dict):
        body = {}

    errors = []

    description = body.get("projectDescription")
    if not description or not isinstance(description, str):
        errors.append("projectDescription is required and must be a string.")

    budget = body.get("budget")
    if not budget or not isinstance(budget, dict):
        errors.append("budget is required and must be an object.")
    else:
        amount = budget.get("amount")
        if not is_number(amount) or _is_nan_or_oversized(amount):
            errors.append("budget.amount is required and must be a number.")
        currency = budget.get("currency")
        if not currency or not isinstance(currency, str):
            errors.append("budget.currency is required and must be a string (ISO code).")

    deadline = body.get("deadline")
    if not deadline or not isinstance(deadline, str):
        errors.append("deadline is required and must be an ISO date string.")
    elif parse_iso_datetime(deadline) is None:
        errors.append("deadline must be a valid ISO date string.")

    return errors


def validate_estimate_input(body: Any) -> dict:
    """
    추정 입력 검증.

    Args:
        body: JSON 디코딩된 요청 본문

    Returns:
        검증을 통과한 본문

    Raises:
        InputValidationError: 하나 이상의 필드가 누락되었거나 타입이 맞지 않음
    """
    errors = collect_estimate_input_errors(body)
    if errors:
        raise InputValidationError(
            "Missing or invalid estimator input.",
            details=errors,
        )
    return body
