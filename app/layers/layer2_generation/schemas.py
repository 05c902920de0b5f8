"""Per-stage output schemas.

생성 단계 출력이 JSON 계약을 만족하는지 판정하는 검증 함수 모음입니다.
모든 함수는 bool만 반환하며 예외를 던지지 않습니다.
"""

from collections.abc import Mapping
from typing import Any

from app.utils.formatting import is_number

SEVERITIES = ("low", "medium", "high")


def _is_non_empty_list(data: Any) -> bool:
    return isinstance(data, list) and len(data) > 0


def validate_task_breakdown(data: Any) -> bool:
    """[{task: str, description: str, estimatedHours: number}, ...] (비어있지 않음)."""
    return _is_non_empty_list(data) and all(
        isinstance(item, Mapping)
        and isinstance(item.get("task"), str)
        and isinstance(item.get("description"), str)
        and is_number(item.get("estimatedHours"))
        for item in data
    )


def validate_timeline(data: Any) -> bool:
    """[{milestone: str, date: str}, ...] (비어있지 않음)."""
    return _is_non_empty_list(data) and all(
        isinstance(item, Mapping)
        and isinstance(item.get("milestone"), str)
        and isinstance(item.get("date"), str)
        for item in data
    )


def validate_cost_estimate(data: Any) -> bool:
    """{subtotal: number, contingency: number, total: number, currency: str}."""
    return (
        isinstance(data, Mapping)
        and is_number(data.get("subtotal"))
        and is_number(data.get("contingency"))
        and is_number(data.get("total"))
        and isinstance(data.get("currency"), str)
    )


def validate_risk_flags(data: Any) -> bool:
    """[{severity: low|medium|high, issue: str, mitigation: str}, ...] (비어있지 않음)."""
    return _is_non_empty_list(data) and all(
        isinstance(item, Mapping)
        and item.get("severity") in SEVERITIES
        and isinstance(item.get("issue"), str)
        and isinstance(item.get("mitigation"), str)
        for item in data
    )
