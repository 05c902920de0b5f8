"""Risk detectors.

각 감지기는 RiskContext를 받아 RiskFlag 또는 None을 반환하는 독립 함수입니다.
RISK_DETECTORS의 순서가 곧 리스크 목록의 표시 순서입니다.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from app.models import (
    BudgetStatus,
    BudgetStatusCode,
    DeadlineStatus,
    DeadlineStatusCode,
    RiskFlag,
    Severity,
)

UNCLEAR_SCOPE_MIN_LENGTH = 80

UNCLEAR_SCOPE_PATTERN = re.compile(
    r"(tbd|etc\.|and more|something like|to be decided|as needed)",
    re.IGNORECASE,
)
EXTERNAL_DEPENDENCY_PATTERN = re.compile(
    r"(third[- ]party|vendor|integration|dependency|api|payment gateway|external service)",
    re.IGNORECASE,
)

NO_RISK_FLAG = RiskFlag(
    severity=Severity.LOW,
    issue="No immediate execution risks detected",
    mitigation="Maintain weekly checkpoints to keep scope, schedule, and budget aligned.",
)


@dataclass(frozen=True)
class RiskContext:
    """리스크 감지에 필요한 입력 묶음."""
    project_description: str
    budget_status: BudgetStatus
    deadline_status: DeadlineStatus


RiskDetector = Callable[[RiskContext], Optional[RiskFlag]]


def detect_unclear_scope(project_description: str) -> bool:
    """설명이 80자 미만이거나 모호한 표현(tbd, etc. 등)을 포함하는지."""
    if not project_description or len(project_description) < UNCLEAR_SCOPE_MIN_LENGTH:
        return True
    return bool(UNCLEAR_SCOPE_PATTERN.search(project_description))


def detect_external_dependencies(project_description: str) -> bool:
    """외부 연동/벤더 의존 표현을 포함하는지."""
    return bool(EXTERNAL_DEPENDENCY_PATTERN.search(project_description or ""))


def unclear_scope_risk(context: RiskContext) -> Optional[RiskFlag]:
    if not detect_unclear_scope(context.project_description):
        return None
    return RiskFlag(
        severity=Severity.MEDIUM,
        issue="Unclear scope",
        mitigation="Run a scoping workshop, define acceptance criteria, and baseline assumptions.",
    )


def deadline_risk(context: RiskContext) -> Optional[RiskFlag]:
    status = context.deadline_status.status
    if status == DeadlineStatusCode.ON_TRACK:
        return None
    return RiskFlag(
        severity=Severity.HIGH if status == DeadlineStatusCode.UNREALISTIC else Severity.MEDIUM,
        issue="Tight deadline",
        mitigation="Reduce scope to MVP, parallelize workstreams, and lock milestone decisions weekly.",
    )


def budget_risk(context: RiskContext) -> Optional[RiskFlag]:
    status = context.budget_status.status
    if status == BudgetStatusCode.WITHIN_BUDGET:
        return None
    return RiskFlag(
        severity=Severity.HIGH if status == BudgetStatusCode.OVER_BUDGET else Severity.MEDIUM,
        issue="Budget shortfall",
        mitigation="Prioritize highest-value features and phase non-critical deliverables into later releases.",
    )


def external_dependency_risk(context: RiskContext) -> Optional[RiskFlag]:
    if not detect_external_dependencies(context.project_description):
        return None
    return RiskFlag(
        severity=Severity.MEDIUM,
        issue="External dependencies",
        mitigation="Confirm third-party SLAs, identify fallback options, and track integration blockers early.",
    )


# 순서 고정: 범위 → 일정 → 예산 → 외부 의존성
RISK_DETECTORS: list[RiskDetector] = [
    unclear_scope_risk,
    deadline_risk,
    budget_risk,
    external_dependency_risk,
]
