"""Estimation rule engine for Layer 3.

Layer 3: 규칙 엔진
작업 규모 분류, 일정/예산 실현 가능성, 리스크 플래그를 계산합니다.

모든 함수는 순수 함수입니다:
- 같은 입력이면 항상 같은 결과
- 재시도/폴백 없음 (유효한 입력에서는 실패하지 않음)
- 상태를 저장하지 않음

판정 기준:
- 예산: 사용률 ≤ 0.95 within_budget, ≤ 1.10 at_risk, 그 외 over_budget
- 마감일: 필요일/가용일 ≤ 0.8 on_track, ≤ 1.0 tight, 그 외 unrealistic
"""

from typing import Iterable, Optional

from app.models import (
    BudgetStatus,
    BudgetStatusCode,
    CostEstimate,
    DeadlineStatus,
    DeadlineStatusCode,
    EstimationSignals,
    RiskFlag,
    SizingTier,
    Task,
    TaskSizing,
    TimelineModel,
)
from app.utils.formatting import round_half_up

from .risk_detectors import NO_RISK_FLAG, RISK_DETECTORS, RiskContext, RiskDetector

DEFAULT_TEAM_VELOCITY_HOURS_PER_WEEK = 30
WORK_DAYS_PER_WEEK = 5

WITHIN_BUDGET_MAX_UTILIZATION = 0.95
AT_RISK_MAX_UTILIZATION = 1.10
ON_TRACK_MAX_RATIO = 0.8
TIGHT_MAX_RATIO = 1.0

# 상한 포함 구간. XL은 상한 없음.
TASK_SIZING_TIERS: dict[str, SizingTier] = {
    "S": SizingTier(min_hours=1, max_hours=8),
    "M": SizingTier(min_hours=9, max_hours=24),
    "L": SizingTier(min_hours=25, max_hours=56),
    "XL": SizingTier(min_hours=57, max_hours=None),
}


def get_task_tier(estimated_hours: float) -> str:
    """작업 시간 → S/M/L/XL."""
    for tier, bounds in TASK_SIZING_TIERS.items():
        if bounds.max_hours is None or estimated_hours <= bounds.max_hours:
            return tier
    return "XL"


def build_task_sizing(task_breakdown: list[Task]) -> list[TaskSizing]:
    """작업별 규모 분류."""
    sizing = []
    for task in task_breakdown:
        tier = get_task_tier(task.estimated_hours)
        sizing.append(TaskSizing(
            task=task.task,
            estimated_hours=task.estimated_hours,
            tier=tier,
            default_range=TASK_SIZING_TIERS[tier],
        ))
    return sizing


def hours_to_timeline(
    total_hours: float,
    team_velocity_hours_per_week: float = DEFAULT_TEAM_VELOCITY_HOURS_PER_WEEK,
) -> TimelineModel:
    """
    총 작업 시간 → 필요 주/일수.

    velocity가 0 이하이면 기본값(주당 30시간)을 사용합니다.
    """
    safe_velocity = (
        team_velocity_hours_per_week
        if team_velocity_hours_per_week > 0
        else DEFAULT_TEAM_VELOCITY_HOURS_PER_WEEK
    )
    required_weeks = total_hours / safe_velocity if total_hours > 0 else 0
    required_days = required_weeks * WORK_DAYS_PER_WEEK

    return TimelineModel(
        total_hours=total_hours,
        team_velocity_hours_per_week=safe_velocity,
        required_weeks=round_half_up(required_weeks, 2),
        required_days=round_half_up(required_days, 1),
    )


def get_budget_status(estimated_total_cost: float, provided_budget: float) -> BudgetStatus:
    """
    예산 적합도 판정.

    예산이 0 이하이면 무조건 over_budget이며, 이때 shortfall은
    반올림하지 않은 비용 전액입니다.
    """
    if provided_budget <= 0:
        return BudgetStatus(
            status=BudgetStatusCode.OVER_BUDGET,
            utilization=None,
            shortfall=estimated_total_cost,
        )

    utilization = estimated_total_cost / provided_budget

    if utilization <= WITHIN_BUDGET_MAX_UTILIZATION:
        return BudgetStatus(
            status=BudgetStatusCode.WITHIN_BUDGET,
            utilization=round_half_up(utilization, 2),
            shortfall=0,
        )

    shortfall = round_half_up(max(0, estimated_total_cost - provided_budget), 2)

    if utilization <= AT_RISK_MAX_UTILIZATION:
        return BudgetStatus(
            status=BudgetStatusCode.AT_RISK,
            utilization=round_half_up(utilization, 2),
            shortfall=shortfall,
        )

    return BudgetStatus(
        status=BudgetStatusCode.OVER_BUDGET,
        utilization=round_half_up(utilization, 2),
        shortfall=shortfall,
    )


def get_deadline_status(required_days: float, available_days: float) -> DeadlineStatus:
    """
    마감일 실현 가능성 판정.

    남은 일수가 0 이하이면 unrealistic이며 여유일은 -required_days입니다.
    """
    if available_days <= 0:
        return DeadlineStatus(
            status=DeadlineStatusCode.UNREALISTIC,
            slack_days=round_half_up(-required_days, 1),
        )

    ratio = required_days / available_days
    slack_days = round_half_up(available_days - required_days, 1)

    if ratio <= ON_TRACK_MAX_RATIO:
        status = DeadlineStatusCode.ON_TRACK
    elif ratio <= TIGHT_MAX_RATIO:
        status = DeadlineStatusCode.TIGHT
    else:
        status = DeadlineStatusCode.UNREALISTIC

    return DeadlineStatus(status=status, slack_days=slack_days)


def build_risk_flags(
    project_description: str,
    budget_status: BudgetStatus,
    deadline_status: DeadlineStatus,
    detectors: Optional[Iterable[RiskDetector]] = None,
) -> list[RiskFlag]:
    """
    리스크 감지기를 순서대로 실행하여 플래그 목록 생성.

    아무 감지기도 반응하지 않으면 낮은 심각도의 "리스크 없음" 플래그
    하나를 반환합니다. 결과 목록은 절대 비어있지 않습니다.
    """
    context = RiskContext(
        project_description=project_description,
        budget_status=budget_status,
        deadline_status=deadline_status,
    )

    flags = []
    for detector in detectors if detectors is not None else RISK_DETECTORS:
        flag = detector(context)
        if flag is not None:
            flags.append(flag)

    if not flags:
        flags.append(NO_RISK_FLAG.model_copy())

    return flags


def derive_estimation_signals(
    project_description: str,
    task_breakdown: list[Task],
    cost_estimate: CostEstimate,
    budget_amount: float,
    available_duration_days: int,
    team_velocity_hours_per_week: float = DEFAULT_TEAM_VELOCITY_HOURS_PER_WEEK,
) -> EstimationSignals:
    """작업/비용/예산/가용 기간으로부터 전체 추정 신호 계산."""
    task_sizing = build_task_sizing(task_breakdown)
    total_hours = sum(task.estimated_hours for task in task_breakdown)
    timeline_model = hours_to_timeline(total_hours, team_velocity_hours_per_week)
    budget_status = get_budget_status(cost_estimate.total, budget_amount)
    deadline_status = get_deadline_status(timeline_model.required_days, available_duration_days)
    risk_flags = build_risk_flags(project_description, budget_status, deadline_status)

    return EstimationSignals(
        sizing_tiers=dict(TASK_SIZING_TIERS),
        task_sizing=task_sizing,
        timeline_model=timeline_model,
        budget_status=budget_status,
        deadline_status=deadline_status,
        risk_flags=risk_flags,
    )
