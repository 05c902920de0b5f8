"""Generation stages - deterministic heuristic backends.

Layer 2: 생성 단계
작업 분해, 일정, 비용 추정을 만들어 냅니다. 각 단계는
(1) 휴리스틱 생성 함수(heuristic_*)와 (2) 이를 run_stage로 감싸
모델 객체로 변환하는 공개 함수(generate_*)로 나뉩니다.

생성 함수는 JSON 호환 값(dict/list) 또는 JSON 문자열을 반환하므로,
같은 시그니처의 다른 백엔드로 교체할 수 있습니다.
"""

import math
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from app.exceptions import GenerationError
from app.models import Budget, CostEstimate, Milestone, RiskFlag, Task
from app.utils.dates import parse_iso_datetime, to_iso_date, utc_now
from app.utils.formatting import round_half_up

from .schemas import (
    validate_cost_estimate,
    validate_risk_flags,
    validate_task_breakdown,
    validate_timeline,
)
from .stage_runner import run_stage

StageGenerate = Callable[[dict, int], Any]

MALFORMED_OUTPUT = "{not valid json"
COMPLEXITY_CHARS_PER_POINT = 120
CONTINGENCY_RATE = 0.1
DELIVERY_SHARE = 0.9

TASK_BREAKDOWN_FALLBACK = [
    {
        "task": "Discovery & Scoping",
        "description": "Review requirements and confirm assumptions.",
        "estimatedHours": 8,
    },
    {
        "task": "Implementation",
        "description": "Deliver the core feature set in iterative milestones.",
        "estimatedHours": 40,
    },
]


# ========== 휴리스틱 생성 함수 ==========

def heuristic_task_breakdown(context: dict, attempt: int) -> Any:
    """
    설명 길이 기반 3단계 작업 분해.

    complexity_boost = ceil(설명 길이 / 120) 만큼 각 작업 시간을 늘립니다.
    진단 스위치가 켜져 있으면 첫 시도에서 깨진 JSON을 반환합니다.
    """
    description = context["project_description"]
    complexity_boost = max(0, math.ceil(len(description) / COMPLEXITY_CHARS_PER_POINT))

    if attempt == 1 and context.get("simulate_malformed_output"):
        return MALFORMED_OUTPUT

    return [
        {
            "task": "Requirements & Planning",
            "description": "Clarify acceptance criteria and implementation details.",
            "estimatedHours": 6 + complexity_boost,
        },
        {
            "task": "Development",
            "description": "Build and refine the requested product functionality.",
            "estimatedHours": 24 + complexity_boost * 3,
        },
        {
            "task": "QA & Handoff",
            "description": "Test, fix issues, and prepare delivery documentation.",
            "estimatedHours": 10 + complexity_boost,
        },
    ]


def heuristic_timeline(context: dict, attempt: int) -> Any:
    """
    작업마다 마일스톤 하나를 오늘~마감일 사이에 균등 배치.

    간격 = max(1일, 남은 기간 / max(2, 작업 수)), 각 날짜는 마감일로 clamp.
    간격이 짧으면 같은 날짜가 여러 번 나올 수 있습니다.
    """
    tasks = context["task_breakdown"]
    end_date = parse_iso_datetime(context["deadline"])
    if end_date is None:
        raise GenerationError(f"Unparseable deadline: {context['deadline']!r}")

    start_date: datetime = context["now"]
    milestone_count = max(2, len(tasks))
    interval = max(timedelta(days=1), (end_date - start_date) / milestone_count)

    milestones = []
    for index, task in enumerate(tasks):
        milestone_date = start_date + interval * (index + 1)
        clamped_date = end_date if milestone_date > end_date else milestone_date
        milestones.append({
            "milestone": task["task"],
            "date": to_iso_date(clamped_date),
        })
    return milestones


def heuristic_cost_estimate(context: dict, attempt: int) -> Any:
    """
    예산에서 역산한 시간당 단가로 비용 계산.

    subtotal은 예산의 90%, contingency는 subtotal의 10%가 됩니다.
    """
    total_hours = sum(task["estimatedHours"] for task in context["task_breakdown"])
    budget_amount = context["budget"]["amount"]
    hourly_rate = budget_amount / total_hours if total_hours > 0 else budget_amount

    subtotal = round_half_up(hourly_rate * total_hours * DELIVERY_SHARE, 2)
    contingency = round_half_up(subtotal * CONTINGENCY_RATE, 2)

    return {
        "subtotal": subtotal,
        "contingency": contingency,
        "total": round_half_up(subtotal + contingency, 2),
        "currency": context["budget"]["currency"],
    }


def passthrough_risk_flags(context: dict, attempt: int) -> Any:
    """규칙 엔진이 만든 리스크 플래그를 그대로 반환."""
    return context["risk_flags"]


# ========== 공개 단계 함수 ==========

def generate_task_breakdown(
    project_description: str,
    simulate_malformed_output: bool = False,
    generate: StageGenerate = heuristic_task_breakdown,
) -> list[Task]:
    """작업 분해 단계 실행."""
    raw = run_stage(
        stage_name="generateTaskBreakdown",
        context={
            "project_description": project_description,
            "simulate_malformed_output": simulate_malformed_output,
        },
        generate=generate,
        validate=validate_task_breakdown,
        fallback=TASK_BREAKDOWN_FALLBACK,
    )
    return [Task.model_validate(item) for item in raw]


def generate_timeline(
    task_breakdown: list[Task],
    deadline: str,
    now: Optional[datetime] = None,
    generate: StageGenerate = heuristic_timeline,
) -> list[Milestone]:
    """일정 단계 실행. 폴백은 착수/완료 모두 마감일."""
    raw = run_stage(
        stage_name="generateTimeline",
        context={
            "task_breakdown": [task.to_dict() for task in task_breakdown],
            "deadline": deadline,
            "now": now or utc_now(),
        },
        generate=generate,
        validate=validate_timeline,
        fallback=[
            {"milestone": "Project Kickoff", "date": deadline},
            {"milestone": "Final Delivery", "date": deadline},
        ],
    )
    return [Milestone.model_validate(item) for item in raw]


def generate_cost_estimate(
    task_breakdown: list[Task],
    budget: Budget,
    generate: StageGenerate = heuristic_cost_estimate,
) -> CostEstimate:
    """비용 추정 단계 실행. 폴백은 예산 전액을 subtotal/total로 사용."""
    raw = run_stage(
        stage_name="generateCostEstimate",
        context={
            "task_breakdown": [task.to_dict() for task in task_breakdown],
            "budget": budget.to_dict(),
        },
        generate=generate,
        validate=validate_cost_estimate,
        fallback={
            "subtotal": budget.amount,
            "contingency": 0,
            "total": budget.amount,
            "currency": budget.currency,
        },
    )
    return CostEstimate.model_validate(raw)


def validate_rule_risk_flags(risk_flags: list[RiskFlag]) -> list[RiskFlag]:
    """
    규칙 엔진 리스크 플래그를 스키마 검증 단계에 한 번 더 통과.

    규칙 엔진 출력은 이미 유효하므로 보통은 그대로 반환됩니다.
    """
    flags = [flag.to_dict() for flag in risk_flags]
    raw = run_stage(
        stage_name="validateRuleRiskFlags",
        context={"risk_flags": flags},
        generate=passthrough_risk_flags,
        validate=validate_risk_flags,
        fallback=flags,
    )
    return [RiskFlag.model_validate(item) for item in raw]
