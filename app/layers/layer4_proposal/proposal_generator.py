"""Proposal generator - converts an estimate into proposal documents.

두 가지 제안서를 만듭니다. 응답 스키마가 두 필드를 따로 노출하므로
서로 합치지 않고 각각 독립된 순수 함수로 유지합니다.
- generate_proposal_draft(): 레거시 일반 텍스트 제안서 (proposalDraft)
- render_proposal(): 템플릿 기반 마크다운 + 일반 텍스트 (proposalMarkdown, proposalPlainText)
"""

import logging
from typing import Optional

from app.models import BudgetStatusCode, DeadlineStatusCode
from app.utils.formatting import format_number, round_half_up

from .models import ProposalContext
from .template_renderer import (
    load_proposal_template,
    markdown_to_plain_text,
    render_template,
)

logger = logging.getLogger(__name__)

THIN_DESCRIPTION_LENGTH = 80
KICKOFF_PAYMENT_SHARE = 0.5

BUDGET_STATUS_LABELS = {
    BudgetStatusCode.WITHIN_BUDGET: "within budget",
    BudgetStatusCode.AT_RISK: "at risk",
    BudgetStatusCode.OVER_BUDGET: "over budget",
}

DEADLINE_STATUS_LABELS = {
    DeadlineStatusCode.ON_TRACK: "on track",
    DeadlineStatusCode.TIGHT: "tight",
    DeadlineStatusCode.UNREALISTIC: "unrealistic",
}

DEFAULT_ASSUMPTIONS = [
    "Client stakeholders are available for weekly reviews and make decisions in a timely manner.",
    "Access to required environments, accounts, and data is provided before development starts.",
    "Work items not listed in the breakdown are handled through a change request.",
]

NEXT_STEPS = [
    "Review this proposal and share questions or corrections.",
    "Confirm scope priorities, budget, and the target delivery date.",
    "Sign off on the payment schedule and project agreement.",
    "Schedule the kickoff meeting and begin requirements and planning.",
]


def generate_proposal_draft(context: ProposalContext) -> str:
    """레거시 일반 텍스트 제안서 생성."""
    signals = context.estimation_signals
    tasks = "\n".join(f"- {task.task}" for task in context.task_breakdown)

    signals_context = " ".join([
        f"Budget status: {signals.budget_status.status.value}.",
        f"Deadline status: {signals.deadline_status.status.value}.",
        f"Required duration: {format_number(signals.timeline_model.required_weeks)} weeks "
        f"({format_number(signals.timeline_model.required_days)} days).",
        f"Detected risks: {', '.join(risk.issue for risk in context.risk_flags)}.",
    ])

    cost = context.cost_estimate
    return "\n".join([
        "Proposed Approach:",
        tasks,
        "",
        f"Target delivery date: {context.normalized_input.deadline}.",
        f"Estimated total: {format_number(cost.total)} {cost.currency}.",
        f"Key risks identified: {len(context.risk_flags)}.",
        "",
        "AI Prompt Context:",
        signals_context,
    ])


def build_proposal_variables(context: ProposalContext) -> dict[str, str]:
    """템플릿 자리표시자 7개에 들어갈 섹션 본문 생성."""
    return {
        "executive_summary": _executive_summary(context),
        "scope_and_assumptions": _scope_and_assumptions(context),
        "work_breakdown": _work_breakdown(context),
        "timeline_and_milestones": _timeline_and_milestones(context),
        "pricing_and_payment": _pricing_and_payment(context),
        "risks_and_mitigations": _risks_and_mitigations(context),
        "next_steps": _next_steps(),
    }


def render_proposal(
    context: ProposalContext,
    template_path: Optional[str] = None,
) -> tuple[str, str]:
    """
    템플릿 기반 제안서 렌더링.

    Returns:
        (마크다운, 일반 텍스트)
    """
    template = load_proposal_template(template_path)
    markdown = render_template(template, build_proposal_variables(context))
    logger.debug(f"[ProposalGenerator] 마크다운 제안서 렌더링 완료: {len(markdown)} chars")
    return markdown, markdown_to_plain_text(markdown)


# ========== 섹션 빌더 ==========

def _executive_summary(context: ProposalContext) -> str:
    normalized = context.normalized_input
    signals = context.estimation_signals
    cost = context.cost_estimate
    description = normalized.project_description or "a project whose scope is still being defined"

    return "\n".join([
        f"This proposal covers the following request: {description}",
        "",
        f"We estimate **{format_number(signals.timeline_model.total_hours)} hours** of work "
        f"across {len(context.task_breakdown)} workstreams, targeting delivery by "
        f"**{normalized.deadline}** for a total of **{format_number(cost.total)} {cost.currency}**.",
        f"The estimate is {BUDGET_STATUS_LABELS[signals.budget_status.status]} and the "
        f"schedule is {DEADLINE_STATUS_LABELS[signals.deadline_status.status]}.",
    ])


def _scope_and_assumptions(context: ProposalContext) -> str:
    normalized = context.normalized_input
    description = normalized.project_description

    assumptions = []
    if len(description) < THIN_DESCRIPTION_LENGTH:
        assumptions.append(
            "The project description is brief; a discovery session will confirm features "
            "and acceptance criteria before development starts."
        )
    if normalized.budget.amount <= 0:
        assumptions.append(
            "No budget was provided; pricing is indicative until a budget is confirmed."
        )
    if normalized.metadata.available_duration_days <= 0:
        assumptions.append(
            "The requested deadline is today or already past; a new delivery date must be agreed."
        )
    assumptions.extend(DEFAULT_ASSUMPTIONS)
    assumptions.append(
        f"Effort is planned at {format_number(context.estimation_signals.timeline_model.team_velocity_hours_per_week)} "
        f"hours per week of team capacity."
    )

    lines = [
        f"**In scope:** {description or 'To be confirmed during discovery.'}",
        "",
        "**Assumptions:**",
    ]
    lines.extend(f"- {assumption}" for assumption in assumptions)
    return "\n".join(lines)


def _work_breakdown(context: ProposalContext) -> str:
    sizing = context.estimation_signals.task_sizing
    model = context.estimation_signals.timeline_model

    lines = []
    for index, task in enumerate(context.task_breakdown):
        tier = sizing[index].tier if index < len(sizing) else "-"
        lines.append(
            f"- **{task.task}** ({format_number(task.estimated_hours)} h, size {tier}): "
            f"{task.description}"
        )
    lines.append("")
    lines.append(
        f"Total effort: **{format_number(model.total_hours)} hours**, about "
        f"{format_number(model.required_weeks)} weeks ({format_number(model.required_days)} working days)."
    )
    return "\n".join(lines)


def _timeline_and_milestones(context: ProposalContext) -> str:
    normalized = context.normalized_input
    deadline_status = context.estimation_signals.deadline_status

    lines = [f"- {item.date}: {item.milestone}" for item in context.timeline]
    lines.append("")
    lines.append(
        f"Target delivery date: **{normalized.deadline}** "
        f"({normalized.metadata.available_duration_days} days available, "
        f"slack of {format_number(deadline_status.slack_days)} working days)."
    )
    return "\n".join(lines)


def _pricing_and_payment(context: ProposalContext) -> str:
    cost = context.cost_estimate
    budget = context.normalized_input.budget
    budget_status = context.estimation_signals.budget_status

    kickoff_payment = round_half_up(cost.total * KICKOFF_PAYMENT_SHARE, 2)
    delivery_payment = round_half_up(cost.total - kickoff_payment, 2)

    lines = [
        f"- Subtotal: {format_number(cost.subtotal)} {cost.currency}",
        f"- Contingency: {format_number(cost.contingency)} {cost.currency}",
        f"- **Total: {format_number(cost.total)} {cost.currency}**",
        "",
        f"Payment assumption: 50% ({format_number(kickoff_payment)} {cost.currency}) due at kickoff "
        f"and 50% ({format_number(delivery_payment)} {cost.currency}) due on final delivery.",
    ]

    if budget_status.utilization is None:
        lines.append("Budget utilization cannot be calculated because no budget was provided.")
    else:
        lines.append(
            f"Budget utilization: {format_number(round_half_up(budget_status.utilization * 100))}% of "
            f"{format_number(budget.amount)} {budget.currency}."
        )
    if budget_status.shortfall:
        lines.append(f"Expected shortfall: {format_number(budget_status.shortfall)} {cost.currency}.")

    return "\n".join(lines)


def _risks_and_mitigations(context: ProposalContext) -> str:
    return "\n".join(
        f"- **[{risk.severity.value.upper()}] {risk.issue}:** {risk.mitigation}"
        for risk in context.risk_flags
    )


def _next_steps() -> str:
    return "\n".join(f"{index}. {step}" for index, step in enumerate(NEXT_STEPS, 1))
