"""Proposal input models."""

from pydantic import BaseModel, Field

from app.models import (
    CostEstimate,
    EstimationSignals,
    Milestone,
    NormalizedInput,
    RiskFlag,
    Task,
)


class ProposalContext(BaseModel):
    """두 제안서 경로(레거시 텍스트, 템플릿 마크다운)가 공유하는 입력."""
    normalized_input: NormalizedInput
    task_breakdown: list[Task] = Field(default_factory=list)
    timeline: list[Milestone] = Field(default_factory=list)
    cost_estimate: CostEstimate
    risk_flags: list[RiskFlag] = Field(default_factory=list)
    estimation_signals: EstimationSignals
