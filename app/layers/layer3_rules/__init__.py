"""Layer 3: Rule Engine - sizing tiers, feasibility signals and risk flags."""

from .estimation_rules import (
    TASK_SIZING_TIERS,
    DEFAULT_TEAM_VELOCITY_HOURS_PER_WEEK,
    get_task_tier,
    build_task_sizing,
    hours_to_timeline,
    get_budget_status,
    get_deadline_status,
    build_risk_flags,
    derive_estimation_signals,
)
from .risk_detectors import (
    RiskContext,
    RISK_DETECTORS,
    detect_unclear_scope,
    detect_external_dependencies,
)

__all__ = [
    "TASK_SIZING_TIERS",
    "DEFAULT_TEAM_VELOCITY_HOURS_PER_WEEK",
    "get_task_tier",
    "build_task_sizing",
    "hours_to_timeline",
    "get_budget_status",
    "get_deadline_status",
    "build_risk_flags",
    "derive_estimation_signals",
    "RiskContext",
    "RISK_DETECTORS",
    "detect_unclear_scope",
    "detect_external_dependencies",
]
