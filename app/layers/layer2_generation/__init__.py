"""Layer 2: Generation - retry/validate/fallback stages for tasks, timeline, cost."""

from .stage_runner import run_stage, safe_json_parse, MAX_ATTEMPTS
from .schemas import (
    validate_task_breakdown,
    validate_timeline,
    validate_cost_estimate,
    validate_risk_flags,
)
from .generators import (
    generate_task_breakdown,
    generate_timeline,
    generate_cost_estimate,
    validate_rule_risk_flags,
    heuristic_task_breakdown,
    heuristic_timeline,
    heuristic_cost_estimate,
)

__all__ = [
    "run_stage",
    "safe_json_parse",
    "MAX_ATTEMPTS",
    "validate_task_breakdown",
    "validate_timeline",
    "validate_cost_estimate",
    "validate_risk_flags",
    "generate_task_breakdown",
    "generate_timeline",
    "generate_cost_estimate",
    "validate_rule_risk_flags",
    "heuristic_task_breakdown",
    "heuristic_timeline",
    "heuristic_cost_estimate",
]
