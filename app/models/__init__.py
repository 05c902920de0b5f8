"""Data models for project estimation system."""

from .common import Severity, BudgetStatusCode, DeadlineStatusCode, CamelModel
from .estimate import (
    Budget,
    InputMetadata,
    NormalizedInput,
    Task,
    Milestone,
    CostEstimate,
    RiskFlag,
    SizingTier,
    TaskSizing,
    TimelineModel,
    BudgetStatus,
    DeadlineStatus,
    EstimationSignals,
    EstimateResult,
)
from .error import ErrorResponse

__all__ = [
    # Common
    "Severity",
    "BudgetStatusCode",
    "DeadlineStatusCode",
    "CamelModel",
    # Input models
    "Budget",
    "InputMetadata",
    "NormalizedInput",
    # Estimate models
    "Task",
    "Milestone",
    "CostEstimate",
    "RiskFlag",
    # Signal models
    "SizingTier",
    "TaskSizing",
    "TimelineModel",
    "BudgetStatus",
    "DeadlineStatus",
    "EstimationSignals",
    "EstimateResult",
    # Error models
    "ErrorResponse",
]
