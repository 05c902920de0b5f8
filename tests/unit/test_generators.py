"""Generation stage unit tests.

Tests the deterministic heuristic backends and their stage wrappers,
including the fallback path when a backend keeps producing bad output.
"""

from datetime import datetime, timezone

import pytest

from app.layers.layer2_generation import (
    generate_cost_estimate,
    generate_task_breakdown,
    generate_timeline,
    heuristic_task_breakdown,
    validate_rule_risk_flags,
)
from app.models import Budget, RiskFlag, Severity, Task


def _always_broken(context, attempt):
    return "{not valid json"


@pytest.fixture
def tasks():
    return [
        Task(task="Requirements & Planning", description="Plan", estimated_hours=7),
        Task(task="Development", description="Build", estimated_hours=27),
        Task(task="QA & Handoff", description="Test", estimated_hours=11),
    ]


# ===================================================================
# task breakdown
# ===================================================================

class TestTaskBreakdown:
    def test_empty_description_has_no_boost(self):
        result = heuristic_task_breakdown({"project_description": ""}, 1)
        assert [item["estimatedHours"] for item in result] == [6, 24, 10]

    def test_boost_grows_with_description_length(self):
        result = heuristic_task_breakdown({"project_description": "x" * 121}, 1)
        assert [item["estimatedHours"] for item in result] == [8, 30, 12]

    def test_malformed_output_only_on_first_attempt(self):
        context = {"project_description": "app", "simulate_malformed_output": True}
        assert isinstance(heuristic_task_breakdown(context, 1), str)
        assert isinstance(heuristic_task_breakdown(context, 2), list)

    def test_generate_returns_tasks(self):
        result = generate_task_breakdown("x" * 110)
        assert [task.task for task in result] == [
            "Requirements & Planning",
            "Development",
            "QA & Handoff",
        ]
        assert [task.estimated_hours for task in result] == [7, 27, 11]

    def test_malformed_first_attempt_recovers(self):
        normal = generate_task_breakdown("Build an app")
        recovered = generate_task_breakdown("Build an app", simulate_malformed_output=True)
        assert recovered == normal

    def test_fallback_when_generation_keeps_failing(self):
        result = generate_task_breakdown("Build an app", generate=_always_broken)
        assert [(task.task, task.estimated_hours) for task in result] == [
            ("Discovery & Scoping", 8),
            ("Implementation", 40),
        ]


# ===================================================================
# timeline
# ===================================================================

class TestTimeline:
    def test_milestones_spread_until_deadline(self, tasks, fixed_now):
        result = generate_timeline(tasks, "2030-06-15", now=fixed_now)
        assert [(item.milestone, item.date) for item in result] == [
            ("Requirements & Planning", "2030-02-25"),
            ("Development", "2030-04-21"),
            ("QA & Handoff", "2030-06-15"),
        ]

    def test_past_deadline_clamps_every_milestone(self, tasks):
        now = datetime(2030, 1, 10, tzinfo=timezone.utc)
        result = generate_timeline(tasks, "2030-01-01", now=now)
        assert [item.date for item in result] == ["2030-01-01"] * 3

    def test_short_window_uses_one_day_interval(self, tasks, fixed_now):
        result = generate_timeline(tasks, "2030-01-02", now=fixed_now)
        assert [item.date for item in result] == ["2030-01-02"] * 3

    def test_unparseable_deadline_uses_fallback(self, tasks, fixed_now):
        result = generate_timeline(tasks, "someday", now=fixed_now)
        assert [(item.milestone, item.date) for item in result] == [
            ("Project Kickoff", "someday"),
            ("Final Delivery", "someday"),
        ]


# ===================================================================
# cost estimate
# ===================================================================

class TestCostEstimate:
    def test_cost_derived_from_budget(self, tasks):
        result = generate_cost_estimate(tasks, Budget(amount=18000, currency="USD"))
        assert result.subtotal == 16200
        assert result.contingency == 1620
        assert result.total == 17820
        assert result.currency == "USD"
        assert result.fallback_reason is None
        assert "_fallbackReason" not in result.to_dict()

    def test_zero_budget_gives_zero_cost(self, tasks):
        result = generate_cost_estimate(tasks, Budget(amount=0, currency="EUR"))
        assert result.total == 0
        assert result.currency == "EUR"

    def test_fallback_uses_whole_budget(self, tasks):
        result = generate_cost_estimate(
            tasks, Budget(amount=5000, currency="USD"), generate=_always_broken
        )
        assert result.subtotal == 5000
        assert result.contingency == 0
        assert result.total == 5000
        assert result.fallback_reason == "generateCostEstimate output did not match schema."
        assert result.to_dict()["_fallbackReason"] == result.fallback_reason


# ===================================================================
# risk flag revalidation
# ===================================================================

class TestValidateRuleRiskFlags:
    def test_valid_flags_pass_through(self):
        flags = [RiskFlag(severity=Severity.HIGH, issue="Tight deadline", mitigation="Cut scope")]
        assert validate_rule_risk_flags(flags) == flags
