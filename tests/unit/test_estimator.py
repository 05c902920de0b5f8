"""Estimator service end-to-end tests.

Runs the whole pipeline (normalize → generate → rules → proposal) on a
fixed clock and checks the stable parts of the result.
"""

from app.config import Settings
from app.models import BudgetStatusCode, DeadlineStatusCode, Severity
from app.services.estimator import create_estimate

RESULT_FIELDS = [
    "normalizedInput",
    "taskBreakdown",
    "timeline",
    "costEstimate",
    "riskFlags",
    "estimationSignals",
    "proposalDraft",
    "proposalMarkdown",
    "proposalPlainText",
]


class TestCreateEstimate:
    def test_result_fields(self, sample_estimate):
        data = sample_estimate.to_dict()
        for field in RESULT_FIELDS:
            assert field in data
        assert "_fallbackReason" not in data["costEstimate"]

    def test_golden_values(self, sample_estimate):
        assert [(task.task, task.estimated_hours) for task in sample_estimate.task_breakdown] == [
            ("Requirements & Planning", 7),
            ("Development", 27),
            ("QA & Handoff", 11),
        ]
        assert [item.date for item in sample_estimate.timeline] == [
            "2030-02-25",
            "2030-04-21",
            "2030-06-15",
        ]
        cost = sample_estimate.cost_estimate
        assert (cost.subtotal, cost.contingency, cost.total, cost.currency) == (16200, 1620, 17820, "USD")

        signals = sample_estimate.estimation_signals
        assert signals.budget_status.status == BudgetStatusCode.AT_RISK
        assert signals.budget_status.utilization == 0.99
        assert signals.deadline_status.status == DeadlineStatusCode.ON_TRACK
        assert signals.deadline_status.slack_days == 157.5
        assert [item.tier for item in signals.task_sizing] == ["S", "L", "M"]

    def test_risk_flags(self, sample_estimate):
        assert [(flag.issue, flag.severity) for flag in sample_estimate.risk_flags] == [
            ("Budget shortfall", Severity.MEDIUM),
            ("External dependencies", Severity.MEDIUM),
        ]
        assert sample_estimate.risk_flags == sample_estimate.estimation_signals.risk_flags

    def test_idempotent_for_same_clock(self, sample_input, settings, fixed_now):
        first = create_estimate(sample_input, settings=settings, now=fixed_now)
        second = create_estimate(sample_input, settings=settings, now=fixed_now)
        assert first.to_dict() == second.to_dict()

    def test_malformed_model_output_still_returns_tasks(self, sample_input, sample_estimate, fixed_now):
        settings = Settings(_env_file=None, simulate_malformed_model_output=True)
        result = create_estimate(sample_input, settings=settings, now=fixed_now)
        assert result.task_breakdown == sample_estimate.task_breakdown
        assert all(isinstance(task.task, str) for task in result.task_breakdown)

    def test_team_velocity_setting(self, sample_input, fixed_now):
        settings = Settings(_env_file=None, team_velocity_hours_per_week=15)
        result = create_estimate(sample_input, settings=settings, now=fixed_now)
        assert result.estimation_signals.timeline_model.required_weeks == 3
        assert "15 hours per week" in result.proposal_markdown

    def test_custom_template(self, sample_input, fixed_now, tmp_path):
        template = tmp_path / "short.md"
        template.write_text("# Quote\n\n{{pricing_and_payment}}", encoding="utf-8")
        settings = Settings(_env_file=None, proposal_template_path=str(template))

        result = create_estimate(sample_input, settings=settings, now=fixed_now)

        assert result.proposal_markdown.startswith("# Quote")
        assert result.proposal_plain_text.startswith("Quote")

    def test_garbage_input_never_raises(self, settings, fixed_now):
        result = create_estimate({"budget": "n/a", "deadline": "soon"}, settings=settings, now=fixed_now)

        assert result.normalized_input.deadline == "2030-01-31"
        assert result.cost_estimate.total == 0
        assert result.estimation_signals.budget_status.status == BudgetStatusCode.OVER_BUDGET
        assert result.risk_flags[0].issue == "Unclear scope"
        assert "No budget was provided" in result.proposal_markdown

    def test_oversized_values_never_raise(self, settings, fixed_now):
        raw_input = {
            "projectDescription": "Build a portal",
            "budget": {"amount": 10**400, "currency": "USD"},
            "deadline": "9999-12-31T23:00:00-05:00",
        }
        result = create_estimate(raw_input, settings=settings, now=fixed_now)

        assert result.normalized_input.budget.amount == 0
        assert result.normalized_input.deadline == "2030-01-31"
        assert result.estimation_signals.budget_status.status == BudgetStatusCode.OVER_BUDGET
