"""Unit tests for input validation utilities.

Tests the request-shape checks applied before estimating or exporting.
Values that pass these checks may still be corrected by the normalizer.
"""

import pytest

from app.exceptions import InputValidationError
from app.utils.validation import collect_estimate_input_errors, validate_estimate_input

MSG_DESCRIPTION = "projectDescription is required and must be a string."
MSG_BUDGET = "budget is required and must be an object."
MSG_AMOUNT = "budget.amount is required and must be a number."
MSG_CURRENCY = "budget.currency is required and must be a string (ISO code)."
MSG_DEADLINE = "deadline is required and must be an ISO date string."
MSG_DEADLINE_FORMAT = "deadline must be a valid ISO date string."


def _make_body(**overrides) -> dict:
    defaults = dict(
        projectDescription="Build a customer portal",
        budget={"amount": 25000, "currency": "USD"},
        deadline="2030-08-01",
    )
    defaults.update(overrides)
    return defaults


class TestCollectErrors:
    def test_valid_body(self):
        assert collect_estimate_input_errors(_make_body()) == []

    def test_empty_body(self):
        assert collect_estimate_input_errors({}) == [MSG_DESCRIPTION, MSG_BUDGET, MSG_DEADLINE]

    @pytest.mark.parametrize("body", [None, [], "text"])
    def test_non_object_body(self, body):
        assert collect_estimate_input_errors(body) == [MSG_DESCRIPTION, MSG_BUDGET, MSG_DEADLINE]

    @pytest.mark.parametrize("description", ["", 42, None])
    def test_bad_description(self, description):
        assert collect_estimate_input_errors(_make_body(projectDescription=description)) == [MSG_DESCRIPTION]

    @pytest.mark.parametrize("amount", ["25000", None, True, float("nan")])
    def test_bad_amount(self, amount):
        body = _make_body(budget={"amount": amount, "currency": "USD"})
        assert collect_estimate_input_errors(body) == [MSG_AMOUNT]

    def test_bad_currency(self):
        body = _make_body(budget={"amount": 1, "currency": ""})
        assert collect_estimate_input_errors(body) == [MSG_CURRENCY]

    def test_budget_not_object(self):
        assert collect_estimate_input_errors(_make_body(budget=25000)) == [MSG_BUDGET]

    def test_deadline_not_string(self):
        assert collect_estimate_input_errors(_make_body(deadline=20300801)) == [MSG_DEADLINE]

    def test_deadline_unparseable(self):
        assert collect_estimate_input_errors(_make_body(deadline="next month")) == [MSG_DEADLINE_FORMAT]

    def test_amount_beyond_float_range(self):
        body = _make_body(budget={"amount": 10**400, "currency": "USD"})
        assert collect_estimate_input_errors(body) == [MSG_AMOUNT]

    def test_infinite_amount_passes_shape_check(self):
        body = _make_body(budget={"amount": float("inf"), "currency": "USD"})
        assert collect_estimate_input_errors(body) == []

    @pytest.mark.parametrize("deadline", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:00:00-05:00"])
    def test_deadline_outside_utc_range(self, deadline):
        assert collect_estimate_input_errors(_make_body(deadline=deadline)) == [MSG_DEADLINE_FORMAT]

    def test_full_datetime_deadline_accepted(self):
        assert collect_estimate_input_errors(_make_body(deadline="2030-08-01T09:30:00Z")) == []


class TestValidateEstimateInput:
    def test_returns_body_when_valid(self):
        body = _make_body()
        assert validate_estimate_input(body) is body

    def test_raises_with_all_messages(self):
        with pytest.raises(InputValidationError) as exc_info:
            validate_estimate_input({"budget": {"amount": 1000, "currency": "USD"}})

        err = exc_info.value
        assert err.message == "Missing or invalid estimator input."
        assert err.details == [MSG_DESCRIPTION, MSG_DEADLINE]
