"""Normalizer (Layer 1) unit tests.

Tests that normalization is total: every malformed field degrades to a safe
default instead of raising.
- budget amount parsing (numbers, formatted strings, garbage)
- currency cleanup
- deadline parsing and available-duration metadata
"""

import pytest
from pydantic import ValidationError

from app.layers.layer1_normalization import Normalizer, normalize_input


def _make_raw_input(**overrides) -> dict:
    """Helper to build a raw estimator input with sensible defaults."""
    defaults = dict(
        projectDescription="  Build a booking app  ",
        budget={"amount": 12000, "currency": "usd"},
        deadline="2030-01-31",
    )
    defaults.update(overrides)
    return defaults


# ===================================================================
# budget amount
# ===================================================================

class TestBudgetAmount:
    def test_integer_amount_kept_as_is(self, fixed_now):
        result = normalize_input(_make_raw_input(), now=fixed_now)
        assert result.budget.amount == 12000
        assert isinstance(result.budget.amount, int)

    def test_formatted_string_amount(self, fixed_now):
        result = normalize_input(
            _make_raw_input(budget={"amount": "$18,000.50", "currency": "USD"}), now=fixed_now
        )
        assert result.budget.amount == 18000.5

    def test_negative_string_amount(self, fixed_now):
        result = normalize_input(
            _make_raw_input(budget={"amount": "-12.5 dollars", "currency": "USD"}), now=fixed_now
        )
        assert result.budget.amount == -12.5

    def test_multiple_dots_reads_leading_number(self, fixed_now):
        result = normalize_input(
            _make_raw_input(budget={"amount": "1.2.3", "currency": "USD"}), now=fixed_now
        )
        assert result.budget.amount == 1.2

    @pytest.mark.parametrize("amount", ["abc", "", None, float("inf"), float("nan"), [1, 2], True])
    def test_unparseable_amount_becomes_zero(self, fixed_now, amount):
        result = normalize_input(
            _make_raw_input(budget={"amount": amount, "currency": "USD"}), now=fixed_now
        )
        assert result.budget.amount == 0

    def test_integer_beyond_float_range_becomes_zero(self, fixed_now):
        """float로 바꿀 수 없는 큰 JSON 정수도 예외 없이 0으로 처리"""
        result = normalize_input(
            _make_raw_input(budget={"amount": 10**400, "currency": "USD"}), now=fixed_now
        )
        assert result.budget.amount == 0

    def test_large_integer_within_float_range_kept(self, fixed_now):
        result = normalize_input(
            _make_raw_input(budget={"amount": 10**20, "currency": "USD"}), now=fixed_now
        )
        assert result.budget.amount == 10**20

    def test_budget_not_a_mapping(self, fixed_now):
        result = normalize_input(_make_raw_input(budget="lots"), now=fixed_now)
        assert result.budget.amount == 0
        assert result.budget.currency == "USD"


# ===================================================================
# currency
# ===================================================================

class TestBudgetCurrency:
    def test_currency_upper_cased(self, fixed_now):
        result = normalize_input(_make_raw_input(), now=fixed_now)
        assert result.budget.currency == "USD"

    def test_currency_trimmed_and_truncated(self, fixed_now):
        result = normalize_input(
            _make_raw_input(budget={"amount": 1, "currency": "  dollars "}), now=fixed_now
        )
        assert result.budget.currency == "DOL"

    @pytest.mark.parametrize("currency", [None, "", "   ", 840])
    def test_missing_currency_defaults_to_usd(self, fixed_now, currency):
        result = normalize_input(
            _make_raw_input(budget={"amount": 1, "currency": currency}), now=fixed_now
        )
        assert result.budget.currency == "USD"


# ===================================================================
# deadline
# ===================================================================

class TestDeadline:
    def test_future_deadline_metadata(self, fixed_now):
        result = normalize_input(_make_raw_input(deadline="2030-01-11"), now=fixed_now)
        assert result.deadline == "2030-01-11"
        assert result.metadata.available_duration_days == 10
        assert result.metadata.available_duration_weeks == 1.4
        assert result.metadata.is_past_deadline is False

    def test_partial_day_rounds_up(self, fixed_now):
        result = normalize_input(_make_raw_input(deadline="2030-01-01T12:00:00Z"), now=fixed_now)
        assert result.metadata.available_duration_days == 1
        assert result.deadline == "2030-01-01"

    def test_past_deadline(self, fixed_now):
        result = normalize_input(_make_raw_input(deadline="2029-12-31"), now=fixed_now)
        assert result.metadata.available_duration_days == -1
        assert result.metadata.is_past_deadline is True

    def test_deadline_today(self, fixed_now):
        result = normalize_input(_make_raw_input(deadline="2030-01-01"), now=fixed_now)
        assert result.metadata.available_duration_days == 0
        assert result.metadata.is_past_deadline is False

    @pytest.mark.parametrize("deadline", ["not-a-date", "", None, 20300101])
    def test_invalid_deadline_falls_back_to_thirty_days(self, fixed_now, deadline):
        result = normalize_input(_make_raw_input(deadline=deadline), now=fixed_now)
        assert result.deadline == "2030-01-31"
        assert result.metadata.available_duration_days == 30
        assert result.metadata.available_duration_weeks == 4.3

    @pytest.mark.parametrize("deadline", [
        "0001-01-01T00:00:00+01:00",
        "9999-12-31T23:00:00-05:00",
    ])
    def test_deadline_outside_utc_range_falls_back(self, fixed_now, deadline):
        """UTC 변환 시 datetime 범위를 벗어나는 마감일은 30일 기본값"""
        result = normalize_input(_make_raw_input(deadline=deadline), now=fixed_now)
        assert result.deadline == "2030-01-31"
        assert result.metadata.available_duration_days == 30


# ===================================================================
# whole input
# ===================================================================

class TestNormalize:
    def test_description_trimmed(self, fixed_now):
        result = normalize_input(_make_raw_input(), now=fixed_now)
        assert result.project_description == "Build a booking app"

    @pytest.mark.parametrize("raw", [None, "text", 42, []])
    def test_non_mapping_input_uses_defaults(self, fixed_now, raw):
        result = Normalizer().normalize(raw, now=fixed_now)
        assert result.project_description == ""
        assert result.budget.amount == 0
        assert result.budget.currency == "USD"
        assert result.metadata.available_duration_days == 30

    def test_normalized_input_is_frozen(self, fixed_now):
        result = normalize_input(_make_raw_input(), now=fixed_now)
        with pytest.raises(ValidationError):
            result.deadline = "2031-01-01"

    def test_camel_case_serialization(self, fixed_now):
        data = normalize_input(_make_raw_input(), now=fixed_now).to_dict()
        assert data["projectDescription"] == "Build a booking app"
        assert data["metadata"]["availableDurationDays"] == 30
        assert data["metadata"]["isPastDeadline"] is False
