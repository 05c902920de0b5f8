"""공유 pytest fixture 모음."""

import pytest
from datetime import datetime, timezone

from app.config import Settings
from app.models import BudgetStatus, BudgetStatusCode, DeadlineStatus, DeadlineStatusCode
from app.services.estimator import create_estimate


@pytest.fixture
def fixed_now():
    """모든 날짜 계산의 기준 시각 (2030-01-01 00:00 UTC)."""
    return datetime(2030, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def settings():
    """.env 파일을 읽지 않는 기본 Settings."""
    return Settings(_env_file=None)


@pytest.fixture
def sample_input():
    """외부 연동이 포함된 일반적인 추정 입력."""
    return {
        "projectDescription": (
            "Create a B2B onboarding workflow with admin review, notifications, "
            "analytics, and third-party CRM integration."
        ),
        "budget": {"amount": 18000, "currency": "USD"},
        "deadline": "2030-06-15",
    }


@pytest.fixture
def clear_description():
    """리스크 감지기에 걸리지 않는 80자 이상의 설명."""
    return (
        "Build an internal reporting dashboard for the finance team "
        "with role based access and CSV export."
    )


@pytest.fixture
def sample_estimate(sample_input, settings, fixed_now):
    """sample_input으로 생성한 EstimateResult."""
    return create_estimate(sample_input, settings=settings, now=fixed_now)


@pytest.fixture
def within_budget():
    return BudgetStatus(status=BudgetStatusCode.WITHIN_BUDGET, utilization=0.5, shortfall=0)


@pytest.fixture
def on_track():
    return DeadlineStatus(status=DeadlineStatusCode.ON_TRACK, slack_days=40)
