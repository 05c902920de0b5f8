"""
프로젝트 추정 파이프라인 전체 흐름을 조율하는 서비스입니다.

처리 단계(파이프라인):
1. 정규화 (Normalization): 설명/예산/마감일 입력을 표준 형태로 정리합니다.
2. 생성 (Generation): 작업 분해 → 일정 → 비용 추정 (재시도 + 폴백)
3. 규칙 (Rules): 작업 규모, 예산/마감 상태, 리스크 플래그를 계산합니다.
4. 제안서 (Proposal): 레거시 텍스트 제안서와 템플릿 마크다운 제안서를 만듭니다.

모든 단계는 동기 순수 함수이며 요청 간에 공유되는 상태가 없습니다.
"""

import logging
import time
from datetime import datetime
from typing import Any, Optional

from app.config import Settings, get_settings
from app.layers.layer1_normalization import normalize_input
from app.layers.layer2_generation import (
    generate_cost_estimate,
    generate_task_breakdown,
    generate_timeline,
    validate_rule_risk_flags,
)
from app.layers.layer3_rules import derive_estimation_signals
from app.layers.layer4_proposal import (
    ProposalContext,
    generate_proposal_draft,
    render_proposal,
)
from app.models import EstimateResult
from app.utils.dates import utc_now

logger = logging.getLogger(__name__)


def create_estimate(
    raw_input: Any,
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> EstimateResult:
    """
    원시 입력으로 전체 추정 결과를 생성합니다.

    Args:
        raw_input: {"projectDescription", "budget": {"amount", "currency"}, "deadline"} 형태의 입력
        settings: 설정 (기본값: get_settings())
        now: 기준 시각 (기본값: 현재 UTC). 같은 입력과 같은 now는 같은 결과를 만듭니다.

    Returns:
        EstimateResult
    """
    settings = settings or get_settings()
    now = now or utc_now()
    started = time.perf_counter()

    # ========== 1단계: 정규화 ==========
    normalized = normalize_input(raw_input, now=now)
    logger.info(
        f"[Estimator] 추정 시작: deadline={normalized.deadline}, "
        f"budget={normalized.budget.amount} {normalized.budget.currency}, "
        f"available_days={normalized.metadata.available_duration_days}"
    )

    # ========== 2단계: 생성 ==========
    task_breakdown = generate_task_breakdown(
        normalized.project_description,
        simulate_malformed_output=settings.simulate_malformed_model_output,
    )
    timeline = generate_timeline(task_breakdown, normalized.deadline, now=now)
    cost_estimate = generate_cost_estimate(task_breakdown, normalized.budget)

    # ========== 3단계: 규칙 ==========
    signals = derive_estimation_signals(
        project_description=normalized.project_description,
        task_breakdown=task_breakdown,
        cost_estimate=cost_estimate,
        budget_amount=normalized.budget.amount,
        available_duration_days=normalized.metadata.available_duration_days,
        team_velocity_hours_per_week=settings.team_velocity_hours_per_week,
    )
    risk_flags = validate_rule_risk_flags(signals.risk_flags)

    # ========== 4단계: 제안서 ==========
    context = ProposalContext(
        normalized_input=normalized,
        task_breakdown=task_breakdown,
        timeline=timeline,
        cost_estimate=cost_estimate,
        risk_flags=risk_flags,
        estimation_signals=signals,
    )
    proposal_draft = generate_proposal_draft(context)
    proposal_markdown, proposal_plain_text = render_proposal(
        context, template_path=settings.proposal_template_path
    )

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"[Estimator] 추정 완료: {len(task_breakdown)}개 작업, "
        f"total={cost_estimate.total} {cost_estimate.currency}, "
        f"risks={len(risk_flags)} ({elapsed_ms:.1f}ms)"
    )

    return EstimateResult(
        normalized_input=normalized,
        task_breakdown=task_breakdown,
        timeline=timeline,
        cost_estimate=cost_estimate,
        risk_flags=risk_flags,
        estimation_signals=signals,
        proposal_draft=proposal_draft,
        proposal_markdown=proposal_markdown,
        proposal_plain_text=proposal_plain_text,
    )
