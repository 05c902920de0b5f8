"""Estimate data models.

한 번의 추정 요청에서 만들어지는 모든 엔티티를 정의합니다.
모든 객체는 요청 단위로 새로 생성되고 응답 후 버려집니다 (요청 간 공유 없음).
"""

from typing import Optional, Union

from pydantic import ConfigDict, Field, model_serializer

from app.models.common import (
    CamelModel,
    Severity,
    BudgetStatusCode,
    DeadlineStatusCode,
)

Number = Union[int, float]


class Budget(CamelModel):
    """정규화된 예산."""
    model_config = ConfigDict(frozen=True)

    amount: Number = Field(0, description="예산 금액")
    currency: str = Field("USD", description="3자리 통화 코드")


class InputMetadata(CamelModel):
    """마감일로부터 계산된 가용 기간 정보."""
    model_config = ConfigDict(frozen=True)

    available_duration_days: int = Field(..., description="오늘부터 마감일까지 남은 일수 (음수 가능)")
    available_duration_weeks: float = Field(..., description="남은 주수 (소수 1자리)")
    is_past_deadline: bool = Field(..., description="마감일이 이미 지났는지 여부")


class NormalizedInput(CamelModel):
    """정규화된 추정 입력. 생성 후 변경 불가."""
    model_config = ConfigDict(frozen=True)

    project_description: str = Field("", description="프로젝트 설명")
    budget: Budget = Field(default_factory=Budget)
    deadline: str = Field(..., description="마감일 (YYYY-MM-DD)")
    metadata: InputMetadata


class Task(CamelModel):
    """작업 항목. 목록 순서가 곧 실행 순서입니다."""
    task: str
    description: str
    estimated_hours: Number


class Milestone(CamelModel):
    """마일스톤. 날짜는 마감일을 넘지 않습니다."""
    milestone: str
    date: str


class CostEstimate(CamelModel):
    """비용 추정. total = subtotal + contingency."""
    subtotal: Number
    contingency: Number
    total: Number
    currency: str
    fallback_reason: Optional[str] = Field(None, alias="_fallbackReason")

    @model_serializer(mode="wrap")
    def _drop_empty_fallback_reason(self, handler):
        data = handler(self)
        for key in ("_fallbackReason", "fallback_reason"):
            if key in data and data[key] is None:
                del data[key]
        return data


class RiskFlag(CamelModel):
    """리스크 플래그."""
    severity: Severity
    issue: str
    mitigation: str


class SizingTier(CamelModel):
    """작업 규모 구간. max_hours가 None이면 상한 없음 (XL)."""
    min_hours: Number
    max_hours: Optional[Number] = None


class TaskSizing(CamelModel):
    """작업별 규모 분류 결과."""
    task: str
    estimated_hours: Number
    tier: str
    default_range: SizingTier


class TimelineModel(CamelModel):
    """총 작업 시간 기반 필요 기간 모델."""
    total_hours: Number
    team_velocity_hours_per_week: Number
    required_weeks: float
    required_days: float


class BudgetStatus(CamelModel):
    """예산 적합도 신호."""
    status: BudgetStatusCode
    utilization: Optional[float] = None
    shortfall: Number = 0


class DeadlineStatus(CamelModel):
    """마감일 실현 가능성 신호."""
    status: DeadlineStatusCode
    slack_days: float


class EstimationSignals(CamelModel):
    """
    규칙 엔진이 계산한 파생 분석 묶음.

    Tasks + CostEstimate + 정규화된 예산/마감일만으로 결정되며,
    요청마다 다시 계산되고 저장되지 않습니다.
    """
    sizing_tiers: dict[str, SizingTier]
    task_sizing: list[TaskSizing]
    timeline_model: TimelineModel
    budget_status: BudgetStatus
    deadline_status: DeadlineStatus
    risk_flags: list[RiskFlag]


class EstimateResult(CamelModel):
    """추정 요청 하나의 최종 결과."""
    normalized_input: NormalizedInput
    task_breakdown: list[Task]
    timeline: list[Milestone]
    cost_estimate: CostEstimate
    risk_flags: list[RiskFlag]
    estimation_signals: EstimationSignals
    proposal_draft: str = Field("", description="레거시 일반 텍스트 제안서")
    proposal_markdown: str = Field("", description="템플릿 기반 마크다운 제안서")
    proposal_plain_text: str = Field("", description="마크다운에서 변환한 일반 텍스트")
