"""
공통 데이터 모델 모듈입니다.
추정 결과, 규칙 엔진, API 응답에서 공통으로 사용하는 기본 구조를 정의합니다.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Severity(str, Enum):
    """
    리스크(위험) 수준을 정의하는 열거형 클래스입니다.

    분류:
    - HIGH: 매우 위험. 즉시 조치 필요.
    - MEDIUM: 중간 위험. 지속적인 관찰 필요.
    - LOW: 낮은 위험. 주기적인 점검으로 충분함.
    """
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class BudgetStatusCode(str, Enum):
    """예산 대비 비용 상태."""
    WITHIN_BUDGET = "within_budget"
    AT_RISK = "at_risk"
    OVER_BUDGET = "over_budget"


class DeadlineStatusCode(str, Enum):
    """마감일 대비 필요 기간 상태."""
    ON_TRACK = "on_track"
    TIGHT = "tight"
    UNREALISTIC = "unrealistic"


class CamelModel(BaseModel):
    """
    JSON 계약(camelCase)과 파이썬 속성(snake_case)을 연결하는 기본 모델입니다.

    - 파이썬 코드에서는 estimated_hours 처럼 snake_case로 접근
    - 직렬화/역직렬화 시에는 estimatedHours 처럼 camelCase 사용
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        """JSON 응답용 딕셔너리로 변환 (camelCase 키)."""
        return self.model_dump(mode="json", by_alias=True)
