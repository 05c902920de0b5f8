"""Input normalizer for Layer 1.

Layer 1: 입력 정규화 서비스
원시 요청 본문을 정해진 형태의 NormalizedInput으로 변환합니다.

정규화 원칙:
- 절대 예외를 던지지 않음 (잘못된 값은 안전한 기본값으로 대체)
- 잘못된 숫자 → 0, 잘못된 통화 → "USD", 잘못된 날짜 → 30일 후
- 생성된 NormalizedInput은 변경 불가 (frozen)
"""

import logging
import math
import re
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any, Optional

from app.models import Budget, InputMetadata, NormalizedInput
from app.utils.dates import DAY_SECONDS, parse_iso_datetime, to_iso_date, utc_now
from app.utils.formatting import is_number, round_half_up, to_finite_float

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "USD"
FALLBACK_DEADLINE_DAYS = 30

# 숫자, 소수점, 마이너스 기호를 제외한 모든 문자
_NON_NUMERIC_CHARS = re.compile(r"[^0-9.\-]+")
# 정리된 문자열의 앞부분에서 읽을 수 있는 가장 긴 실수
_LEADING_FLOAT = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)")


class Normalizer:
    """
    Layer 1: 원시 입력을 NormalizedInput으로 변환.

    모든 메서드는 total function입니다 (어떤 입력에도 예외 없이 결과 반환).
    """

    def normalize(
        self,
        raw_input: Any,
        now: Optional[datetime] = None,
    ) -> NormalizedInput:
        """
        원시 입력 정규화.

        Args:
            raw_input: projectDescription / budget / deadline 키를 가진 매핑
            now: 기준 시각 (테스트용, 없으면 현재 UTC)

        Returns:
            NormalizedInput: 정규화된 입력
        """
        now = now or utc_now()
        raw = raw_input if isinstance(raw_input, Mapping) else {}

        description = self._parse_description(raw.get("projectDescription"))
        budget = raw.get("budget")
        deadline, available_days = self._parse_deadline(raw.get("deadline"), now)

        normalized = NormalizedInput(
            project_description=description,
            budget=Budget(
                amount=self._parse_budget_amount(budget),
                currency=self._parse_budget_currency(budget),
            ),
            deadline=deadline,
            metadata=InputMetadata(
                available_duration_days=available_days,
                available_duration_weeks=round_half_up(available_days / 7, 1),
                is_past_deadline=available_days < 0,
            ),
        )

        logger.debug(
            f"[Normalizer] 정규화 완료: budget={normalized.budget.amount} "
            f"{normalized.budget.currency}, deadline={deadline} ({available_days}일)"
        )
        return normalized

    @staticmethod
    def _parse_description(value: Any) -> str:
        """설명 문자열 정리 (없으면 빈 문자열)."""
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _parse_budget_amount(budget: Any) -> float:
        """
        예산 금액 파싱.

        - 유한한 숫자는 그대로 사용
        - 문자열은 숫자/소수점/마이너스만 남긴 뒤 앞부분을 실수로 해석
          (예: "$18,000.50" → 18000.5)
        - 그 외 모든 경우 0
        """
        raw = budget.get("amount") if isinstance(budget, Mapping) else None

        if is_number(raw):
            return raw if to_finite_float(raw) is not None else 0

        if isinstance(raw, str):
            cleaned = _NON_NUMERIC_CHARS.sub("", raw)
            match = _LEADING_FLOAT.match(cleaned)
            if match:
                parsed = float(match.group(0))
                if math.isfinite(parsed):
                    return parsed

        return 0

    @staticmethod
    def _parse_budget_currency(budget: Any) -> str:
        """통화 코드 정리: 공백 제거, 대문자, 최대 3자."""
        raw = budget.get("currency") if isinstance(budget, Mapping) else None
        if not isinstance(raw, str) or not raw.strip():
            return DEFAULT_CURRENCY
        return raw.strip().upper()[:3]

    @staticmethod
    def _parse_deadline(value: Any, now: datetime) -> tuple[str, int]:
        """
        마감일 파싱.

        Returns:
            (ISO 날짜 문자열, 남은 일수)
            해석 불가능한 값이면 (30일 후 날짜, 30) - 남은 일수는 고정값
        """
        parsed = parse_iso_datetime(value)

        if parsed is None:
            fallback = now + timedelta(days=FALLBACK_DEADLINE_DAYS)
            logger.info(f"[Normalizer] 마감일 해석 실패, {FALLBACK_DEADLINE_DAYS}일 후로 대체: {value!r}")
            return to_iso_date(fallback), FALLBACK_DEADLINE_DAYS

        diff_seconds = (parsed - now).total_seconds()
        available_days = math.ceil(diff_seconds / DAY_SECONDS)
        return to_iso_date(parsed), available_days


def normalize_input(raw_input: Any, now: Optional[datetime] = None) -> NormalizedInput:
    """원시 입력을 정규화하는 편의 함수."""
    return Normalizer().normalize(raw_input, now=now)
