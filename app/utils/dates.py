"""날짜 파싱/포맷 유틸리티.

마감일은 ISO 8601 형식(YYYY-MM-DD 또는 전체 datetime)으로 받습니다.
시간대가 없는 값은 UTC로 해석합니다.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional

DAY_SECONDS = 24 * 60 * 60


def utc_now() -> datetime:
    """현재 UTC 시각 (timezone-aware)."""
    return datetime.now(timezone.utc)


def parse_iso_datetime(value: Any) -> Optional[datetime]:
    """
    마감일 값을 timezone-aware datetime으로 변환.

    Args:
        value: ISO 문자열, date 또는 datetime

    Returns:
        UTC 기준 datetime. 해석할 수 없거나 UTC 변환 시 범위를 벗어나면 None.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except (ValueError, OverflowError):
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        # UTC로 옮기면 datetime 범위(1-9999년)를 벗어나는 값
        return None


def to_iso_date(value: datetime) -> str:
    """datetime → 'YYYY-MM-DD' (UTC 기준)."""
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d")
