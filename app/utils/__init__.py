"""유틸리티 모듈."""

from .validation import (
    collect_estimate_input_errors,
    validate_estimate_input,
)
from .dates import utc_now, parse_iso_datetime, to_iso_date
from .formatting import format_number, is_number, round_half_up, to_finite_float

__all__ = [
    "collect_estimate_input_errors",
    "validate_estimate_input",
    "utc_now",
    "parse_iso_datetime",
    "to_iso_date",
    "format_number",
    "is_number",
    "round_half_up",
    "to_finite_float",
]
