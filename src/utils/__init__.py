from .cache import TTLCache
from .dates import (
    Clock,
    system_clock,
    parse_date,
    format_date,
    enumerate_dates,
    validate_span,
    today,
    utc_timestamp,
)

__all__ = [
    "TTLCache",
    "Clock",
    "system_clock",
    "parse_date",
    "format_date",
    "enumerate_dates",
    "validate_span",
    "today",
    "utc_timestamp",
]
