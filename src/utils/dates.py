"""Calendar date helpers for PnL date ranges.

All range arithmetic works on ``datetime.date`` values so that day counts
are plain calendar differences, unaffected by timezone or DST offsets.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Callable

from src.errors import InvalidDateFormat, InvalidDateValue, RangeOrderError

DATE_FORMAT = "%Y-%m-%d"

# A clock returns the current moment. Injected wherever "today" matters.
Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()


def today(clock: Clock = system_clock) -> date:
    """Current calendar date according to ``clock``."""
    return clock().date()


def utc_timestamp(clock: Clock = system_clock) -> str:
    """ISO-8601 UTC timestamp with millisecond precision."""
    now = clock().astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_date(text: str) -> date:
    """
    Parse a ``YYYY-MM-DD`` string into a date.
    
    Args:
        text: Date string
        
    Returns:
        Parsed calendar date
        
    Raises:
        InvalidDateFormat: If the text is not a valid calendar date
    """
    if not isinstance(text, str):
        raise InvalidDateFormat()
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidDateFormat() from e


def format_date(value: date) -> str:
    """Render a date in canonical ``YYYY-MM-DD`` form."""
    if not isinstance(value, date):
        raise InvalidDateValue()
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(DATE_FORMAT)


def enumerate_dates(start: date, end: date) -> list[date]:
    """
    List every calendar day from start to end, both inclusive.
    
    Raises:
        RangeOrderError: If start is after end
    """
    if start > end:
        raise RangeOrderError("Start date must be before or equal to end date")
    
    days = (end - start).days
    return [start + timedelta(days=offset) for offset in range(days + 1)]


def validate_span(start: date, end: date, max_days: int) -> bool:
    """
    Check that two dates are at most ``max_days`` calendar days apart.
    
    The span is the absolute day difference, so a range of
    ``max_days + 1`` enumerated dates is the largest one accepted.
    """
    return abs((end - start).days) <= max_days
