"""
Calendar helpers shared by the scheduling modules.

All arithmetic is on whole calendar days (``datetime.date``); no wall clock
is read here. Callers pass "today" explicitly.
"""

from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union


DateLike = Union[date, datetime, str]


def parse_date(value: Optional[DateLike]) -> Optional[date]:
    """
    Coerce a date, datetime or ISO string to a ``date``.

    Datetimes are truncated to their calendar day. Strings may be a plain
    ``YYYY-MM-DD`` date or a full ISO timestamp.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if len(value) > 10:
        return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
    return date.fromisoformat(value)


def add_days(day: date, days: int) -> date:
    return day + timedelta(days=days)


def days_between(start: date, end: date) -> int:
    """Signed number of days from ``start`` to ``end``."""
    return (end - start).days


def is_weekend(day: date) -> bool:
    # Saturday or Sunday
    return day.weekday() >= 5


def date_range(start: date, count: int) -> Iterator[date]:
    """Yield ``count`` consecutive days beginning with ``start``."""
    for offset in range(count):
        yield start + timedelta(days=offset)
