"""Business-day counting."""

from __future__ import annotations

from datetime import date, datetime

# Monday=0 ... Friday=4
_WEEKDAYS = frozenset(range(5))


def _as_date(value: date | datetime) -> date:
    # datetime is a subclass of date; strip the time-of-day, keep the calendar date
    if isinstance(value, datetime):
        return value.date()
    return value


def count_working_days(start: date | datetime, end: date | datetime) -> int:
    """Count Monday-Friday dates in the inclusive range [start, end].

    Returns 0 when end precedes start.
    """
    start_date = _as_date(start)
    end_date = _as_date(end)

    if end_date < start_date:
        return 0

    total_days = (end_date - start_date).days + 1
    full_weeks, remainder = divmod(total_days, 7)
    working_days = full_weeks * 5

    first_weekday = start_date.weekday()
    for offset in range(remainder):
        if (first_weekday + offset) % 7 in _WEEKDAYS:
            working_days += 1

    return working_days


def is_working_day(on: date | datetime) -> bool:
    return _as_date(on).weekday() in _WEEKDAYS
