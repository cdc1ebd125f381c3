from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Optional


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def sunday_based_weekday(d: date) -> int:
    """Weekday with 0 = Sunday .. 6 = Saturday."""
    return (d.weekday() + 1) % 7


def is_weekend(d: date) -> bool:
    return d.weekday() >= 5


def iso_week(d: date) -> int:
    return d.isocalendar()[1]


def parse_hhmm_minutes(value: Optional[str]) -> Optional[int]:
    """Parse "HH:MM" into minutes since midnight.

    Returns None for empty or malformed input instead of raising.
    """
    if not value:
        return None
    parts = value.strip().split(":")
    if len(parts) < 2:
        return None
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return None
    return hours * 60 + minutes
