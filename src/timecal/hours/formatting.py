"""Hour display helpers shared by the presentation layer."""

from __future__ import annotations

import math
from typing import Iterable, Optional

from ..core.enums import Trend

MONTH_NAMES = [
    "Januar",
    "Februar",
    "März",
    "April",
    "Mai",
    "Juni",
    "Juli",
    "August",
    "September",
    "Oktober",
    "November",
    "Dezember",
]

# Indexed by day_of_week (0 = Sunday)
DAY_NAMES = ["So", "Mo", "Di", "Mi", "Do", "Fr", "Sa"]

TREND_TOLERANCE = 0.01


def format_hours(hours: Optional[float]) -> str:
    if hours is None or math.isnan(hours):
        return "0,00"
    return f"{hours:.2f}".replace(".", ",")


def difference_trend(differenz: float) -> Trend:
    if differenz > TREND_TOLERANCE:
        return Trend.POSITIVE
    if differenz < -TREND_TOLERANCE:
        return Trend.NEGATIVE
    return Trend.NEUTRAL


def weekly_hours(days: Iterable) -> dict[int, float]:
    """Ist hours summed per ISO week, in first-seen week order."""
    weeks: dict[int, float] = {}
    for day in days:
        weeks[day.iso_week] = weeks.get(day.iso_week, 0.0) + (day.ist_stunden or 0.0)
    return weeks


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]
