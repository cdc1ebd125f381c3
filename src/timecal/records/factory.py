from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.datetime_utils import days_in_month, is_weekend, iso_week, sunday_based_weekday
from ..core.constants import DEFAULT_PAUSE, DEFAULT_SOLL_STUNDEN, MONTHS_PER_YEAR
from ..core.enums import DayCode
from .model import DayDraft, MonthDraft


def blank_day_fields(weekend: bool) -> dict:
    """Weekend-aware defaults of a day without entries.

    Used on creation and when an absence code is cleared.
    """
    return {
        "von": "",
        "bis": "",
        "von2": "",
        "bis2": "",
        "pause": "" if weekend else DEFAULT_PAUSE,
        "code": DayCode.NONE,
        "comment": "",
        "soll_stunden": 0.0 if weekend else DEFAULT_SOLL_STUNDEN,
        "ist_stunden": 0.0,
    }


@dataclass
class CalendarFactory:
    """Factory Pattern: build the months and days that belong to a year."""

    def build_day(self, year: int, month: int, day: int) -> DayDraft:
        d = date(year, month, day)
        weekend = is_weekend(d)
        return DayDraft(
            day=day,
            date=d.isoformat(),
            day_of_week=sunday_based_weekday(d),
            is_weekend=weekend,
            iso_week=iso_week(d),
            **blank_day_fields(weekend),
        )

    def build_month(self, year: int, month: int) -> MonthDraft:
        days = tuple(self.build_day(year, month, day) for day in range(1, days_in_month(year, month) + 1))
        return MonthDraft(month=month, days=days)

    def build_year(self, year: int) -> list[MonthDraft]:
        return [self.build_month(year, month) for month in range(1, MONTHS_PER_YEAR + 1)]
