import calendar
from datetime import date

import pytest

from timecal.core.enums import DayCode
from timecal.records.factory import CalendarFactory


@pytest.mark.parametrize("year", [2023, 2024, 2100])
def test_year_has_twelve_months_with_calendar_day_counts(year):
    months = CalendarFactory().build_year(year)

    assert [m.month for m in months] == list(range(1, 13))
    for m in months:
        assert len(m.days) == calendar.monthrange(year, m.month)[1]


def test_weekend_and_weekday_derivation():
    months = CalendarFactory().build_year(2025)
    for m in months:
        for d in m.days:
            real = date.fromisoformat(d.date)
            assert d.is_weekend == (real.weekday() >= 5)
            assert d.day_of_week == real.isoweekday() % 7


def test_creation_defaults_depend_on_weekend():
    factory = CalendarFactory()
    saturday = factory.build_day(2025, 3, 15)
    monday = factory.build_day(2025, 3, 17)

    assert saturday.is_weekend and saturday.day_of_week == 6
    assert saturday.soll_stunden == 0 and saturday.pause == ""
    assert not monday.is_weekend and monday.day_of_week == 1
    assert monday.soll_stunden == 8 and monday.pause == "00:30"
    assert monday.code is DayCode.NONE and monday.ist_stunden == 0


def test_iso_week_at_year_boundary():
    factory = CalendarFactory()
    assert factory.build_day(2024, 12, 30).iso_week == 1
    assert factory.build_day(2021, 1, 1).iso_week == 53
    assert factory.build_day(2025, 1, 1).date == "2025-01-01"
