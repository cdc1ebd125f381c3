from dataclasses import dataclass

from timecal.core.enums import Trend
from timecal.hours.formatting import DAY_NAMES, difference_trend, format_hours, month_name, weekly_hours


@dataclass
class D:
    iso_week: int
    ist_stunden: float


def test_format_hours_uses_decimal_comma():
    assert format_hours(7.5) == "7,50"
    assert format_hours(-2.25) == "-2,25"
    assert format_hours(None) == "0,00"
    assert format_hours(float("nan")) == "0,00"


def test_difference_trend_tolerance():
    assert difference_trend(0.5) is Trend.POSITIVE
    assert difference_trend(-0.5) is Trend.NEGATIVE
    assert difference_trend(0.005) is Trend.NEUTRAL


def test_weekly_hours_grouped_by_iso_week():
    days = [D(1, 8.0), D(1, 7.5), D(2, 4.0), D(2, 0.0)]
    assert weekly_hours(days) == {1: 15.5, 2: 4.0}


def test_month_name():
    assert month_name(3) == "März"


def test_day_names_start_on_sunday():
    assert DAY_NAMES[0] == "So"
    assert DAY_NAMES[6] == "Sa"
