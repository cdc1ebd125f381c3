"""Snapshot file format: three SQLite tables mirroring the primary store.

Rows read back from a snapshot are validated through the pydantic models below
before they are allowed into the primary store.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..common.datetime_utils import is_weekend, iso_week, sunday_based_weekday
from ..core.enums import DayCode
from ..records.model import Day, Month, Year

SNAPSHOT_DDL = (
    """
    CREATE TABLE IF NOT EXISTS years (
        id INTEGER PRIMARY KEY,
        year INTEGER UNIQUE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS months (
        id INTEGER PRIMARY KEY,
        yearId INTEGER,
        year INTEGER,
        month INTEGER,
        FOREIGN KEY(yearId) REFERENCES years(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS days (
        id INTEGER PRIMARY KEY,
        monthId INTEGER,
        yearId INTEGER,
        year INTEGER,
        month INTEGER,
        day INTEGER,
        date TEXT,
        dayOfWeek INTEGER,
        isWeekend BOOLEAN,
        isoWeek INTEGER,
        von TEXT,
        bis TEXT,
        von2 TEXT,
        bis2 TEXT,
        pause TEXT,
        code TEXT,
        comment TEXT,
        sollStunden REAL,
        istStunden REAL,
        FOREIGN KEY(monthId) REFERENCES months(id)
    )
    """,
)

YEAR_COLUMNS = ("id", "year")
MONTH_COLUMNS = ("id", "yearId", "year", "month")
DAY_COLUMNS = (
    "id",
    "monthId",
    "yearId",
    "year",
    "month",
    "day",
    "date",
    "dayOfWeek",
    "isWeekend",
    "isoWeek",
    "von",
    "bis",
    "von2",
    "bis2",
    "pause",
    "code",
    "comment",
    "sollStunden",
    "istStunden",
)

# Child-to-parent order, used when clearing.
EXPECTED_COLUMNS = {
    "days": DAY_COLUMNS,
    "months": MONTH_COLUMNS,
    "years": YEAR_COLUMNS,
}


class YearRow(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: int
    year: int = Field(ge=1, le=9999)

    def to_model(self) -> Year:
        return Year(year_id=self.id, year=self.year)

    @classmethod
    def from_model(cls, y: Year) -> "YearRow":
        return cls(id=y.year_id, year=y.year)


class MonthRow(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: int
    year_id: int = Field(alias="yearId")
    year: int
    month: int = Field(ge=1, le=12)

    def to_model(self) -> Month:
        return Month(month_id=self.id, year_id=self.year_id, year=self.year, month=self.month)

    @classmethod
    def from_model(cls, m: Month) -> "MonthRow":
        return cls(id=m.month_id, year_id=m.year_id, year=m.year, month=m.month)


class DayRow(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: int
    month_id: int = Field(alias="monthId")
    year_id: int = Field(alias="yearId")
    year: int
    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=31)
    date: str
    day_of_week: int = Field(alias="dayOfWeek", ge=0, le=6)
    is_weekend: bool = Field(alias="isWeekend")
    iso_week: int = Field(alias="isoWeek", ge=1, le=53)
    von: str = ""
    bis: str = ""
    von2: str = ""
    bis2: str = ""
    pause: str = ""
    code: DayCode = DayCode.NONE
    comment: str = ""
    soll_stunden: float = Field(alias="sollStunden", default=0.0)
    ist_stunden: float = Field(alias="istStunden", default=0.0)

    @field_validator("von", "bis", "von2", "bis2", "pause", "comment", "code", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("soll_stunden", "ist_stunden", mode="before")
    @classmethod
    def null_as_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("date")
    @classmethod
    def iso_date(cls, value: str) -> str:
        date.fromisoformat(value)
        return value

    @model_validator(mode="after")
    def matches_calendar(self) -> "DayRow":
        """Calendar columns must agree with year/month/day."""
        d = date(self.year, self.month, self.day)
        if self.date != d.isoformat():
            raise ValueError(f"date {self.date!r} does not match {d.isoformat()}")
        if self.is_weekend != is_weekend(d):
            raise ValueError(f"isWeekend={self.is_weekend} is wrong for {self.date}")
        if self.day_of_week != sunday_based_weekday(d):
            raise ValueError(f"dayOfWeek={self.day_of_week} is wrong for {self.date}")
        if self.iso_week != iso_week(d):
            raise ValueError(f"isoWeek={self.iso_week} is wrong for {self.date}")
        return self

    def to_model(self) -> Day:
        return Day(
            day_id=self.id,
            month_id=self.month_id,
            year_id=self.year_id,
            year=self.year,
            month=self.month,
            day=self.day,
            date=self.date,
            day_of_week=self.day_of_week,
            is_weekend=self.is_weekend,
            iso_week=self.iso_week,
            von=self.von,
            bis=self.bis,
            von2=self.von2,
            bis2=self.bis2,
            pause=self.pause,
            code=self.code,
            comment=self.comment,
            soll_stunden=self.soll_stunden,
            ist_stunden=self.ist_stunden,
        )

    @classmethod
    def from_model(cls, d: Day) -> "DayRow":
        return cls(
            id=d.day_id,
            month_id=d.month_id,
            year_id=d.year_id,
            year=d.year,
            month=d.month,
            day=d.day,
            date=d.date,
            day_of_week=d.day_of_week,
            is_weekend=d.is_weekend,
            iso_week=d.iso_week,
            von=d.von,
            bis=d.bis,
            von2=d.von2,
            bis2=d.bis2,
            pause=d.pause,
            code=d.code,
            comment=d.comment,
            soll_stunden=d.soll_stunden,
            ist_stunden=d.ist_stunden,
        )

    def as_params(self) -> tuple:
        """Values in DAY_COLUMNS order."""
        return (
            self.id,
            self.month_id,
            self.year_id,
            self.year,
            self.month,
            self.day,
            self.date,
            self.day_of_week,
            self.is_weekend,
            self.iso_week,
            self.von,
            self.bis,
            self.von2,
            self.bis2,
            self.pause,
            self.code.value,
            self.comment,
            self.soll_stunden,
            self.ist_stunden,
        )
