from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import DayCode
from ..hours.stats import Stats


@dataclass(frozen=True)
class Year:
    year_id: int
    year: int


@dataclass(frozen=True)
class Month:
    month_id: int
    year_id: int
    year: int
    month: int


@dataclass(frozen=True)
class Day:
    """One calendar date of a month with its time entries."""

    day_id: int
    month_id: int
    year_id: int
    year: int
    month: int
    day: int
    date: str
    day_of_week: int
    is_weekend: bool
    iso_week: int
    von: str = ""
    bis: str = ""
    von2: str = ""
    bis2: str = ""
    pause: str = ""
    code: DayCode = DayCode.NONE
    comment: str = ""
    soll_stunden: float = 0.0
    ist_stunden: float = 0.0


@dataclass(frozen=True)
class DayDraft:
    """A day before it has ids (produced by the calendar factory)."""

    day: int
    date: str
    day_of_week: int
    is_weekend: bool
    iso_week: int
    von: str
    bis: str
    von2: str
    bis2: str
    pause: str
    code: DayCode
    comment: str
    soll_stunden: float
    ist_stunden: float


@dataclass(frozen=True)
class MonthDraft:
    month: int
    days: tuple[DayDraft, ...]


@dataclass(frozen=True)
class RecordSet:
    """Full content of the primary store, as mirrored into the snapshot."""

    years: list[Year] = field(default_factory=list)
    months: list[Month] = field(default_factory=list)
    days: list[Day] = field(default_factory=list)


@dataclass(frozen=True)
class YearSummary:
    year: Year
    stats: Stats


@dataclass(frozen=True)
class MonthSummary:
    month: Month
    stats: Stats


# Fields an interactive edit may change.
EDITABLE_DAY_FIELDS = frozenset(
    {"von", "bis", "von2", "bis2", "pause", "code", "comment", "soll_stunden", "ist_stunden"}
)

# Fields whose change triggers a recomputation of ist/soll hours.
RECALC_DAY_FIELDS = frozenset({"von", "bis", "von2", "bis2", "pause", "code"})
