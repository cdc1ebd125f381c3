from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol

from ..core.enums import DayCode


@dataclass(frozen=True)
class Stats:
    """Aggregate counters of a month or a year. Derived, never stored."""

    arbeitstage: int = 0
    krank: int = 0
    kindkrank: int = 0
    urlaub: int = 0
    feiertag: int = 0
    soll_stunden: float = 0.0
    ist_stunden: float = 0.0
    differenz: float = 0.0
    durchschnitt: float = 0.0


class DayLike(Protocol):
    is_weekend: bool
    code: DayCode
    soll_stunden: float
    ist_stunden: float


def compute_stats(days: Iterable[DayLike]) -> Stats:
    """Single pass over a day set; weekend days never count as Arbeitstage."""
    arbeitstage = krank = kindkrank = urlaub = feiertag = 0
    soll = ist = 0.0

    for day in days:
        if not day.is_weekend:
            arbeitstage += 1

        code = DayCode(day.code or "")
        if code is DayCode.KRANK:
            krank += 1
        elif code is DayCode.KIND_KRANK:
            kindkrank += 1
        elif code is DayCode.URLAUB:
            urlaub += 1
        elif code is DayCode.FEIERTAG:
            feiertag += 1

        soll += day.soll_stunden or 0.0
        ist += day.ist_stunden or 0.0

    return Stats(
        arbeitstage=arbeitstage,
        krank=krank,
        kindkrank=kindkrank,
        urlaub=urlaub,
        feiertag=feiertag,
        soll_stunden=soll,
        ist_stunden=ist,
        differenz=ist - soll,
        durchschnitt=ist / arbeitstage if arbeitstage > 0 else 0.0,
    )
