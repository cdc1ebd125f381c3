from __future__ import annotations

from enum import Enum


class DayCode(str, Enum):
    """Absence marker stored on a day."""

    NONE = ""
    KRANK = "K"
    KIND_KRANK = "KK"
    URLAUB = "U"
    FEIERTAG = "FT"

    @property
    def is_absence(self) -> bool:
        return self is not DayCode.NONE

    @property
    def label(self) -> str:
        return CODE_LABELS.get(self, "")


CODE_LABELS = {
    DayCode.KRANK: "Krank",
    DayCode.KIND_KRANK: "Kind krank",
    DayCode.URLAUB: "Urlaub",
    DayCode.FEIERTAG: "Feiertag",
}


class SyncDirection(str, Enum):
    """Which way the startup synchronisation ran."""

    MIRROR = "MIRROR"
    REBUILD = "REBUILD"
    NONE = "NONE"


class Trend(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
