from __future__ import annotations

from typing import Optional

from ...common.datetime_utils import parse_hhmm_minutes
from .base import WorkedHoursCalculator


def _block_minutes(start: Optional[str], end: Optional[str]) -> int:
    start_min = parse_hhmm_minutes(start)
    end_min = parse_hhmm_minutes(end)
    if start_min is None or end_min is None:
        return 0
    return end_min - start_min


class StandardWorkedHoursCalculator(WorkedHoursCalculator):
    """Standard rule: (bis - von) + (bis2 - von2) - pause, not below 0.

    Empty or unreadable fields contribute nothing; the calculation never fails.
    """

    def worked_hours(self, von: str, bis: str, von2: str, bis2: str, pause: str) -> float:
        minutes = _block_minutes(von, bis) + _block_minutes(von2, bis2)
        minutes -= parse_hhmm_minutes(pause) or 0
        return max(minutes / 60, 0.0)


_default = StandardWorkedHoursCalculator()


def compute_worked_hours(von: str, bis: str, von2: str = "", bis2: str = "", pause: str = "") -> float:
    return _default.worked_hours(von, bis, von2, bis2, pause)
