from __future__ import annotations

from abc import ABC, abstractmethod


class WorkedHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def worked_hours(self, von: str, bis: str, von2: str, bis2: str, pause: str) -> float:
        raise NotImplementedError
