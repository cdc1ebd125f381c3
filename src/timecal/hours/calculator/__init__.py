from .base import WorkedHoursCalculator
from .standard_calculator import StandardWorkedHoursCalculator, compute_worked_hours

__all__ = ["WorkedHoursCalculator", "StandardWorkedHoursCalculator", "compute_worked_hours"]
