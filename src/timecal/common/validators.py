from __future__ import annotations

from typing import Any

from ..core.enums import DayCode
from ..core.exceptions import ValidationError


def require_year(value: Any) -> int:
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Ungültiges Jahr: {value!r}") from None
    if year < 1 or year > 9999:
        raise ValidationError(f"Ungültiges Jahr: {value!r}")
    return year


def require_day_code(value: Any) -> DayCode:
    if isinstance(value, DayCode):
        return value
    try:
        return DayCode(value or "")
    except ValueError:
        raise ValidationError(f"Ungültiger Code: {value!r}") from None
