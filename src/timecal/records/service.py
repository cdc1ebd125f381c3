from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Any, Mapping, Optional, Protocol

from loguru import logger

from ..common.validators import require_day_code, require_year
from ..core.constants import ABSENCE_BIS, ABSENCE_HOURS, ABSENCE_PAUSE, ABSENCE_VON
from ..core.exceptions import DuplicateYearError, NotFoundError, ValidationError
from ..hours.calculator import StandardWorkedHoursCalculator, WorkedHoursCalculator
from ..hours.stats import Stats, compute_stats
from .factory import CalendarFactory, blank_day_fields
from .model import EDITABLE_DAY_FIELDS, RECALC_DAY_FIELDS, Day, Month, MonthSummary, Year, YearSummary
from .repository import RecordRepository

_TEXT_FIELDS = frozenset({"von", "bis", "von2", "bis2", "pause", "comment"})
_HOUR_FIELDS = frozenset({"soll_stunden", "ist_stunden"})


class MirrorScheduler(Protocol):
    def schedule_mirror(self) -> Optional[asyncio.Task]:
        raise NotImplementedError


class RecordService:
    """Use cases on years, months and days.

    Every mutation schedules a background mirror into the snapshot; the edit
    never waits for it.
    """

    def __init__(
        self,
        records: RecordRepository,
        *,
        calculator: Optional[WorkedHoursCalculator] = None,
        factory: Optional[CalendarFactory] = None,
        mirror: Optional[MirrorScheduler] = None,
    ):
        self._records = records
        self._calculator = calculator or StandardWorkedHoursCalculator()
        self._factory = factory or CalendarFactory()
        self._mirror = mirror

    def _schedule_mirror(self) -> None:
        if self._mirror is not None:
            self._mirror.schedule_mirror()

    # ---- years -------------------------------------------------------------

    async def list_years(self) -> list[YearSummary]:
        return [
            YearSummary(year=y, stats=compute_stats(self._records.list_days_for_year(y.year_id)))
            for y in self._records.list_years()
        ]

    async def get_year(self, year_id: int) -> Optional[Year]:
        return self._records.get_year(year_id)

    async def get_year_by_number(self, year: int) -> Optional[Year]:
        return self._records.get_year_by_number(year)

    async def get_year_stats(self, year_id: int) -> Stats:
        return compute_stats(self._records.list_days_for_year(year_id))

    async def create_year(self, year: Any) -> int:
        year = require_year(year)
        if self._records.get_year_by_number(year):
            raise DuplicateYearError(year)

        year_id = self._records.create_year(year=year, months=self._factory.build_year(year))
        logger.info("Created year {} (id={})", year, year_id)
        self._schedule_mirror()
        return year_id

    async def delete_year(self, year_id: int) -> bool:
        deleted = self._records.delete_year(year_id)
        if deleted:
            logger.info("Deleted year id={} with its months and days", year_id)
            self._schedule_mirror()
        return deleted

    # ---- months ------------------------------------------------------------

    async def list_months(self, year_id: int) -> list[MonthSummary]:
        return [
            MonthSummary(month=m, stats=compute_stats(self._records.list_days_for_month(m.month_id)))
            for m in self._records.list_months(year_id)
        ]

    async def get_month(self, month_id: int) -> Optional[Month]:
        return self._records.get_month(month_id)

    async def get_month_stats(self, month_id: int) -> Stats:
        return compute_stats(self._records.list_days_for_month(month_id))

    # ---- days --------------------------------------------------------------

    async def list_days(self, month_id: int) -> list[Day]:
        return list(self._records.list_days_for_month(month_id))

    async def get_day(self, day_id: int) -> Optional[Day]:
        return self._records.get_day(day_id)

    async def update_day(self, day_id: int, updates: Mapping[str, Any]) -> Optional[Day]:
        """Apply a partial edit; hours are recomputed when times, pause or code change."""
        fields = self._normalize_updates(updates)

        day = self._records.get_day(day_id)
        if not day:
            return None

        if RECALC_DAY_FIELDS & fields.keys():
            merged = replace(day, **fields)
            if merged.code.is_absence:
                fields["ist_stunden"] = ABSENCE_HOURS
                fields["soll_stunden"] = ABSENCE_HOURS
            else:
                fields["ist_stunden"] = self._calculator.worked_hours(
                    merged.von, merged.bis, merged.von2, merged.bis2, merged.pause
                )

        result = self._records.update_day(day_id, fields)
        self._schedule_mirror()
        return result

    async def set_day_code(self, day_id: int, code: Any) -> Day:
        """Mark a day as absence: fixed 08:00-16:00 block, no break, 8/8 hours."""
        code = require_day_code(code)
        if not code.is_absence:
            return await self.clear_day_code(day_id)

        if not self._records.get_day(day_id):
            raise NotFoundError(f"Tag {day_id} nicht gefunden")

        result = self._records.update_day(
            day_id,
            {
                "code": code,
                "comment": code.label,
                "von": ABSENCE_VON,
                "bis": ABSENCE_BIS,
                "von2": "",
                "bis2": "",
                "pause": ABSENCE_PAUSE,
                "ist_stunden": ABSENCE_HOURS,
                "soll_stunden": ABSENCE_HOURS,
            },
        )
        self._schedule_mirror()
        return result

    async def clear_day_code(self, day_id: int) -> Day:
        day = self._records.get_day(day_id)
        if not day:
            raise NotFoundError(f"Tag {day_id} nicht gefunden")

        result = self._records.update_day(day_id, blank_day_fields(day.is_weekend))
        self._schedule_mirror()
        return result

    @staticmethod
    def _normalize_updates(updates: Mapping[str, Any]) -> dict:
        unknown = set(updates) - EDITABLE_DAY_FIELDS
        if unknown:
            raise ValidationError(f"Nicht änderbare Felder: {', '.join(sorted(unknown))}")

        fields: dict[str, Any] = {}
        for key, value in updates.items():
            if key == "code":
                fields[key] = require_day_code(value)
            elif key in _TEXT_FIELDS:
                fields[key] = "" if value is None else str(value)
            elif key in _HOUR_FIELDS:
                try:
                    fields[key] = float(value or 0)
                except (TypeError, ValueError):
                    raise ValidationError(f"Ungültiger Wert für {key}: {value!r}") from None
        return fields

