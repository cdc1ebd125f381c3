from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Day, Month, MonthDraft, RecordSet, Year


class RecordRepository(Protocol):
    """Primary store: years, months and days keyed by generated integer ids."""

    def list_years(self) -> Sequence[Year]:
        """All years, newest first."""

        raise NotImplementedError

    def get_year(self, year_id: int) -> Optional[Year]:
        raise NotImplementedError

    def get_year_by_number(self, year: int) -> Optional[Year]:
        raise NotImplementedError

    def create_year(self, *, year: int, months: Sequence[MonthDraft]) -> int:
        """Insert the year with all its months and days as one unit."""

        raise NotImplementedError

    def delete_year(self, year_id: int) -> bool:
        """Delete days, then months, then the year."""

        raise NotImplementedError

    def list_months(self, year_id: int) -> Sequence[Month]:
        raise NotImplementedError

    def get_month(self, month_id: int) -> Optional[Month]:
        raise NotImplementedError

    def list_days_for_month(self, month_id: int) -> Sequence[Day]:
        raise NotImplementedError

    def list_days_for_year(self, year_id: int) -> Sequence[Day]:
        raise NotImplementedError

    def get_day(self, day_id: int) -> Optional[Day]:
        raise NotImplementedError

    def update_day(self, day_id: int, fields: Mapping[str, Any]) -> Optional[Day]:
        raise NotImplementedError

    def dump_all(self) -> RecordSet:
        raise NotImplementedError

    def replace_all(self, records: RecordSet) -> None:
        """Clear every collection and insert the given records with their ids."""

        raise NotImplementedError
