from __future__ import annotations

from dataclasses import asdict
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError

from ..core.enums import DayCode
from ..core.exceptions import DuplicateYearError
from ..database.connection import DatabaseConnection
from ..database.sql_base import db_transaction, fetchall, fetchone
from ..database.tables import days as day_table, months as month_table, years as year_table
from .model import Day, Month, MonthDraft, RecordSet, Year
from .repository import RecordRepository


def _to_year(r: Mapping[str, Any]) -> Year:
    return Year(year_id=int(r["year_id"]), year=int(r["year"]))


def _to_month(r: Mapping[str, Any]) -> Month:
    return Month(
        month_id=int(r["month_id"]),
        year_id=int(r["year_id"]),
        year=int(r["year"]),
        month=int(r["month"]),
    )


def _to_day(r: Mapping[str, Any]) -> Day:
    return Day(
        day_id=int(r["day_id"]),
        month_id=int(r["month_id"]),
        year_id=int(r["year_id"]),
        year=int(r["year"]),
        month=int(r["month"]),
        day=int(r["day"]),
        date=str(r["date"]),
        day_of_week=int(r["day_of_week"]),
        is_weekend=bool(r["is_weekend"]),
        iso_week=int(r["iso_week"]),
        von=r.get("von") or "",
        bis=r.get("bis") or "",
        von2=r.get("von2") or "",
        bis2=r.get("bis2") or "",
        pause=r.get("pause") or "",
        code=DayCode(r.get("code") or ""),
        comment=r.get("comment") or "",
        soll_stunden=float(r.get("soll_stunden") or 0.0),
        ist_stunden=float(r.get("ist_stunden") or 0.0),
    )


def _day_values(day: Day) -> dict:
    values = asdict(day)
    values["code"] = day.code.value
    return values


class SqlAlchemyRecordRepository(RecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # ---- years -------------------------------------------------------------

    def list_years(self) -> Sequence[Year]:
        with db_transaction(self._conn_factory) as conn:
            rows = fetchall(conn.execute(select(year_table).order_by(year_table.c.year.desc())))
            return [_to_year(r) for r in rows]

    def get_year(self, year_id: int) -> Optional[Year]:
        with db_transaction(self._conn_factory) as conn:
            r = fetchone(conn.execute(select(year_table).where(year_table.c.year_id == int(year_id))))
            return _to_year(r) if r else None

    def get_year_by_number(self, year: int) -> Optional[Year]:
        with db_transaction(self._conn_factory) as conn:
            r = fetchone(conn.execute(select(year_table).where(year_table.c.year == int(year))))
            return _to_year(r) if r else None

    def create_year(self, *, year: int, months: Sequence[MonthDraft]) -> int:
        try:
            with db_transaction(self._conn_factory) as conn:
                year_id = conn.execute(insert(year_table).values(year=int(year))).inserted_primary_key[0]

                for draft in months:
                    month_id = conn.execute(
                        insert(month_table).values(year_id=year_id, year=year, month=draft.month)
                    ).inserted_primary_key[0]

                    day_rows = []
                    for d in draft.days:
                        row = asdict(d)
                        row["code"] = d.code.value
                        row.update(month_id=month_id, year_id=year_id, year=year, month=draft.month)
                        day_rows.append(row)
                    if day_rows:
                        conn.execute(insert(day_table), day_rows)

                return int(year_id)
        except IntegrityError as exc:
            raise DuplicateYearError(year) from exc

    def delete_year(self, year_id: int) -> bool:
        year_id = int(year_id)
        with db_transaction(self._conn_factory) as conn:
            conn.execute(delete(day_table).where(day_table.c.year_id == year_id))
            conn.execute(delete(month_table).where(month_table.c.year_id == year_id))
            result = conn.execute(delete(year_table).where(year_table.c.year_id == year_id))
            return result.rowcount > 0

    # ---- months ------------------------------------------------------------

    def list_months(self, year_id: int) -> Sequence[Month]:
        with db_transaction(self._conn_factory) as conn:
            rows = fetchall(
                conn.execute(select(month_table).where(month_table.c.year_id == int(year_id)).order_by(month_table.c.month))
            )
            return [_to_month(r) for r in rows]

    def get_month(self, month_id: int) -> Optional[Month]:
        with db_transaction(self._conn_factory) as conn:
            r = fetchone(conn.execute(select(month_table).where(month_table.c.month_id == int(month_id))))
            return _to_month(r) if r else None

    # ---- days --------------------------------------------------------------

    def list_days_for_month(self, month_id: int) -> Sequence[Day]:
        with db_transaction(self._conn_factory) as conn:
            rows = fetchall(
                conn.execute(select(day_table).where(day_table.c.month_id == int(month_id)).order_by(day_table.c.day))
            )
            return [_to_day(r) for r in rows]

    def list_days_for_year(self, year_id: int) -> Sequence[Day]:
        with db_transaction(self._conn_factory) as conn:
            rows = fetchall(
                conn.execute(
                    select(day_table).where(day_table.c.year_id == int(year_id)).order_by(day_table.c.month, day_table.c.day)
                )
            )
            return [_to_day(r) for r in rows]

    def get_day(self, day_id: int) -> Optional[Day]:
        with db_transaction(self._conn_factory) as conn:
            r = fetchone(conn.execute(select(day_table).where(day_table.c.day_id == int(day_id))))
            return _to_day(r) if r else None

    def update_day(self, day_id: int, fields: Mapping[str, Any]) -> Optional[Day]:
        values = {k: (v.value if isinstance(v, DayCode) else v) for k, v in fields.items()}
        with db_transaction(self._conn_factory) as conn:
            if values:
                conn.execute(update(day_table).where(day_table.c.day_id == int(day_id)).values(**values))
            r = fetchone(conn.execute(select(day_table).where(day_table.c.day_id == int(day_id))))
            return _to_day(r) if r else None

    # ---- bulk --------------------------------------------------------------

    def dump_all(self) -> RecordSet:
        with db_transaction(self._conn_factory) as conn:
            year_rows = fetchall(conn.execute(select(year_table).order_by(year_table.c.year_id)))
            month_rows = fetchall(conn.execute(select(month_table).order_by(month_table.c.month_id)))
            day_rows = fetchall(conn.execute(select(day_table).order_by(day_table.c.day_id)))
        return RecordSet(
            years=[_to_year(r) for r in year_rows],
            months=[_to_month(r) for r in month_rows],
            days=[_to_day(r) for r in day_rows],
        )

    def replace_all(self, records: RecordSet) -> None:
        with db_transaction(self._conn_factory) as conn:
            conn.execute(delete(day_table))
            conn.execute(delete(month_table))
            conn.execute(delete(year_table))

            if records.years:
                conn.execute(insert(year_table), [asdict(y) for y in records.years])
            if records.months:
                conn.execute(insert(month_table), [asdict(m) for m in records.months])
            if records.days:
                conn.execute(insert(day_table), [_day_values(d) for d in records.days])
