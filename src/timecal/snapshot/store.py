from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from loguru import logger

from ..core.exceptions import SnapshotSchemaError, SnapshotUnavailableError
from .schema import DAY_COLUMNS, EXPECTED_COLUMNS, MONTH_COLUMNS, SNAPSHOT_DDL, YEAR_COLUMNS


@dataclass
class SnapshotRows:
    """Raw rows of the three snapshot tables, keyed by snapshot column names."""

    years: List[Dict[str, Any]] = field(default_factory=list)
    months: List[Dict[str, Any]] = field(default_factory=list)
    days: List[Dict[str, Any]] = field(default_factory=list)


@contextmanager
def snapshot_cursor(conn: sqlite3.Connection) -> Iterator[sqlite3.Cursor]:
    cur = conn.cursor()
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()


def _require_engine() -> None:
    if not hasattr(sqlite3.Connection, "serialize") or not hasattr(sqlite3.Connection, "deserialize"):
        raise SnapshotUnavailableError("sqlite3 lacks serialize/deserialize support (Python 3.11+ required)")


def _insert_sql(table: str, columns: tuple) -> str:
    placeholders = ", ".join("?" for _ in columns)
    return f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"


class SnapshotStore:
    """In-memory SQLite database holding the portable mirror of the primary store."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn
        self._conn.row_factory = sqlite3.Row

    @classmethod
    def create(cls) -> "SnapshotStore":
        _require_engine()
        store = cls(sqlite3.connect(":memory:"))
        store.create_schema()
        return store

    @classmethod
    def from_bytes(cls, data: bytes) -> "SnapshotStore":
        """Open a serialized snapshot image; the schema is not checked here."""
        _require_engine()
        conn = sqlite3.connect(":memory:")
        try:
            conn.deserialize(bytes(data))
        except (sqlite3.Error, TypeError, ValueError) as exc:
            conn.close()
            raise SnapshotSchemaError(f"Not a SQLite snapshot: {exc}") from exc
        return cls(conn)

    def create_schema(self) -> None:
        with snapshot_cursor(self._conn) as cur:
            for ddl in SNAPSHOT_DDL:
                cur.execute(ddl)

    def validate_schema(self) -> None:
        """Raise SnapshotSchemaError unless years/months/days carry exactly the expected columns."""
        try:
            for table, expected in EXPECTED_COLUMNS.items():
                rows = self._conn.execute(f"PRAGMA table_info({table})").fetchall()
                actual = {r["name"] for r in rows}
                if not actual:
                    raise SnapshotSchemaError(f"Missing table: {table}")
                if actual != set(expected):
                    raise SnapshotSchemaError(
                        f"Unexpected columns in {table}: {sorted(actual ^ set(expected))}"
                    )
        except sqlite3.DatabaseError as exc:
            raise SnapshotSchemaError(f"Unreadable snapshot: {exc}") from exc

    def has_data(self) -> bool:
        try:
            count = self._conn.execute("SELECT COUNT(*) FROM years").fetchone()[0]
        except sqlite3.Error as exc:
            logger.warning("Snapshot data check failed: {}", exc)
            return False
        logger.debug("Snapshot has {} years", count)
        return count > 0

    def replace_all(self, *, years: list[tuple], months: list[tuple], days: list[tuple]) -> None:
        """Clear days, months, years and insert fresh rows in one transaction."""
        with snapshot_cursor(self._conn) as cur:
            for table in EXPECTED_COLUMNS:
                cur.execute(f"DELETE FROM {table}")
            cur.executemany(_insert_sql("years", YEAR_COLUMNS), years)
            cur.executemany(_insert_sql("months", MONTH_COLUMNS), months)
            cur.executemany(_insert_sql("days", DAY_COLUMNS), days)

    def read_rows(self) -> SnapshotRows:
        def _all(table: str) -> List[Dict[str, Any]]:
            return [dict(r) for r in self._conn.execute(f"SELECT * FROM {table} ORDER BY id").fetchall()]

        return SnapshotRows(years=_all("years"), months=_all("months"), days=_all("days"))

    def serialize(self) -> bytes:
        return bytes(self._conn.serialize())

    def close(self) -> None:
        self._conn.close()


async def open_snapshot(*candidates: Optional[bytes]) -> Optional[SnapshotStore]:
    """Open the first usable stored snapshot, or a fresh one.

    Returns None when the snapshot engine is unavailable; the caller then runs
    on the primary store alone.
    """
    try:
        _require_engine()
    except SnapshotUnavailableError as exc:
        logger.warning("Snapshot not available, running on primary store only: {}", exc)
        return None

    for stored in candidates:
        if not stored:
            continue
        store = None
        try:
            store = SnapshotStore.from_bytes(stored)
            store.validate_schema()
            logger.info("Snapshot loaded from storage ({} bytes)", len(stored))
            return store
        except SnapshotSchemaError as exc:
            logger.warning("Stored snapshot unusable: {}", exc)
            if store is not None:
                store.close()

    store = SnapshotStore.create()
    logger.info("Snapshot created (new)")
    return store
