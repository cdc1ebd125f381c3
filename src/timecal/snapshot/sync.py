from __future__ import annotations

import asyncio
import sqlite3
from typing import Optional

from loguru import logger
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

from ..backup.storage import BackupPersistence
from ..core.enums import SyncDirection
from ..core.exceptions import SnapshotError, SnapshotUnavailableError, SnapshotValidationError, SyncError
from ..records.model import RecordSet
from ..records.repository import RecordRepository
from .schema import DayRow, MonthRow, YearRow
from .store import SnapshotRows, SnapshotStore


def rows_to_records(rows: SnapshotRows) -> RecordSet:
    """Validate raw snapshot rows into domain records; any mismatching row rejects the set."""
    try:
        years = [YearRow.model_validate(r).to_model() for r in rows.years]
        months = [MonthRow.model_validate(r).to_model() for r in rows.months]
        days = [DayRow.model_validate(r).to_model() for r in rows.days]
    except PydanticValidationError as exc:
        raise SnapshotValidationError(f"Snapshot row rejected: {exc}") from exc
    return RecordSet(years=years, months=months, days=days)


class SyncEngine:
    """Keeps the snapshot in step with the primary store.

    Mirror copies the whole primary store into the snapshot (full replace) and
    stores the snapshot bytes; Rebuild does the reverse. Mirrors started through
    schedule_mirror() run as background tasks; their failures are logged and
    kept in last_error instead of reaching the caller.
    """

    def __init__(
        self,
        records: RecordRepository,
        *,
        backup: Optional[BackupPersistence] = None,
        snapshot: Optional[SnapshotStore] = None,
    ):
        self._records = records
        self._backup = backup
        self._snapshot = snapshot
        self._pending: set[asyncio.Task] = set()
        self.last_error: Optional[BaseException] = None

    @property
    def snapshot(self) -> Optional[SnapshotStore]:
        return self._snapshot

    @property
    def available(self) -> bool:
        return self._snapshot is not None

    @property
    def pending_mirrors(self) -> int:
        return len(self._pending)

    def attach(self, snapshot: Optional[SnapshotStore]) -> None:
        """Swap in a new snapshot, closing the previous one."""
        previous, self._snapshot = self._snapshot, snapshot
        if previous is not None and previous is not snapshot:
            previous.close()

    def has_snapshot_data(self) -> bool:
        return self._snapshot is not None and self._snapshot.has_data()

    async def mirror(self) -> bool:
        snapshot = self._snapshot
        if snapshot is None:
            logger.debug("Snapshot unavailable, mirror skipped")
            return False

        try:
            records = self._records.dump_all()
            snapshot.replace_all(
                years=[(y.year_id, y.year) for y in records.years],
                months=[(m.month_id, m.year_id, m.year, m.month) for m in records.months],
                days=[DayRow.from_model(d).as_params() for d in records.days],
            )
        except (sqlite3.Error, SQLAlchemyError, PydanticValidationError) as exc:
            raise SyncError(f"Mirror to snapshot failed: {exc}") from exc

        logger.debug(
            "Mirrored {} years, {} months, {} days to snapshot",
            len(records.years),
            len(records.months),
            len(records.days),
        )

        # Let queued edits run before the two-slot write.
        await asyncio.sleep(0)

        current = self._snapshot
        if self._backup is not None and current is not None:
            await self._backup.save(current.serialize())
        return True

    async def rebuild(self, source: Optional[SnapshotStore] = None) -> RecordSet:
        """Replace the primary store with the content of a snapshot (ids preserved)."""
        snapshot = source or self._snapshot
        if snapshot is None:
            raise SnapshotUnavailableError("No snapshot to rebuild from")

        try:
            rows = snapshot.read_rows()
        except sqlite3.Error as exc:
            raise SyncError(f"Reading snapshot failed: {exc}") from exc

        records = rows_to_records(rows)

        try:
            self._records.replace_all(records)
        except SQLAlchemyError as exc:
            raise SyncError(f"Rebuild of primary store failed: {exc}") from exc

        logger.info(
            "Rebuilt primary store from snapshot: {} years, {} months, {} days",
            len(records.years),
            len(records.months),
            len(records.days),
        )
        return records

    async def synchronize_on_startup(self) -> SyncDirection:
        """Rebuild when the snapshot holds data, otherwise mirror into it."""
        if self._snapshot is None:
            logger.info("Snapshot unavailable, using primary store only")
            return SyncDirection.NONE

        direction = SyncDirection.REBUILD if self._snapshot.has_data() else SyncDirection.MIRROR
        try:
            if direction is SyncDirection.REBUILD:
                await self.rebuild()
            else:
                await self.mirror()
        except SnapshotError as exc:
            self.last_error = exc
            logger.error("Startup sync ({}) failed: {}", direction.value, exc)
        return direction

    def schedule_mirror(self) -> Optional[asyncio.Task]:
        """Start a mirror in the background and return its task without awaiting it."""
        if self._snapshot is None:
            logger.debug("Snapshot unavailable, background mirror skipped")
            return None

        task = asyncio.get_running_loop().create_task(self.mirror(), name="timecal-mirror")
        self._pending.add(task)
        task.add_done_callback(self._on_mirror_done)
        return task

    def _on_mirror_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            self.last_error = None
            return
        self.last_error = exc
        logger.warning("Background mirror failed: {}", exc)

    async def drain(self) -> None:
        """Wait for every outstanding background mirror."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def close(self) -> None:
        self.attach(None)
