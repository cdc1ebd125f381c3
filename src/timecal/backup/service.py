from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from ..common.datetime_utils import today_local
from ..core.constants import EXPORT_PREFIX, EXPORT_SUFFIX
from ..core.exceptions import BackupError, SnapshotError
from ..snapshot.store import SnapshotStore
from ..snapshot.sync import SyncEngine
from .storage import BackupPersistence


def export_filename(day: date) -> str:
    return f"{EXPORT_PREFIX}{day.isoformat()}{EXPORT_SUFFIX}"


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    data: bytes
    media_type: str = "application/octet-stream"

    def write_to(self, directory: str | Path) -> Path:
        out_dir = Path(directory)
        out_dir.mkdir(parents=True, exist_ok=True)
        out_file = out_dir / self.filename
        out_file.write_bytes(self.data)
        return out_file


class BackupService:
    """Use cases: export the snapshot as a file, import a snapshot file."""

    def __init__(
        self,
        sync: SyncEngine,
        backup: Optional[BackupPersistence] = None,
        *,
        today: Callable[[], date] = today_local,
    ):
        self._sync = sync
        self._backup = backup
        self._today = today

    async def export_snapshot(self) -> Optional[ExportArtifact]:
        if not self._sync.available:
            logger.warning("Export skipped: snapshot unavailable")
            return None

        try:
            await self._sync.mirror()
        except SnapshotError as exc:
            logger.error("Mirror before export failed, exporting last snapshot: {}", exc)

        return ExportArtifact(filename=export_filename(self._today()), data=self._sync.snapshot.serialize())

    async def export_to(self, directory: str | Path) -> Optional[Path]:
        artifact = await self.export_snapshot()
        if artifact is None:
            return None
        out_file = artifact.write_to(directory)
        logger.info("Backup exported: {}", out_file)
        return out_file

    async def import_snapshot(self, data: bytes) -> bool:
        """Load an uploaded snapshot; the primary store changes only once it is fully valid."""
        if not self._sync.available:
            logger.warning("Import skipped: snapshot unavailable")
            return False

        candidate: Optional[SnapshotStore] = None
        try:
            candidate = SnapshotStore.from_bytes(data)
            candidate.validate_schema()
            await self._sync.rebuild(candidate)
        except SnapshotError as exc:
            logger.error("Import of snapshot failed: {}", exc)
            if candidate is not None:
                candidate.close()
            return False

        self._sync.attach(candidate)

        if self._backup is not None:
            try:
                await self._backup.save(candidate.serialize())
            except BackupError as exc:
                logger.warning("Imported snapshot not persisted: {}", exc)

        logger.info("Snapshot imported ({} bytes)", len(data))
        return True

    async def import_file(self, path: str | Path) -> bool:
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            logger.error("Cannot read import file {}: {}", path, exc)
            return False
        return await self.import_snapshot(data)
