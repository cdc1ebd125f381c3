from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .backup.service import BackupService
from .backup.storage import BackupPersistence
from .database.connection import DBConfig, DatabaseConnection
from .hours.calculator import StandardWorkedHoursCalculator
from .records.factory import CalendarFactory
from .records.service import RecordService
from .records.sqlalchemy_record_repository import SqlAlchemyRecordRepository
from .snapshot.sync import SyncEngine


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    records_repo: SqlAlchemyRecordRepository
    backup_storage: Optional[BackupPersistence]
    sync_engine: SyncEngine

    record_service: RecordService
    backup_service: BackupService

    snapshot_enabled: bool = True


def build_container(*, settings: Any) -> Container:
    conn = DatabaseConnection(
        DBConfig(url=str(settings.DATABASE_URL), echo=bool(getattr(settings, "SQL_ECHO", False)))
    )
    records_repo = SqlAlchemyRecordRepository(conn)

    snapshot_enabled = bool(getattr(settings, "SNAPSHOT_ENABLED", True))
    backup_storage = (
        BackupPersistence.from_paths(settings.BACKUP_KV_PATH, settings.BACKUP_DB_PATH) if snapshot_enabled else None
    )

    # The snapshot itself is attached on startup (TimeCalApp.start).
    sync_engine = SyncEngine(records_repo, backup=backup_storage)

    record_service = RecordService(
        records_repo,
        calculator=StandardWorkedHoursCalculator(),
        factory=CalendarFactory(),
        mirror=sync_engine,
    )
    backup_service = BackupService(sync_engine, backup_storage)

    return Container(
        conn=conn,
        records_repo=records_repo,
        backup_storage=backup_storage,
        sync_engine=sync_engine,
        record_service=record_service,
        backup_service=backup_service,
        snapshot_enabled=snapshot_enabled,
    )
