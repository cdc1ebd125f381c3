from __future__ import annotations

from datetime import date

import pytest

from timecal.backup.service import BackupService
from timecal.backup.storage import BackupPersistence
from timecal.database.bootstrap import apply_schema
from timecal.database.connection import DBConfig, DatabaseConnection
from timecal.records.service import RecordService
from timecal.records.sqlalchemy_record_repository import SqlAlchemyRecordRepository
from timecal.snapshot.store import SnapshotStore
from timecal.snapshot.sync import SyncEngine


@pytest.fixture
def conn():
    c = DatabaseConnection(DBConfig(url="sqlite://"))
    apply_schema(c)
    yield c
    c.dispose()


@pytest.fixture
def records_repo(conn):
    return SqlAlchemyRecordRepository(conn)


@pytest.fixture
def backup_storage(tmp_path):
    return BackupPersistence.from_paths(tmp_path / "localstorage.json", tmp_path / "TimeCalDB_SQLite.sqlite3")


@pytest.fixture
def snapshot():
    store = SnapshotStore.create()
    yield store
    store.close()


@pytest.fixture
def sync_engine(records_repo, backup_storage, snapshot):
    return SyncEngine(records_repo, backup=backup_storage, snapshot=snapshot)


@pytest.fixture
def record_service(records_repo, sync_engine):
    return RecordService(records_repo, mirror=sync_engine)


@pytest.fixture
def backup_service(sync_engine, backup_storage):
    return BackupService(sync_engine, backup_storage, today=lambda: date(2025, 3, 14))
