from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from timecal.config import get_settings_module
from timecal.container import build_container
from timecal.core.enums import SyncDirection
from timecal.main import TimeCalApp, create_app


def _settings(tmp_path, **overrides):
    values = dict(
        DATABASE_URL="sqlite://",
        SNAPSHOT_ENABLED=True,
        BACKUP_KV_PATH=str(tmp_path / "localstorage.json"),
        BACKUP_DB_PATH=str(tmp_path / "TimeCalDB_SQLite.sqlite3"),
        EXPORT_DIR=str(tmp_path / "exports"),
        DEBUG=True,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def _app(settings) -> TimeCalApp:
    return TimeCalApp(build_container(settings=settings), settings)


def test_first_start_mirrors_then_restart_rebuilds(tmp_path):
    settings = _settings(tmp_path)

    async def first_session():
        async with _app(settings) as app:
            assert app.startup_direction is SyncDirection.MIRROR
            year_id = await app.records.create_year(2025)
            month = (await app.records.list_months(year_id))[0]
            day = (await app.records.list_days(month.month.month_id))[1]
            await app.records.update_day(day.day_id, {"von": "07:00", "bis": "15:30"})
            return day.day_id

    async def second_session(day_id):
        # fresh in-memory primary store, same backup slots
        async with _app(settings) as app:
            assert app.startup_direction is SyncDirection.REBUILD
            years = await app.records.list_years()
            return [y.year.year for y in years], await app.records.get_day(day_id)

    day_id = asyncio.run(first_session())
    years, day = asyncio.run(second_session(day_id))

    assert years == [2025]
    assert day.ist_stunden == pytest.approx(8.0)
    assert day.von == "07:00"


def test_snapshot_disabled_runs_on_primary_store(tmp_path):
    settings = _settings(tmp_path, SNAPSHOT_ENABLED=False)

    async def session():
        async with _app(settings) as app:
            assert app.startup_direction is SyncDirection.NONE
            await app.records.create_year(2026)
            assert await app.backups.export_snapshot() is None
            return await app.records.list_years()

    years = asyncio.run(session())

    assert [y.year.year for y in years] == [2026]
    assert not (tmp_path / "localstorage.json").exists()


def test_unusable_stored_snapshot_is_replaced(tmp_path):
    settings = _settings(tmp_path)
    (tmp_path / "localstorage.json").write_text('{"timecal_sqlite_backup": "bm90IGEgZGI="}', encoding="utf-8")

    async def session():
        async with _app(settings) as app:
            return app.startup_direction, app.container.sync_engine.available

    direction, available = asyncio.run(session())

    assert direction is SyncDirection.MIRROR
    assert available is True


@pytest.mark.parametrize(
    "env, module",
    [
        ("production", "timecal.config.production"),
        ("prod", "timecal.config.production"),
        ("testing", "timecal.config.testing"),
        ("whatever", "timecal.config.development"),
    ],
)
def test_settings_module_follows_environment(monkeypatch, env, module):
    monkeypatch.setenv("TIMECAL_ENV", env)
    assert get_settings_module() == module


def test_create_app_wires_testing_settings():
    app = create_app("timecal.config.testing")

    assert app.container.conn.url == "sqlite://"
    assert app.container.snapshot_enabled is True
    assert app.container.record_service is app.records
    app.container.conn.dispose()


def test_testing_settings_use_a_private_data_dir():
    app = create_app("timecal.config.testing")

    assert app.settings.DATA_DIR.name.startswith("timecal-test-")
    assert app.settings.BACKUP_KV_PATH.startswith(str(app.settings.DATA_DIR))
    app.container.conn.dispose()


def test_sql_echo_reaches_the_engine(tmp_path):
    container = build_container(settings=_settings(tmp_path, SQL_ECHO=True))

    assert container.conn.engine.echo is True
    container.conn.dispose()


def test_restart_falls_back_to_second_backup_copy(tmp_path):
    settings = _settings(tmp_path)

    async def first_session():
        async with _app(settings) as app:
            await app.records.create_year(2025)

    async def second_session():
        async with _app(settings) as app:
            return app.startup_direction, [y.year.year for y in await app.records.list_years()]

    asyncio.run(first_session())
    # decodes fine but is no SQLite image
    (tmp_path / "localstorage.json").write_text('{"timecal_sqlite_backup": "bm90IGEgZGI="}', encoding="utf-8")
    direction, years = asyncio.run(second_session())

    assert direction is SyncDirection.REBUILD
    assert years == [2025]
