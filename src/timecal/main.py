from __future__ import annotations

import importlib
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from .common.logging import configure_logging
from .config import get_settings_module
from .container import Container, build_container
from .core.enums import SyncDirection
from .database.bootstrap import apply_schema, list_tables
from .snapshot.store import open_snapshot


class TimeCalApp:
    """Startup and shutdown of the core: primary store, snapshot and sync."""

    def __init__(self, container: Container, settings: ModuleType):
        self.container = container
        self.settings = settings
        self.startup_direction: Optional[SyncDirection] = None

    @property
    def records(self):
        return self.container.record_service

    @property
    def backups(self):
        return self.container.backup_service

    async def start(self) -> SyncDirection:
        apply_schema(self.container.conn)
        if getattr(self.settings, "DEBUG", False):
            logger.debug(
                "Primary store ready: {} (tables={})",
                self.container.conn.url,
                len(list_tables(self.container.conn)),
            )

        if self.container.snapshot_enabled:
            stored = await self.container.backup_storage.load_candidates()
            self.container.sync_engine.attach(await open_snapshot(*stored))
        else:
            logger.info("Snapshot disabled by configuration")

        self.startup_direction = await self.container.sync_engine.synchronize_on_startup()
        return self.startup_direction

    async def close(self) -> None:
        await self.container.sync_engine.drain()
        self.container.sync_engine.close()
        self.container.conn.dispose()

    async def __aenter__(self) -> "TimeCalApp":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


def create_app(settings_module: Optional[str] = None) -> TimeCalApp:
    load_dotenv(override=False)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))
    logger.debug("Using settings {}", settings_module)

    return TimeCalApp(build_container(settings=settings), settings)
