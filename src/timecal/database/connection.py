from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool


@dataclass
class DBConfig:
    url: str
    echo: bool = False


class DatabaseConnection:
    """Owns the SQLAlchemy engine of the primary store.

    Note: Constructed explicitly by the container and disposed on shutdown;
    there is no process-wide instance.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._engine: Optional[Engine] = None

    @property
    def url(self) -> str:
        return self._config.url

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        url = make_url(self._config.url)
        if url.get_backend_name() != "sqlite":
            return create_engine(url, echo=self._config.echo, pool_pre_ping=True)

        if url.database in (None, "", ":memory:"):
            # One shared connection, otherwise every checkout sees an empty database.
            return create_engine(
                url,
                echo=self._config.echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )

        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(url, echo=self._config.echo)

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
