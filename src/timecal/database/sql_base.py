from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.engine import Connection

from .connection import DatabaseConnection


@contextmanager
def db_transaction(conn_factory: DatabaseConnection) -> Iterator[Connection]:
    """Yield a connection inside a transaction; commit on success, roll back on error."""
    with conn_factory.engine.begin() as conn:
        yield conn


def fetchone(result) -> Optional[Dict[str, Any]]:
    row = result.mappings().first()
    return dict(row) if row else None


def fetchall(result) -> List[Dict[str, Any]]:
    return [dict(r) for r in result.mappings().all()]
