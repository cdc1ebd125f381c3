from __future__ import annotations

from sqlalchemy import inspect

from .connection import DatabaseConnection
from .tables import metadata


def apply_schema(conn_factory: DatabaseConnection) -> None:
    """Create the primary-store tables (idempotent)."""
    metadata.create_all(conn_factory.engine)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    return sorted(inspect(conn_factory.engine).get_table_names())
