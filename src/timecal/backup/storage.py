from __future__ import annotations

import base64
import binascii
import json
import os
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Optional

from loguru import logger

from ..core.constants import BACKUP_KV_KEY, BACKUP_ROW_KEY, BACKUP_TABLE
from ..core.exceptions import BackupError


class KeyValueFile:
    """Small persistent key-value slot: a JSON object on disk holding text values."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except ValueError:
            data = {}
        data[key] = value

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(data), encoding="utf-8")
        os.replace(tmp, self._path)


class BlobDatabase:
    """Structured secondary slot: a SQLite file with a key/BLOB table."""

    def __init__(self, path: str | Path, *, table: str = BACKUP_TABLE):
        self._path = Path(path)
        self._table = table

    @property
    def path(self) -> Path:
        return self._path

    def _connect(self) -> sqlite3.Connection:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self._path)
        conn.execute(f"CREATE TABLE IF NOT EXISTS {self._table} (key TEXT PRIMARY KEY, data BLOB NOT NULL)")
        return conn

    def get(self, key: str) -> Optional[bytes]:
        if not self._path.exists():
            return None
        with closing(self._connect()) as conn:
            row = conn.execute(f"SELECT data FROM {self._table} WHERE key=?", (key,)).fetchone()
            return bytes(row[0]) if row else None

    def put(self, key: str, data: bytes) -> None:
        with closing(self._connect()) as conn:
            with conn:
                conn.execute(
                    f"INSERT INTO {self._table}(key, data) VALUES(?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET data=excluded.data",
                    (key, sqlite3.Binary(data)),
                )


class BackupPersistence:
    """Stores the snapshot bytes in two redundant locations.

    Load prefers the base64 key-value slot and falls back to the BLOB database;
    save writes both.
    """

    def __init__(self, slot: KeyValueFile, blobs: BlobDatabase):
        self._slot = slot
        self._blobs = blobs

    @classmethod
    def from_paths(cls, kv_path: str | Path, db_path: str | Path) -> "BackupPersistence":
        return cls(KeyValueFile(kv_path), BlobDatabase(db_path))

    async def load_candidates(self) -> list[bytes]:
        """Every readable stored copy, key-value slot first."""
        candidates: list[bytes] = []
        try:
            text = self._slot.get(BACKUP_KV_KEY)
        except (OSError, ValueError) as exc:
            logger.warning("Key-value backup slot unreadable: {}", exc)
            text = None

        if text:
            try:
                candidates.append(base64.b64decode(text, validate=True))
            except (binascii.Error, ValueError) as exc:
                logger.warning("Base64 decode of backup slot failed: {}", exc)

        try:
            data = self._blobs.get(BACKUP_ROW_KEY)
        except (sqlite3.Error, OSError) as exc:
            logger.warning("Backup database restore failed: {}", exc)
            data = None

        if data:
            candidates.append(data)
        return candidates

    async def load(self) -> Optional[bytes]:
        candidates = await self.load_candidates()
        if not candidates:
            return None
        logger.info("Snapshot restored from backup storage ({} bytes)", len(candidates[0]))
        return candidates[0]

    async def save(self, data: bytes) -> None:
        errors: list[str] = []

        try:
            self._slot.set(BACKUP_KV_KEY, base64.b64encode(data).decode("ascii"))
            logger.debug("Snapshot saved to key-value slot")
        except OSError as exc:
            errors.append(f"key-value slot: {exc}")

        try:
            self._blobs.put(BACKUP_ROW_KEY, data)
            logger.debug("Snapshot saved to backup database")
        except (sqlite3.Error, OSError) as exc:
            errors.append(f"backup database: {exc}")

        if errors:
            raise BackupError("Saving snapshot failed ({})".format("; ".join(errors)))
