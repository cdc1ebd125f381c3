"""Import a snapshot file and rebuild the primary store from it.

Usage: python scripts/restore.py BACKUP_FILE
"""

from __future__ import annotations

import asyncio
import sys

from timecal.main import create_app


async def run(path: str) -> bool:
    app = create_app()
    async with app:
        return await app.backups.import_file(path)


def main() -> None:
    if len(sys.argv) < 2:
        raise SystemExit("Usage: python scripts/restore.py BACKUP_FILE")
    if not asyncio.run(run(sys.argv[1])):
        raise SystemExit(f"Import fehlgeschlagen: {sys.argv[1]}")
    print(f"OK: Restored from {sys.argv[1]}")


if __name__ == "__main__":
    main()
