"""Export the snapshot as timecal_backup_<date>.sqlite.

Usage: python scripts/backup.py [OUT_DIR]   (default: EXPORT_DIR setting)
"""

from __future__ import annotations

import asyncio
import sys

from timecal.main import create_app


async def run(out_dir: str | None) -> None:
    app = create_app()
    async with app:
        target = out_dir or app.settings.EXPORT_DIR
        out_file = await app.backups.export_to(target)
        if out_file is None:
            raise SystemExit("Snapshot nicht verfügbar, kein Backup erstellt.")
        print(f"OK: Backup created: {out_file}")


def main() -> None:
    asyncio.run(run(sys.argv[1] if len(sys.argv) > 1 else None))


if __name__ == "__main__":
    main()
