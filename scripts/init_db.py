"""Create the primary-store tables and, optionally, a year.

Usage: python scripts/init_db.py [YEAR]
"""

from __future__ import annotations

import asyncio
import sys

from timecal.core.exceptions import DuplicateYearError
from timecal.database.bootstrap import list_tables
from timecal.main import create_app


async def run(year: int | None) -> None:
    app = create_app()
    async with app:
        conn = app.container.conn
        print(f"OK: Schema ready -> {conn.url} (tables={len(list_tables(conn))})")
        if year is not None:
            try:
                year_id = await app.records.create_year(year)
                print(f"OK: Created year {year} (id={year_id})")
            except DuplicateYearError as exc:
                print(f"SKIP: {exc}")


def main() -> None:
    year = int(sys.argv[1]) if len(sys.argv) > 1 else None
    asyncio.run(run(year))


if __name__ == "__main__":
    main()
