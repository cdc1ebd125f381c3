"""Example: use the service layer directly (no UI).

Creates the current year if needed, books a day and prints the month stats.
"""

import asyncio
from datetime import date

from timecal.hours.formatting import format_hours, month_name
from timecal.main import create_app


async def main():
    app = create_app()
    async with app:
        today = date.today()
        year = await app.records.get_year_by_number(today.year)
        year_id = year.year_id if year else await app.records.create_year(today.year)

        months = await app.records.list_months(year_id)
        month = months[today.month - 1].month
        days = await app.records.list_days(month.month_id)
        first_workday = next(d for d in days if not d.is_weekend)

        await app.records.update_day(first_workday.day_id, {"von": "08:00", "bis": "16:30", "pause": "00:30"})

        stats = await app.records.get_month_stats(month.month_id)
        print(
            f"{month_name(month.month)} {month.year}: "
            f"Soll {format_hours(stats.soll_stunden)} h, Ist {format_hours(stats.ist_stunden)} h, "
            f"Differenz {format_hours(stats.differenz)} h"
        )


if __name__ == "__main__":
    asyncio.run(main())
