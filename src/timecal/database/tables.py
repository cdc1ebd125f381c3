from __future__ import annotations

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, MetaData, String, Table

metadata = MetaData()

years = Table(
    "years",
    metadata,
    Column("year_id", Integer, primary_key=True, autoincrement=True),
    Column("year", Integer, nullable=False, unique=True, index=True),
)

months = Table(
    "months",
    metadata,
    Column("month_id", Integer, primary_key=True, autoincrement=True),
    Column("year_id", Integer, ForeignKey("years.year_id"), nullable=False, index=True),
    Column("year", Integer, nullable=False, index=True),
    Column("month", Integer, nullable=False, index=True),
)

days = Table(
    "days",
    metadata,
    Column("day_id", Integer, primary_key=True, autoincrement=True),
    Column("month_id", Integer, ForeignKey("months.month_id"), nullable=False, index=True),
    Column("year_id", Integer, nullable=False, index=True),
    Column("year", Integer, nullable=False, index=True),
    Column("month", Integer, nullable=False, index=True),
    Column("day", Integer, nullable=False, index=True),
    Column("date", String(10), nullable=False, index=True),
    Column("day_of_week", Integer, nullable=False),
    Column("is_weekend", Boolean, nullable=False),
    Column("iso_week", Integer, nullable=False),
    Column("von", String(5), nullable=False, default=""),
    Column("bis", String(5), nullable=False, default=""),
    Column("von2", String(5), nullable=False, default=""),
    Column("bis2", String(5), nullable=False, default=""),
    Column("pause", String(5), nullable=False, default=""),
    Column("code", String(2), nullable=False, default=""),
    Column("comment", String(500), nullable=False, default=""),
    Column("soll_stunden", Float, nullable=False, default=0.0),
    Column("ist_stunden", Float, nullable=False, default=0.0),
)
