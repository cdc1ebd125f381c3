from __future__ import annotations

import asyncio
import sqlite3

import pytest

from timecal.core.exceptions import SnapshotSchemaError, SnapshotUnavailableError, SnapshotValidationError
from timecal.snapshot.schema import SNAPSHOT_DDL
from timecal.snapshot import store as store_module
from timecal.snapshot.store import SnapshotRows, SnapshotStore, open_snapshot
from timecal.snapshot.sync import rows_to_records


def _image(*statements: str) -> bytes:
    conn = sqlite3.connect(":memory:")
    for sql in statements:
        conn.execute(sql)
    conn.commit()
    data = conn.serialize()
    conn.close()
    return data


def _valid_day_row(**overrides):
    row = {
        "id": 1,
        "monthId": 1,
        "yearId": 1,
        "year": 2025,
        "month": 1,
        "day": 1,
        "date": "2025-01-01",
        "dayOfWeek": 3,
        "isWeekend": 0,
        "isoWeek": 1,
        "von": "",
        "bis": "",
        "von2": "",
        "bis2": "",
        "pause": "00:30",
        "code": "",
        "comment": "",
        "sollStunden": 8.0,
        "istStunden": 0.0,
    }
    row.update(overrides)
    return row


def test_fresh_snapshot_has_schema_and_no_data(snapshot):
    snapshot.validate_schema()
    assert snapshot.has_data() is False


def test_serialized_snapshot_opens_again(snapshot):
    snapshot.replace_all(years=[(1, 2025)], months=[(1, 1, 2025, 1)], days=[])

    reopened = SnapshotStore.from_bytes(snapshot.serialize())
    reopened.validate_schema()

    assert reopened.has_data() is True
    assert reopened.read_rows().months == [{"id": 1, "yearId": 1, "year": 2025, "month": 1}]
    reopened.close()


def test_replace_all_is_a_full_replace(snapshot):
    snapshot.replace_all(years=[(1, 2024), (2, 2025)], months=[], days=[])
    snapshot.replace_all(years=[(7, 2030)], months=[], days=[])

    assert snapshot.read_rows().years == [{"id": 7, "year": 2030}]


def test_garbage_bytes_are_not_a_snapshot():
    with pytest.raises(SnapshotSchemaError):
        store = SnapshotStore.from_bytes(b"definitely not sqlite" * 100)
        store.validate_schema()


def test_foreign_schema_is_rejected():
    data = _image("CREATE TABLE years (id INTEGER PRIMARY KEY, label TEXT)")
    store = SnapshotStore.from_bytes(data)

    with pytest.raises(SnapshotSchemaError):
        store.validate_schema()
    store.close()


def test_missing_table_is_rejected():
    data = _image(*SNAPSHOT_DDL[:2])
    store = SnapshotStore.from_bytes(data)

    with pytest.raises(SnapshotSchemaError):
        store.validate_schema()
    store.close()


def test_rows_are_mapped_to_records():
    rows = SnapshotRows(
        years=[{"id": 1, "year": 2025}],
        months=[{"id": 1, "yearId": 1, "year": 2025, "month": 1}],
        days=[_valid_day_row(code="U", comment=None)],
    )

    records = rows_to_records(rows)

    assert records.years[0].year_id == 1
    assert records.days[0].code.value == "U"
    assert records.days[0].comment == ""
    assert records.days[0].is_weekend is False


@pytest.mark.parametrize(
    "bad",
    [
        {"code": "X"},
        {"month": 13},
        {"date": "2025-13-45"},
        {"dayOfWeek": 7},
        {"unexpected": 1},
        {"isWeekend": 1},
        {"dayOfWeek": 0},
        {"isoWeek": 2},
        {"date": "2030-07-20"},
        {"month": 2, "day": 31, "date": "2025-02-31"},
    ],
)
def test_mismatching_rows_are_rejected(bad):
    rows = SnapshotRows(days=[_valid_day_row(**bad)])

    with pytest.raises(SnapshotValidationError):
        rows_to_records(rows)


def test_open_snapshot_skips_unusable_copies(snapshot):
    snapshot.replace_all(years=[(1, 2025)], months=[], days=[])
    good = snapshot.serialize()

    store = asyncio.run(open_snapshot(None, b"not a db", good))

    assert store.has_data() is True
    store.close()


def test_open_snapshot_without_copies_creates_empty_one():
    store = asyncio.run(open_snapshot())

    store.validate_schema()
    assert store.has_data() is False
    store.close()


def test_open_snapshot_returns_none_without_engine(monkeypatch, snapshot):
    def unavailable():
        raise SnapshotUnavailableError("no serialize support")

    monkeypatch.setattr(store_module, "_require_engine", unavailable)

    assert asyncio.run(open_snapshot(snapshot.serialize())) is None
