from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path

import pytest

from shop_engine.clock import FixedClock
from shop_engine.errors import KeyValueStoreError
from shop_engine.kv_store.sqlite_store import SqliteKeyValueStore


def test_sqlite_slots_roundtrip(tmp_path: Path) -> None:
    """Values written to a slot should read back exactly, across instances."""
    store = SqliteKeyValueStore(db_path=tmp_path / "nested" / "shop.sqlite")

    store.set("toys", b"[1]")

    assert store.get("toys") == b"[1]"
    assert SqliteKeyValueStore(db_path=tmp_path / "nested" / "shop.sqlite").get("toys") == b"[1]"


def test_sqlite_set_overwrites_and_stamps(tmp_path: Path) -> None:
    db_path = tmp_path / "shop.sqlite"
    clock = FixedClock(datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
    store = SqliteKeyValueStore(db_path=db_path, clock=clock)

    store.set("orders", b"old")
    store.set("orders", b"new")

    assert store.get("orders") == b"new"
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute("SELECT key, updated_at FROM slots").fetchall()
    finally:
        conn.close()
    assert rows == [("orders", "2025-01-02T03:04:05+00:00")]


def test_sqlite_missing_key_and_delete(tmp_path: Path) -> None:
    store = SqliteKeyValueStore(db_path=tmp_path / "shop.sqlite")

    assert store.get("customers") is None
    store.set("customers", b"[]")
    store.set("toys", b"[]")
    assert store.keys() == ["customers", "toys"]

    store.delete("customers")
    store.delete("customers")

    assert store.get("customers") is None
    assert store.keys() == ["toys"]


def test_sqlite_reads_text_values(tmp_path: Path) -> None:
    db_path = tmp_path / "shop.sqlite"
    store = SqliteKeyValueStore(db_path=db_path)
    conn = sqlite3.connect(db_path)
    try:
        with conn:
            conn.execute(
                "INSERT INTO slots(key, value, updated_at) VALUES('toys', '[]', '2025-01-01T00:00:00+00:00')"
            )
    finally:
        conn.close()

    assert store.get("toys") == b"[]"


def test_sqlite_errors_are_wrapped(tmp_path: Path) -> None:
    db_path = tmp_path / "shop.sqlite"
    store = SqliteKeyValueStore(db_path=db_path)
    conn = sqlite3.connect(db_path)
    try:
        conn.execute("DROP TABLE slots")
        conn.commit()
    finally:
        conn.close()

    with pytest.raises(KeyValueStoreError):
        store.get("toys")
