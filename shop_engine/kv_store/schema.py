"""SQLite schema for the key-value slot store.

Notes
-----
One row per slot. The value column holds the opaque serialized collection.
There is no schema version table: slot contents carry no version tag either.
"""

from __future__ import annotations

SCHEMA_V1 = """
PRAGMA journal_mode = WAL;

CREATE TABLE IF NOT EXISTS slots (
    key        TEXT PRIMARY KEY,
    value      BLOB NOT NULL,
    updated_at TEXT NOT NULL
);
"""
