"""
SQLite implementation of KeyValueStore.

This module owns the on-disk format of the durable slots: a single ``slots``
table in the shop database.

Threading
---------
A connection is opened per call and closed before returning, so no sqlite3
connection is ever shared across threads.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Sequence

from ..clock import Clock, SystemClock
from ..data_models import datetime_to_iso
from ..errors import KeyValueStoreError
from ..paths_and_safety import ensure_shop_directories, resolve_shop_paths
from .api import KeyValueStore, SlotKey
from .schema import SCHEMA_V1

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SqliteKeyValueStore(KeyValueStore):
    """
    SQLite-backed KeyValueStore.

    Parameters
    ----------
    db_path:
        Path to the SQLite database.
    clock:
        Source of the ``updated_at`` column.

    Notes
    -----
    The database file is created if absent. The parent directory is created as
    needed.
    """

    db_path: Path
    clock: Clock = field(default_factory=SystemClock)

    def __post_init__(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._session() as conn:
            conn.executescript(SCHEMA_V1)

    @contextmanager
    def _session(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as exc:
            raise KeyValueStoreError(f"Cannot open slot database {self.db_path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        except sqlite3.Error as exc:
            raise KeyValueStoreError(f"Slot database error in {self.db_path}: {exc}") from exc
        finally:
            conn.close()

    def get(self, key: SlotKey) -> bytes | None:
        """See KeyValueStore.get."""
        with self._session() as conn:
            row = conn.execute("SELECT value FROM slots WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        value = row["value"]
        # Rows written by hand may hold TEXT rather than BLOB.
        return value.encode("utf-8") if isinstance(value, str) else bytes(value)

    def set(self, key: SlotKey, value: bytes) -> None:
        """See KeyValueStore.set."""
        stamp = datetime_to_iso(self.clock.now())
        with self._session() as conn:
            conn.execute(
                "INSERT INTO slots(key, value, updated_at) VALUES(?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at",
                (key, sqlite3.Binary(value), stamp),
            )
        logger.debug("Wrote slot %r (%d bytes) to %s", key, len(value), self.db_path)

    def delete(self, key: SlotKey) -> None:
        """See KeyValueStore.delete."""
        with self._session() as conn:
            conn.execute("DELETE FROM slots WHERE key = ?", (key,))

    def keys(self) -> Sequence[SlotKey]:
        """See KeyValueStore.keys."""
        with self._session() as conn:
            rows = conn.execute("SELECT key FROM slots ORDER BY key ASC").fetchall()
        return [str(r["key"]) for r in rows]


def open_kv_store(shop_name: str, data_root: Path | None = None) -> SqliteKeyValueStore:
    """
    Convenience constructor that ensures shop directories exist.

    Parameters
    ----------
    shop_name:
        Name of the shop.
    data_root:
        Optional override for the data root.

    Returns
    -------
    SqliteKeyValueStore
        Ready-to-use SQLite-backed slot store.
    """
    paths = resolve_shop_paths(shop_name=shop_name, data_root=data_root)
    ensure_shop_directories(paths)
    return SqliteKeyValueStore(db_path=paths.db_path)
