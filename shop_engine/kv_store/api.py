"""
KeyValueStore public API.

This module defines the durable slot surface that entity stores persist
through. Stores speak only in slot keys and opaque byte values; they must not
depend on SQLite details.

Notes
-----
- One key per entity kind ("toys", "customers", "orders").
- Values are read whole and written whole. There are no partial updates.
"""

from __future__ import annotations

from typing import Protocol, Sequence

SlotKey = str


class KeyValueStore(Protocol):
    """
    Process-local durable key-value slots.

    Implementations are engine-owned. A single process is the only writer.
    """

    def get(self, key: SlotKey) -> bytes | None:
        """
        Return the stored value for a key.

        Parameters
        ----------
        key:
            Slot key to read.

        Returns
        -------
        bytes | None
            The stored value, or None if the slot was never written.

        Raises
        ------
        KeyValueStoreError
            If the underlying storage cannot be read.
        """
        raise NotImplementedError

    def set(self, key: SlotKey, value: bytes) -> None:
        """
        Store a value, unconditionally overwriting any prior value.

        Raises
        ------
        KeyValueStoreError
            If the underlying storage cannot be written.
        """
        raise NotImplementedError

    def delete(self, key: SlotKey) -> None:
        """Remove a slot. Removing an absent slot is a no-op."""
        raise NotImplementedError

    def keys(self) -> Sequence[SlotKey]:
        """Return the written slot keys in ascending order."""
        raise NotImplementedError
