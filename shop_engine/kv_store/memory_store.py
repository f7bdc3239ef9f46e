"""In-memory KeyValueStore for tests and throwaway sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .api import KeyValueStore, SlotKey


@dataclass(slots=True)
class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed slots. Contents live only as long as the instance."""

    slots: dict[SlotKey, bytes] = field(default_factory=dict)

    def get(self, key: SlotKey) -> bytes | None:
        return self.slots.get(key)

    def set(self, key: SlotKey, value: bytes) -> None:
        self.slots[key] = bytes(value)

    def delete(self, key: SlotKey) -> None:
        self.slots.pop(key, None)

    def keys(self) -> Sequence[SlotKey]:
        return sorted(self.slots)
