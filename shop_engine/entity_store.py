"""
Generic entity store.

An EntityStore is the authoritative in-memory holder of one entity kind's
ordered collection. It mirrors that collection into a durable key-value slot
after every mutation and notifies subscribers synchronously.

Persistence
-----------
- Load happens once, at construction. A missing slot or one that fails to
  decode leaves the store empty.
- Save rewrites the whole slot after every mutation (last write wins).
- Neither failure is raised to the caller. The outcome is kept in
  ``last_load`` / ``last_save`` and logged at WARNING.

Notifications
-------------
Subscribers run on the mutating thread, after the collection changed and after
the slot was written, so they always observe post-mutation state. Mutations
that leave the collection unchanged (update or delete of an absent identity)
still save but do not notify.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Iterable, Iterator, Protocol, TypeVar
from uuid import UUID

from .codec import EntityCodec
from .errors import CodecError, KeyValueStoreError
from .kv_store.api import KeyValueStore, SlotKey

logger = logging.getLogger(__name__)


class Identified(Protocol):
    """Entities carry an immutable identity."""

    @property
    def id(self) -> UUID: ...

    def to_dict(self) -> dict: ...


E = TypeVar("E", bound=Identified)


class ChangeAction(str, Enum):
    """Kind of mutation reported to subscribers."""

    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"


@dataclass(frozen=True, slots=True)
class StoreChange:
    """
    A single change notification.

    Attributes
    ----------
    key:
        Slot key of the store that changed ("toys", "customers", "orders").
    action:
        What happened.
    entity_ids:
        Identities affected by the mutation, in collection order.
    """

    key: SlotKey
    action: ChangeAction
    entity_ids: tuple[UUID, ...]


@dataclass(frozen=True, slots=True)
class PersistenceResult:
    """
    Outcome of a load or save.

    Attributes
    ----------
    ok:
        False if the operation failed and was suppressed.
    error:
        Failure description when ``ok`` is False.
    """

    ok: bool
    error: str | None = None

    @classmethod
    def success(cls) -> PersistenceResult:
        return cls(ok=True)

    @classmethod
    def failure(cls, error: BaseException) -> PersistenceResult:
        return cls(ok=False, error=str(error))


Subscriber = Callable[[StoreChange], None]


class EntityStore(Generic[E]):
    """
    Ordered, persisted, observable collection of one entity kind.

    Parameters
    ----------
    kv:
        Durable slot storage shared by all stores of a shop.
    key:
        Slot key for this entity kind.
    codec:
        Encoder/decoder for the slot value.
    """

    def __init__(self, kv: KeyValueStore, *, key: SlotKey, codec: EntityCodec[E]) -> None:
        self._kv = kv
        self._key = key
        self._codec = codec
        self._items: list[E] = []
        self._subscribers: list[Subscriber] = []
        self.last_load: PersistenceResult = PersistenceResult.success()
        self.last_save: PersistenceResult | None = None
        self._load()

    @property
    def key(self) -> SlotKey:
        """Return the slot key this store persists to."""
        return self._key

    # ---------------- Queries ----------------

    def all(self) -> tuple[E, ...]:
        """Return a snapshot of the collection in presentation order."""
        return tuple(self._items)

    def get(self, entity_id: UUID) -> E | None:
        """Return the first entity with ``entity_id``, or None."""
        index = self.index_of(entity_id)
        return None if index is None else self._items[index]

    def index_of(self, entity_id: UUID) -> int | None:
        """Return the current position of ``entity_id``, or None if absent."""
        for index, item in enumerate(self._items):
            if item.id == entity_id:
                return index
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[E]:
        return iter(tuple(self._items))

    def __contains__(self, entity_id: object) -> bool:
        return isinstance(entity_id, UUID) and self.index_of(entity_id) is not None

    # ---------------- Mutations ----------------

    def add(self, entity: E) -> None:
        """
        Append an entity whose identity was assigned by its creator.

        No duplicate-identity check is performed.
        """
        self._items.append(entity)
        self.save()
        self._notify(ChangeAction.ADDED, (entity.id,))

    def update(self, entity: E) -> None:
        """
        Replace the entity with the same identity, keeping its position.

        Absent identities leave the collection unchanged. The slot is written
        either way.
        """
        index = self.index_of(entity.id)
        if index is not None:
            self._items[index] = entity
        self.save()
        if index is not None:
            self._notify(ChangeAction.UPDATED, (entity.id,))

    def delete_at(self, positions: Iterable[int]) -> None:
        """
        Remove the entities at the given ordinal positions.

        Parameters
        ----------
        positions:
            Positions in the current ordered view. Duplicates are ignored.

        Raises
        ------
        IndexError
            If any position is negative or out of range. Nothing is removed.
        """
        wanted = sorted(set(positions))
        size = len(self._items)
        for position in wanted:
            if position < 0 or position >= size:
                raise IndexError(f"{self._key}: position {position} out of range for {size} items")

        removed = tuple(self._items[p].id for p in wanted)
        for position in reversed(wanted):
            del self._items[position]
        self.save()
        if removed:
            self._notify(ChangeAction.DELETED, removed)

    def delete(self, entity: E | UUID) -> None:
        """
        Remove one entity located by identity.

        Accepts the entity itself or its id. Absent identities leave the
        collection unchanged.
        """
        entity_id = entity if isinstance(entity, UUID) else entity.id
        index = self.index_of(entity_id)
        if index is not None:
            del self._items[index]
        self.save()
        if index is not None:
            self._notify(ChangeAction.DELETED, (entity_id,))

    # ---------------- Notifications ----------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback invoked synchronously after each change.

        Returns
        -------
        Callable[[], None]
            Unsubscribe function. Calling it more than once is harmless.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, action: ChangeAction, entity_ids: tuple[UUID, ...]) -> None:
        change = StoreChange(key=self._key, action=action, entity_ids=entity_ids)
        for callback in list(self._subscribers):
            try:
                callback(change)
            except Exception:
                logger.exception("Subscriber failed handling %s change on %r", action.value, self._key)

    # ---------------- Persistence ----------------

    def save(self) -> PersistenceResult:
        """
        Write the whole collection to the durable slot.

        Returns
        -------
        PersistenceResult
            Outcome, also kept as ``last_save``. Failures are logged, never raised.
        """
        try:
            self._kv.set(self._key, self._codec.encode(self._items))
        except (CodecError, KeyValueStoreError) as exc:
            logger.warning("Failed to save %s to slot %r: %s", self._codec.kind, self._key, exc)
            self.last_save = PersistenceResult.failure(exc)
        else:
            logger.debug("Saved %d %s to slot %r", len(self._items), self._codec.kind, self._key)
            self.last_save = PersistenceResult.success()
        return self.last_save

    def _load(self) -> None:
        try:
            raw = self._kv.get(self._key)
            if raw is None:
                logger.debug("Slot %r is empty; starting with no %s", self._key, self._codec.kind)
                return
            self._items = self._codec.decode(raw)
        except (CodecError, KeyValueStoreError) as exc:
            logger.warning(
                "Failed to load %s from slot %r, starting empty: %s", self._codec.kind, self._key, exc
            )
            self._items = []
            self.last_load = PersistenceResult.failure(exc)
            return
        logger.debug("Loaded %d %s from slot %r", len(self._items), self._codec.kind, self._key)
