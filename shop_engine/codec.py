"""
Slot value codec.

A durable slot holds the JSON serialization of an entire ordered collection:
a UTF-8 encoded JSON array of entity mappings. There is no envelope and no
schema version tag.

Design constraints
------------------
- Decoding is all-or-nothing: one malformed element rejects the whole value.
- Serialization is deterministic for a given in-memory collection.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Mapping, Protocol, TypeVar

from .errors import CodecError


class SupportsToDict(Protocol):
    """Protocol for entity models that can be serialized to JSON."""

    def to_dict(self) -> dict[str, Any]:
        """Convert the entity to a JSON-serializable dictionary."""
        ...


T = TypeVar("T", bound=SupportsToDict)


@dataclass(frozen=True, slots=True)
class CodecOptions:
    """Options controlling slot serialization."""

    indent: int | None = None
    sort_keys: bool = True
    ensure_ascii: bool = False


def encode_collection(entities: Iterable[SupportsToDict], options: CodecOptions | None = None) -> bytes:
    """
    Serialize an ordered collection of entities to a slot value.

    Parameters
    ----------
    entities:
        Entities in presentation order.
    options:
        Serialization options. Defaults are compact, sorted-key JSON.

    Returns
    -------
    bytes
        UTF-8 encoded JSON array.

    Raises
    ------
    CodecError
        If any entity cannot be converted to JSON.
    """
    opts = options or CodecOptions()
    try:
        payload = [entity.to_dict() for entity in entities]
        text = json.dumps(
            payload,
            indent=opts.indent,
            sort_keys=opts.sort_keys,
            ensure_ascii=opts.ensure_ascii,
            allow_nan=False,
        )
    except (TypeError, ValueError, AttributeError) as exc:
        raise CodecError(f"Failed to encode collection: {exc}") from exc
    return text.encode("utf-8")


def decode_collection(data: bytes | str, decode_item: Callable[[Mapping[str, Any]], T]) -> list[T]:
    """
    Decode a slot value back into an ordered list of entities.

    Parameters
    ----------
    data:
        Raw slot value.
    decode_item:
        Per-element constructor, typically an entity's ``from_dict``.

    Returns
    -------
    list
        Entities in stored order.

    Raises
    ------
    CodecError
        If the value is not valid UTF-8 JSON, is not an array, or any element
        fails to decode.
    """
    try:
        text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        payload = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        raise CodecError(f"Slot value is not valid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise CodecError(f"Slot value must be a JSON array, got {type(payload).__name__}")

    out: list[T] = []
    for position, item in enumerate(payload):
        try:
            out.append(decode_item(item))
        except (KeyError, TypeError, ValueError) as exc:
            raise CodecError(f"Invalid element at position {position}: {exc}") from exc
    return out


@dataclass(frozen=True, slots=True)
class EntityCodec(Generic[T]):
    """
    Binds an entity kind to its element decoder.

    Attributes
    ----------
    kind:
        Human-readable entity kind, used in log messages.
    decode_item:
        Per-element constructor.
    """

    kind: str
    decode_item: Callable[[Mapping[str, Any]], T]

    def encode(self, entities: Iterable[T]) -> bytes:
        return encode_collection(entities)

    def decode(self, data: bytes | str) -> list[T]:
        return decode_collection(data, self.decode_item)
