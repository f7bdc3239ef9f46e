"""
Domain exceptions for the toy shop engine.

Notes
-----
Expected failure modes map to a domain exception with a clear meaning. Stores
suppress persistence failures by default; these types are what they record and
log when they do.
"""

from __future__ import annotations


class ShopError(RuntimeError):
    """Base exception for all toy shop domain failures."""


class CodecError(ShopError):
    """Raised when a collection cannot be encoded to or decoded from its slot value."""


class KeyValueStoreError(ShopError):
    """Raised when the durable key-value storage cannot be read or written."""


class InvalidEntityError(ShopError):
    """Raised when an entity is missing required fields."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class ShopPathError(ShopError):
    """Raised when a data root or shop name violates path policy."""
