"""Data models for the toy shop.

This module defines the canonical, typed representation of the three entity
kinds: Toy, Customer and Order. Stores hold these objects; the wire mapping
produced by ``to_dict`` is what ends up in each durable slot.

Notes
-----
- Entities are immutable. Edits are wholesale replacements built with
  :func:`dataclasses.replace` and handed to a store's ``update``.
- ``Order.toy_name`` and ``Order.customer_name`` are denormalized copies of
  display names, not references. Nothing checks them against existing records.
- Wire keys keep the shop's historical camelCase names (``contactInfo``,
  ``totalPrice`` and so on).
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Self
from uuid import UUID

from .clock import Clock, SystemClock

# Flat per-unit price applied to every order, whatever the toy.
UNIT_PRICE = 100.0


class OrderStatus(str, Enum):
    """Fulfilment state of an order."""

    PENDING = "Pending"
    COMPLETED = "Completed"


class PaymentStatus(str, Enum):
    """Payment state of an order."""

    UNPAID = "Unpaid"
    PAID = "Paid"


def order_total(quantity: int) -> float:
    """Return the total price for ``quantity`` units at :data:`UNIT_PRICE`."""
    return float(quantity) * UNIT_PRICE


def datetime_to_iso(dt: datetime) -> str:
    """Serialize an aware datetime as an ISO-8601 UTC string.

    Parameters
    ----------
    dt
        A timezone-aware datetime.

    Returns
    -------
    str
        ISO-8601 timestamp in UTC, microseconds preserved.

    Raises
    ------
    ValueError
        If `dt` is naive (has no timezone).
    """
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return dt.astimezone(timezone.utc).isoformat()


def datetime_from_iso(value: str) -> datetime:
    """Parse an ISO-8601 timestamp as an aware datetime (naive input is taken as UTC)."""
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def _require_keys(payload: Mapping[str, Any], keys: set[str], *, context: str) -> None:
    if not isinstance(payload, Mapping):
        raise ValueError(f"{context} must be a mapping, got {type(payload).__name__}")
    missing = keys.difference(payload.keys())
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ValueError(f"Missing required keys in {context}: {missing_str}")


def _as_str(payload: Mapping[str, Any], key: str, *, context: str) -> str:
    value = payload[key]
    if not isinstance(value, str):
        raise ValueError(f"{context}.{key} must be a string")
    return value


def _as_int(payload: Mapping[str, Any], key: str, *, context: str) -> int:
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{context}.{key} must be an integer")
    return value


def _as_float(payload: Mapping[str, Any], key: str, *, context: str) -> float:
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{context}.{key} must be a number")
    try:
        number = float(value)
    except OverflowError as exc:
        raise ValueError(f"{context}.{key} is out of range") from exc
    if not math.isfinite(number):
        raise ValueError(f"{context}.{key} must be a finite number")
    return number


@dataclass(frozen=True, slots=True)
class Toy:
    """A stocked toy.

    Attributes
    ----------
    id:
        Identity, assigned once at creation.
    name:
        Display name. Required.
    category:
        Free-text category, for example "Electronics".
    price:
        Unit price, non-negative.
    quantity:
        Units in stock, non-negative.
    description:
        Free-text description.
    """

    id: UUID
    name: str
    category: str
    price: float
    quantity: int
    description: str = ""

    @classmethod
    def new(
        cls,
        *,
        name: str,
        category: str,
        price: float,
        quantity: int,
        description: str = "",
    ) -> Self:
        """Create a Toy with a freshly generated identity."""
        return cls(
            id=uuid.uuid4(),
            name=name,
            category=category,
            price=float(price),
            quantity=int(quantity),
            description=description,
        )

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Self:
        """Construct a :class:`Toy` from a mapping."""

        _require_keys(
            payload,
            {"id", "name", "category", "price", "quantity", "description"},
            context="toy",
        )
        return cls(
            id=UUID(_as_str(payload, "id", context="toy")),
            name=_as_str(payload, "name", context="toy"),
            category=_as_str(payload, "category", context="toy"),
            price=_as_float(payload, "price", context="toy"),
            quantity=_as_int(payload, "quantity", context="toy"),
            description=_as_str(payload, "description", context="toy"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert this model to a JSON-serializable dict."""

        return {
            "id": str(self.id),
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "quantity": self.quantity,
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class Order:
    """A customer order.

    Notes
    -----
    ``total_price`` is derived from ``quantity`` at :data:`UNIT_PRICE` when the
    order is created or repriced; it is stored, not recomputed on read.
    ``order_date`` is set once by :meth:`new` and carried through every edit.
    """

    id: UUID
    toy_name: str
    quantity: int
    total_price: float
    customer_name: str
    order_date: datetime
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.UNPAID

    @classmethod
    def new(
        cls,
        *,
        toy_name: str,
        quantity: int,
        customer_name: str,
        status: OrderStatus = OrderStatus.PENDING,
        payment_status: PaymentStatus = PaymentStatus.UNPAID,
        clock: Clock | None = None,
    ) -> Self:
        """
        Create an Order with a fresh identity, a priced total and a creation date.

        Parameters
        ----------
        toy_name:
            Name of the ordered toy (free text).
        quantity:
            Units ordered.
        customer_name:
            Name of the ordering customer (free text).
        status, payment_status:
            Initial states; the order form defaults to Pending / Unpaid.
        clock:
            Source of ``order_date``. Defaults to :class:`SystemClock`.

        Returns
        -------
        Order
            The new order.
        """
        now = (clock or SystemClock()).now()
        return cls(
            id=uuid.uuid4(),
            toy_name=toy_name,
            quantity=int(quantity),
            total_price=order_total(quantity),
            customer_name=customer_name,
            order_date=now,
            status=OrderStatus(status),
            payment_status=PaymentStatus(payment_status),
        )

    def with_quantity(self, quantity: int) -> Order:
        """Return a copy with ``quantity`` replaced and ``total_price`` repriced."""
        return replace(self, quantity=int(quantity), total_price=order_total(quantity))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Self:
        """Construct an :class:`Order` from a mapping."""

        _require_keys(
            payload,
            {
                "id",
                "toyName",
                "quantity",
                "totalPrice",
                "customerName",
                "orderDate",
                "status",
                "paymentStatus",
            },
            context="order",
        )
        return cls(
            id=UUID(_as_str(payload, "id", context="order")),
            toy_name=_as_str(payload, "toyName", context="order"),
            quantity=_as_int(payload, "quantity", context="order"),
            total_price=_as_float(payload, "totalPrice", context="order"),
            customer_name=_as_str(payload, "customerName", context="order"),
            order_date=datetime_from_iso(_as_str(payload, "orderDate", context="order")),
            status=OrderStatus(_as_str(payload, "status", context="order")),
            payment_status=PaymentStatus(_as_str(payload, "paymentStatus", context="order")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert this model to a JSON-serializable dict."""

        return {
            "id": str(self.id),
            "toyName": self.toy_name,
            "quantity": self.quantity,
            "totalPrice": self.total_price,
            "customerName": self.customer_name,
            "orderDate": datetime_to_iso(self.order_date),
            "status": self.status.value,
            "paymentStatus": self.payment_status.value,
        }


@dataclass(frozen=True, slots=True)
class Customer:
    """A shop customer.

    Notes
    -----
    ``order_history`` is part of the record shape but no operation fills it;
    orders refer to customers by name only.
    """

    id: UUID
    name: str
    contact_info: str
    address: str
    order_history: tuple[Order, ...] = field(default_factory=tuple)

    @classmethod
    def new(cls, *, name: str, contact_info: str, address: str) -> Self:
        """Create a Customer with a freshly generated identity."""
        return cls(id=uuid.uuid4(), name=name, contact_info=contact_info, address=address)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Self:
        """Construct a :class:`Customer` from a mapping."""

        _require_keys(payload, {"id", "name", "contactInfo", "address"}, context="customer")
        history_raw = payload.get("orderHistory", [])
        if not isinstance(history_raw, list):
            raise ValueError("customer.orderHistory must be a list")
        return cls(
            id=UUID(_as_str(payload, "id", context="customer")),
            name=_as_str(payload, "name", context="customer"),
            contact_info=_as_str(payload, "contactInfo", context="customer"),
            address=_as_str(payload, "address", context="customer"),
            order_history=tuple(Order.from_dict(item) for item in history_raw),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert this model to a JSON-serializable dict."""

        return {
            "id": str(self.id),
            "name": self.name,
            "contactInfo": self.contact_info,
            "address": self.address,
            "orderHistory": [o.to_dict() for o in self.order_history],
        }
