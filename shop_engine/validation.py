"""
Required-field checks for entity forms.

Stores accept whatever they are given. Presentation layers (GUI dialogs, CLI)
call these before handing an entity to a store, the same way the shop's forms
gate their Save buttons.

Invariants
----------
- Text fields count as missing when blank after stripping.
- Toy price must be finite. Toy price and quantity must be non-negative.
- Order quantity must be positive.
"""

from __future__ import annotations

import math

from .data_models import Customer, Order, Toy
from .errors import InvalidEntityError


def _blank(value: str) -> bool:
    return not value.strip()


def toy_problems(toy: Toy) -> list[str]:
    """Return human-readable problems with ``toy``; empty if it is acceptable."""
    problems: list[str] = []
    if _blank(toy.name):
        problems.append("name is required")
    if _blank(toy.category):
        problems.append("category is required")
    if not math.isfinite(toy.price):
        problems.append("price must be a finite number")
    elif toy.price < 0:
        problems.append("price must not be negative")
    if toy.quantity < 0:
        problems.append("quantity must not be negative")
    return problems


def customer_problems(customer: Customer) -> list[str]:
    """Return human-readable problems with ``customer``; empty if it is acceptable."""
    problems: list[str] = []
    if _blank(customer.name):
        problems.append("name is required")
    if _blank(customer.contact_info):
        problems.append("contact info is required")
    if _blank(customer.address):
        problems.append("address is required")
    return problems


def order_problems(order: Order) -> list[str]:
    """Return human-readable problems with ``order``; empty if it is acceptable."""
    problems: list[str] = []
    if _blank(order.toy_name):
        problems.append("toy name is required")
    if _blank(order.customer_name):
        problems.append("customer name is required")
    if order.quantity <= 0:
        problems.append("quantity must be positive")
    return problems


def missing_fields(entity: Toy | Customer | Order) -> list[str]:
    """
    Return the problems for any entity kind.

    Parameters
    ----------
    entity:
        A Toy, Customer or Order.

    Returns
    -------
    list[str]
        Problems in field order. Empty when the entity may be saved.

    Raises
    ------
    TypeError
        If ``entity`` is not one of the three entity kinds.
    """
    if isinstance(entity, Toy):
        return toy_problems(entity)
    if isinstance(entity, Customer):
        return customer_problems(entity)
    if isinstance(entity, Order):
        return order_problems(entity)
    raise TypeError(f"Unsupported entity type: {type(entity).__name__}")


def validate(entity: Toy | Customer | Order) -> None:
    """
    Raise if ``entity`` is missing required fields.

    Raises
    ------
    InvalidEntityError
        Listing every problem found.
    """
    problems = missing_fields(entity)
    if problems:
        raise InvalidEntityError(problems)
