from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from shop_engine.clock import FixedClock
from shop_engine.data_models import (
    UNIT_PRICE,
    Customer,
    Order,
    OrderStatus,
    PaymentStatus,
    Toy,
    datetime_from_iso,
    datetime_to_iso,
    order_total,
)

NOON = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_order_total_uses_flat_unit_price() -> None:
    order = Order.new(toy_name="Robot", quantity=3, customer_name="Alice", clock=FixedClock(NOON))

    assert UNIT_PRICE == 100.0
    assert order.total_price == 300.0
    assert order_total(1) == 100.0


def test_new_order_defaults_and_date() -> None:
    order = Order.new(toy_name="Robot", quantity=1, customer_name="Alice", clock=FixedClock(NOON))

    assert order.status is OrderStatus.PENDING
    assert order.payment_status is PaymentStatus.UNPAID
    assert order.order_date == NOON


def test_naive_fixed_clock_is_treated_as_utc() -> None:
    order = Order.new(
        toy_name="Robot", quantity=1, customer_name="Alice", clock=FixedClock(datetime(2025, 6, 1, 12, 0))
    )

    assert order.order_date == NOON


def test_with_quantity_reprices_and_keeps_identity_and_date() -> None:
    order = Order.new(toy_name="Robot", quantity=3, customer_name="Alice", clock=FixedClock(NOON))

    edited = order.with_quantity(5)

    assert edited.id == order.id
    assert edited.order_date == order.order_date
    assert edited.quantity == 5
    assert edited.total_price == 500.0


def test_status_accepts_raw_values() -> None:
    order = Order.new(
        toy_name="Robot",
        quantity=1,
        customer_name="Alice",
        status="Completed",  # type: ignore[arg-type]
        payment_status="Paid",  # type: ignore[arg-type]
    )

    assert order.status is OrderStatus.COMPLETED
    assert order.payment_status is PaymentStatus.PAID


def test_factories_assign_distinct_identities() -> None:
    a = Toy.new(name="A", category="c", price=1.0, quantity=1)
    b = Toy.new(name="A", category="c", price=1.0, quantity=1)

    assert a.id != b.id
    assert a != b


def test_new_customer_has_empty_order_history() -> None:
    customer = Customer.new(name="Alice", contact_info="a@x", address="Elm")

    assert customer.order_history == ()
    assert customer.to_dict()["orderHistory"] == []


def test_customer_from_dict_tolerates_missing_order_history() -> None:
    customer = Customer.new(name="Alice", contact_info="a@x", address="Elm")
    payload = customer.to_dict()
    del payload["orderHistory"]

    assert Customer.from_dict(payload) == customer


def test_toy_from_dict_reports_missing_keys() -> None:
    with pytest.raises(ValueError, match="category"):
        Toy.from_dict({"id": "6b0e2c7a-8e8f-4c5a-bb5d-9e6c6a3e7a01", "name": "R"})


def test_order_from_dict_rejects_unknown_status() -> None:
    payload = Order.new(toy_name="Robot", quantity=1, customer_name="Alice").to_dict()
    payload["status"] = "Shipped"

    with pytest.raises(ValueError):
        Order.from_dict(payload)


def test_iso_helpers_round_trip_and_normalize_to_utc() -> None:
    local = datetime(2025, 6, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))

    text = datetime_to_iso(local)

    assert text == "2025-06-01T12:00:00+00:00"
    assert datetime_from_iso(text) == local
    assert datetime_from_iso("2025-06-01T12:00:00") == NOON


def test_iso_helper_rejects_naive_datetimes() -> None:
    with pytest.raises(ValueError):
        datetime_to_iso(datetime(2025, 6, 1))


@pytest.mark.parametrize("price", [float("inf"), float("nan"), 10**400])
def test_toy_from_dict_rejects_non_finite_price(price: object) -> None:
    payload = Toy.new(name="Robot", category="c", price=1.0, quantity=1).to_dict()
    payload["price"] = price

    with pytest.raises(ValueError, match="price"):
        Toy.from_dict(payload)
