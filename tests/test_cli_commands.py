from __future__ import annotations

from pathlib import Path
from uuid import UUID

import pytest

from shop_engine.data_models import OrderStatus, PaymentStatus
from shop_engine.errors import KeyValueStoreError
from shop_engine.kv_store.memory_store import MemoryKeyValueStore
from shop_engine.stores import ShopStores, open_shop_stores
from toyshop import cli
from toyshop.cli import main


class _ReadOnlyKeyValueStore(MemoryKeyValueStore):
    def set(self, key: str, value: bytes) -> None:
        raise KeyValueStoreError("attempt to write a readonly database")


def _run(tmp_path: Path, *argv: str) -> int:
    return main([*argv, "--data-root", str(tmp_path)])


def _add(tmp_path: Path, capsys: pytest.CaptureFixture[str], *argv: str) -> UUID:
    assert _run(tmp_path, *argv) == 0
    return UUID(capsys.readouterr().out.strip())


def test_init_prints_paths(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "init", "--shop", "corner", "--print-paths") == 0

    out = capsys.readouterr().out
    assert "shop_root:" in out
    assert (tmp_path / "shops" / "corner" / "shop.sqlite").is_file()


def test_add_toy_then_list(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    toy_id = _add(
        tmp_path,
        capsys,
        "add-toy",
        "--name",
        "Robot",
        "--category",
        "Electronics",
        "--price",
        "29.99",
        "--quantity",
        "5",
    )

    assert _run(tmp_path, "list", "toys") == 0
    out = capsys.readouterr().out
    assert str(toy_id) in out
    assert "Robot" in out
    assert "$29.99" in out

    toys = open_shop_stores("default", data_root=tmp_path).toys.all()
    assert [(t.id, t.name, t.category, t.price, t.quantity) for t in toys] == [
        (toy_id, "Robot", "Electronics", 29.99, 5)
    ]


def test_add_order_prices_at_flat_rate(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    order_id = _add(
        tmp_path, capsys, "add-order", "--toy", "Robot", "--quantity", "3", "--customer", "Alice"
    )

    order = open_shop_stores("default", data_root=tmp_path).orders.get(order_id)
    assert order is not None
    assert order.total_price == 300.0
    assert order.status is OrderStatus.PENDING
    assert order.payment_status is PaymentStatus.UNPAID


def test_edit_order_reprices_and_updates_status(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    order_id = _add(
        tmp_path, capsys, "add-order", "--toy", "Robot", "--quantity", "3", "--customer", "Alice"
    )
    before = open_shop_stores("default", data_root=tmp_path).orders.get(order_id)

    assert (
        _run(tmp_path, "edit-order", "--id", str(order_id), "--quantity", "4", "--status", "Completed", "--payment", "Paid")
        == 0
    )

    after = open_shop_stores("default", data_root=tmp_path).orders.get(order_id)
    assert after is not None and before is not None
    assert after.total_price == 400.0
    assert after.status is OrderStatus.COMPLETED
    assert after.payment_status is PaymentStatus.PAID
    assert after.order_date == before.order_date
    assert after.customer_name == "Alice"


def test_edit_customer_replaces_only_given_fields(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    customer_id = _add(
        tmp_path, capsys, "add-customer", "--name", "Alice", "--contact", "a@x", "--address", "Elm"
    )

    assert _run(tmp_path, "edit-customer", "--id", str(customer_id), "--address", "Oak") == 0

    customer = open_shop_stores("default", data_root=tmp_path).customers.get(customer_id)
    assert customer is not None
    assert (customer.name, customer.contact_info, customer.address) == ("Alice", "a@x", "Oak")


def test_edit_toy_unknown_id_is_an_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = _run(tmp_path, "edit-toy", "--id", "6b0e2c7a-8e8f-4c5a-bb5d-9e6c6a3e7a01", "--name", "X")

    assert code == 2
    assert "ERROR:" in capsys.readouterr().out


def test_add_with_blank_required_field_is_rejected(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = _run(tmp_path, "add-customer", "--name", "Alice", "--contact", " ", "--address", "Elm")

    assert code == 2
    assert "contact info is required" in capsys.readouterr().out
    assert open_shop_stores("default", data_root=tmp_path).customers.all() == ()


def test_delete_by_index_and_id(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    ids = [
        _add(tmp_path, capsys, "add-toy", "--name", name, "--category", "c", "--price", "1", "--quantity", "1")
        for name in ("a", "b", "c")
    ]

    assert _run(tmp_path, "delete", "toys", "--index", "1") == 0
    assert [t.id for t in open_shop_stores("default", data_root=tmp_path).toys.all()] == [ids[0], ids[2]]

    assert _run(tmp_path, "delete", "toys", "--id", str(ids[0])) == 0
    assert [t.id for t in open_shop_stores("default", data_root=tmp_path).toys.all()] == [ids[2]]


def test_delete_out_of_range_or_unknown_is_an_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "delete", "orders", "--index", "0") == 2
    assert _run(tmp_path, "delete", "orders", "--id", "6b0e2c7a-8e8f-4c5a-bb5d-9e6c6a3e7a01") == 2
    assert capsys.readouterr().out.count("ERROR:") == 2


def test_list_empty(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "list", "customers") == 0
    assert "No customers." in capsys.readouterr().out


def test_unsafe_shop_name_is_an_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "list", "toys", "--shop", "../escape") == 2
    assert "ERROR:" in capsys.readouterr().out


def test_unknown_log_level_is_an_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "list", "toys", "--log-level", "chatty") == 2
    assert "Unknown log level" in capsys.readouterr().out


@pytest.mark.parametrize("price", ["nan", "inf"])
def test_add_toy_with_non_finite_price_is_rejected(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], price: str
) -> None:
    code = _run(tmp_path, "add-toy", "--name", "Robot", "--category", "c", "--price", price, "--quantity", "1")

    assert code == 2
    assert "price must be a finite number" in capsys.readouterr().out
    assert open_shop_stores("default", data_root=tmp_path).toys.all() == ()


def test_failed_save_is_reported_as_an_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        cli, "open_shop_stores", lambda shop_name, data_root: ShopStores.over(_ReadOnlyKeyValueStore())
    )

    code = _run(tmp_path, "add-customer", "--name", "Alice", "--contact", "a@x", "--address", "Elm")

    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR: customers changed in memory but could not be saved" in out
    assert "readonly database" in out
