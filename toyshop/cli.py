"""
Command-line interface for the toy shop.

Notes
-----
The CLI is intentionally thin. It parses arguments, builds entities, gates them
through engine validation and delegates to the stores. Stores are opened once
per invocation and passed to the command handlers.

Exit codes
----------
- 0: success
- 2: domain, validation or save error (printed as ``ERROR: ...``)
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Callable
from uuid import UUID

from shop_engine.data_models import Customer, Order, OrderStatus, PaymentStatus, Toy
from shop_engine.entity_store import EntityStore
from shop_engine.errors import ShopError
from shop_engine.init_shop import init_shop
from shop_engine.log_config import configure_logging
from shop_engine.paths_and_safety import DEFAULT_SHOP_NAME, shop_paths_as_text
from shop_engine.stores import ShopStores, open_shop_stores
from shop_engine.validation import validate

logger = logging.getLogger(__name__)

KINDS = ("toys", "customers", "orders")


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--shop", default=DEFAULT_SHOP_NAME, help="Shop name (default: default)")
    common.add_argument(
        "--data-root",
        default=None,
        help="Override the data root (primarily for testing). If omitted, defaults are used.",
    )
    common.add_argument(
        "--log-level",
        default=None,
        help="Logging level name. Defaults to $TOYSHOP_LOG_LEVEL or WARNING.",
    )

    parser = argparse.ArgumentParser(
        prog="toyshop",
        description="Toy shop inventory, customer and order tracker",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    init_p = sub.add_parser("init", parents=[common], help="Create the shop's folders and database")
    init_p.add_argument("--print-paths", action="store_true", help="Print resolved paths after initialization")

    list_p = sub.add_parser("list", parents=[common], help="List toys, customers or orders")
    list_p.add_argument("kind", choices=KINDS)

    add_toy = sub.add_parser("add-toy", parents=[common], help="Add a toy to the inventory")
    add_toy.add_argument("--name", required=True)
    add_toy.add_argument("--category", required=True)
    add_toy.add_argument("--price", required=True, type=float)
    add_toy.add_argument("--quantity", required=True, type=int)
    add_toy.add_argument("--description", default="")

    add_customer = sub.add_parser("add-customer", parents=[common], help="Add a customer")
    add_customer.add_argument("--name", required=True)
    add_customer.add_argument("--contact", required=True, help="Contact info (phone, email)")
    add_customer.add_argument("--address", required=True)

    add_order = sub.add_parser("add-order", parents=[common], help="Record an order")
    add_order.add_argument("--toy", required=True, help="Toy name")
    add_order.add_argument("--quantity", required=True, type=int)
    add_order.add_argument("--customer", required=True, help="Customer name")
    _add_status_options(add_order, defaults=True)

    edit_toy = sub.add_parser("edit-toy", parents=[common], help="Replace fields of a toy")
    edit_toy.add_argument("--id", required=True, type=UUID)
    edit_toy.add_argument("--name")
    edit_toy.add_argument("--category")
    edit_toy.add_argument("--price", type=float)
    edit_toy.add_argument("--quantity", type=int)
    edit_toy.add_argument("--description")

    edit_customer = sub.add_parser("edit-customer", parents=[common], help="Replace fields of a customer")
    edit_customer.add_argument("--id", required=True, type=UUID)
    edit_customer.add_argument("--name")
    edit_customer.add_argument("--contact")
    edit_customer.add_argument("--address")

    edit_order = sub.add_parser("edit-order", parents=[common], help="Replace fields of an order")
    edit_order.add_argument("--id", required=True, type=UUID)
    edit_order.add_argument("--toy")
    edit_order.add_argument("--quantity", type=int, help="New quantity; the total is repriced")
    edit_order.add_argument("--customer")
    _add_status_options(edit_order, defaults=False)

    delete_p = sub.add_parser("delete", parents=[common], help="Delete a record by id or list position")
    delete_p.add_argument("kind", choices=KINDS)
    target = delete_p.add_mutually_exclusive_group(required=True)
    target.add_argument("--id", type=UUID, help="Identity of the record to delete")
    target.add_argument("--index", type=int, help="Zero-based position in 'list' output")

    return parser


def _add_status_options(p: argparse.ArgumentParser, *, defaults: bool) -> None:
    p.add_argument(
        "--status",
        choices=[s.value for s in OrderStatus],
        default=OrderStatus.PENDING.value if defaults else None,
    )
    p.add_argument(
        "--payment",
        choices=[s.value for s in PaymentStatus],
        default=PaymentStatus.UNPAID.value if defaults else None,
    )


# ---------------- Rendering ----------------


def format_toy(toy: Toy) -> str:
    return f"{toy.id}  {toy.name}  [{toy.category}]  ${toy.price:.2f}  qty {toy.quantity}"


def format_customer(customer: Customer) -> str:
    return f"{customer.id}  {customer.name}  <{customer.contact_info}>  {customer.address}"


def format_order(order: Order) -> str:
    return (
        f"{order.id}  {order.toy_name} x{order.quantity}  ${order.total_price:.2f}  "
        f"{order.customer_name}  {order.order_date:%Y-%m-%d}  "
        f"{order.status.value}/{order.payment_status.value}"
    )


_FORMATTERS: dict[str, Callable] = {
    "toys": format_toy,
    "customers": format_customer,
    "orders": format_order,
}


def _store_for(stores: ShopStores, kind: str) -> EntityStore:
    return {"toys": stores.toys, "customers": stores.customers, "orders": stores.orders}[kind]


# ---------------- Commands ----------------


def _cmd_list(stores: ShopStores, args: argparse.Namespace) -> int:
    store = _store_for(stores, args.kind)
    items = store.all()
    if not items:
        print(f"No {args.kind}.")
        return 0
    fmt = _FORMATTERS[args.kind]
    for index, item in enumerate(items):
        print(f"{index:>3}  {fmt(item)}")
    return 0


def _cmd_add_toy(stores: ShopStores, args: argparse.Namespace) -> int:
    toy = Toy.new(
        name=args.name,
        category=args.category,
        price=args.price,
        quantity=args.quantity,
        description=args.description,
    )
    validate(toy)
    stores.toys.add(toy)
    if not _saved(stores.toys):
        return 2
    print(toy.id)
    return 0


def _cmd_add_customer(stores: ShopStores, args: argparse.Namespace) -> int:
    customer = Customer.new(name=args.name, contact_info=args.contact, address=args.address)
    validate(customer)
    stores.customers.add(customer)
    if not _saved(stores.customers):
        return 2
    print(customer.id)
    return 0


def _cmd_add_order(stores: ShopStores, args: argparse.Namespace) -> int:
    order = Order.new(
        toy_name=args.toy,
        quantity=args.quantity,
        customer_name=args.customer,
        status=OrderStatus(args.status),
        payment_status=PaymentStatus(args.payment),
    )
    validate(order)
    stores.orders.add(order)
    if not _saved(stores.orders):
        return 2
    print(order.id)
    return 0


def _cmd_edit_toy(stores: ShopStores, args: argparse.Namespace) -> int:
    toy = _require(stores.toys, args.id, "toy")
    changes = {
        "name": args.name,
        "category": args.category,
        "price": args.price,
        "quantity": args.quantity,
        "description": args.description,
    }
    edited = replace(toy, **{k: v for k, v in changes.items() if v is not None})
    validate(edited)
    stores.toys.update(edited)
    return 0 if _saved(stores.toys) else 2


def _cmd_edit_customer(stores: ShopStores, args: argparse.Namespace) -> int:
    customer = _require(stores.customers, args.id, "customer")
    changes = {"name": args.name, "contact_info": args.contact, "address": args.address}
    edited = replace(customer, **{k: v for k, v in changes.items() if v is not None})
    validate(edited)
    stores.customers.update(edited)
    return 0 if _saved(stores.customers) else 2


def _cmd_edit_order(stores: ShopStores, args: argparse.Namespace) -> int:
    order = _require(stores.orders, args.id, "order")
    changes: dict[str, object] = {"toy_name": args.toy, "customer_name": args.customer}
    if args.status is not None:
        changes["status"] = OrderStatus(args.status)
    if args.payment is not None:
        changes["payment_status"] = PaymentStatus(args.payment)
    edited = replace(order, **{k: v for k, v in changes.items() if v is not None})
    if args.quantity is not None:
        edited = edited.with_quantity(args.quantity)
    validate(edited)
    stores.orders.update(edited)
    return 0 if _saved(stores.orders) else 2


def _cmd_delete(stores: ShopStores, args: argparse.Namespace) -> int:
    store = _store_for(stores, args.kind)
    if args.index is not None:
        try:
            store.delete_at({args.index})
        except IndexError as exc:
            print(f"ERROR: {exc}")
            return 2
        return 0 if _saved(store) else 2
    if args.id not in store:
        print(f"ERROR: no {args.kind} record with id {args.id}")
        return 2
    store.delete(args.id)
    return 0 if _saved(store) else 2


def _saved(store: EntityStore) -> bool:
    result = store.last_save
    if result is None or result.ok:
        return True
    print(f"ERROR: {store.key} changed in memory but could not be saved: {result.error}")
    return False


def _require(store: EntityStore, entity_id: UUID, label: str):
    found = store.get(entity_id)
    if found is None:
        raise ShopError(f"Unknown {label} id: {entity_id}")
    return found


_COMMANDS: dict[str, Callable[[ShopStores, argparse.Namespace], int]] = {
    "list": _cmd_list,
    "add-toy": _cmd_add_toy,
    "add-customer": _cmd_add_customer,
    "add-order": _cmd_add_order,
    "edit-toy": _cmd_edit_toy,
    "edit-customer": _cmd_edit_customer,
    "edit-order": _cmd_edit_order,
    "delete": _cmd_delete,
}


def main(argv: list[str] | None = None) -> int:
    """
    CLI entry point.

    Parameters
    ----------
    argv:
        Optional argument vector. If None, argparse uses sys.argv.

    Returns
    -------
    int
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        print(f"ERROR: {exc}")
        return 2

    data_root = Path(args.data_root) if args.data_root else None

    try:
        if args.command == "init":
            paths = init_shop(shop_name=args.shop, data_root=data_root)
            if args.print_paths:
                print(shop_paths_as_text(paths))
            return 0

        handler = _COMMANDS.get(args.command)
        if handler is None:
            parser.print_help()
            return 0

        stores = open_shop_stores(shop_name=args.shop, data_root=data_root)
        return handler(stores, args)
    except ShopError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"ERROR: {exc}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
