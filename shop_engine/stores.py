"""
Concrete stores for the three entity kinds.

Each store is an :class:`EntityStore` bound to its slot key and codec. A shop
constructs all three once, over one key-value store, and hands them to its
presentation layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .codec import EntityCodec
from .data_models import Customer, Order, Toy
from .entity_store import EntityStore
from .kv_store.api import KeyValueStore
from .kv_store.sqlite_store import open_kv_store

logger = logging.getLogger(__name__)

TOYS_KEY = "toys"
CUSTOMERS_KEY = "customers"
ORDERS_KEY = "orders"

TOY_CODEC: EntityCodec[Toy] = EntityCodec(kind="toys", decode_item=Toy.from_dict)
CUSTOMER_CODEC: EntityCodec[Customer] = EntityCodec(kind="customers", decode_item=Customer.from_dict)
ORDER_CODEC: EntityCodec[Order] = EntityCodec(kind="orders", decode_item=Order.from_dict)


class ToyStore(EntityStore[Toy]):
    """Inventory of toys."""

    def __init__(self, kv: KeyValueStore) -> None:
        super().__init__(kv, key=TOYS_KEY, codec=TOY_CODEC)


class CustomerStore(EntityStore[Customer]):
    """Known customers."""

    def __init__(self, kv: KeyValueStore) -> None:
        super().__init__(kv, key=CUSTOMERS_KEY, codec=CUSTOMER_CODEC)

    def names(self) -> list[str]:
        """Return customer names in collection order, as offered by the order form."""
        return [c.name for c in self.all()]


class OrderStore(EntityStore[Order]):
    """Customer orders. Toy and customer are referenced by name only."""

    def __init__(self, kv: KeyValueStore) -> None:
        super().__init__(kv, key=ORDERS_KEY, codec=ORDER_CODEC)


@dataclass(frozen=True, slots=True)
class ShopStores:
    """
    The three stores of one shop.

    Attributes
    ----------
    toys, customers, orders:
        Independent stores sharing one key-value backend.
    """

    toys: ToyStore
    customers: CustomerStore
    orders: OrderStore

    @classmethod
    def over(cls, kv: KeyValueStore) -> ShopStores:
        """Construct (and load) all three stores over ``kv``."""
        return cls(toys=ToyStore(kv), customers=CustomerStore(kv), orders=OrderStore(kv))


def open_shop_stores(shop_name: str, data_root: Path | None = None) -> ShopStores:
    """
    Open the SQLite-backed stores of a shop, creating its folders as needed.

    Parameters
    ----------
    shop_name:
        Name of the shop.
    data_root:
        Optional override for the data root.

    Returns
    -------
    ShopStores
        Loaded stores.
    """
    kv = open_kv_store(shop_name=shop_name, data_root=data_root)
    stores = ShopStores.over(kv)
    logger.info(
        "Opened shop %r: %d toys, %d customers, %d orders",
        shop_name,
        len(stores.toys),
        len(stores.customers),
        len(stores.orders),
    )
    return stores
