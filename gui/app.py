"""
Toy shop GUI app.

Tabbed GUI (Inventory, Customers, Orders, Settings) backed by engine stores.
The stores are opened once in ``main`` and injected into the window.
"""

from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication, QHBoxLayout, QLabel, QTabWidget, QVBoxLayout, QWidget

from gui.adapters.store_adapter import CUSTOMER_COLUMNS, ORDER_COLUMNS, TOY_COLUMNS
from gui.dialogs.entity_dialogs import CustomerDialog, OrderDialog, ToyDialog
from gui.settings_store import GuiSettings, load_gui_settings
from gui.tabs.entity_tab import EntityTab
from gui.tabs.settings_tab import SettingsTab
from shop_engine.log_config import configure_logging
from shop_engine.stores import ShopStores, open_shop_stores

logger = logging.getLogger(__name__)


class AppWindow(QWidget):
    """
    Main window for the toy shop GUI.

    Responsibilities
    ----------------
    - Host the tabbed interface (Inventory, Customers, Orders, Settings)
    - Hand the injected stores to the tabs that display them
    - Detach tab observers on close
    """

    def __init__(self, stores: ShopStores, settings: GuiSettings) -> None:
        """
        Initialize the main window and construct the tab layout.

        Parameters
        ----------
        stores:
            Loaded stores of the open shop.
        settings:
            GUI settings in effect.
        """
        super().__init__()
        self.setWindowTitle(f"Toy Shop - {settings.shop_name}")
        self.resize(1080, 680)

        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)

        header = QWidget()
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(8, 8, 8, 8)

        title = QLabel("Toy Shop")
        f = title.font()
        f.setPointSize(16)
        f.setBold(True)
        title.setFont(f)

        subtitle = QLabel(f"Inventory, customers and orders for '{settings.shop_name}'")
        subtitle.setStyleSheet("color: #666;")

        header_layout.addWidget(title)
        header_layout.addSpacing(10)
        header_layout.addWidget(subtitle)
        header_layout.addStretch(1)

        root.addWidget(header)

        tabs = QTabWidget()

        self.settings_tab = SettingsTab(settings)

        self.toys_tab = EntityTab(
            title="Toy Inventory",
            store=stores.toys,
            columns=TOY_COLUMNS,
            dialog_factory=lambda parent, toy: ToyDialog(parent, toy=toy),
            describe=lambda toy: f"toy '{toy.name}'",
        )
        tabs.addTab(self.toys_tab, "Inventory")

        self.customers_tab = EntityTab(
            title="Customers",
            store=stores.customers,
            columns=CUSTOMER_COLUMNS,
            dialog_factory=lambda parent, customer: CustomerDialog(parent, customer=customer),
            describe=lambda customer: f"customer '{customer.name}'",
        )
        tabs.addTab(self.customers_tab, "Customers")

        self.orders_tab = EntityTab(
            title="Orders",
            store=stores.orders,
            columns=ORDER_COLUMNS,
            dialog_factory=lambda parent, order: OrderDialog(
                parent,
                order=order,
                customer_names=stores.customers.names(),
                default_status=self.settings_tab.settings.default_order_status,
                default_payment=self.settings_tab.settings.default_payment_status,
            ),
            describe=lambda order: f"order of {order.quantity} x '{order.toy_name}' for {order.customer_name}",
        )
        tabs.addTab(self.orders_tab, "Orders")

        tabs.addTab(self.settings_tab, "Settings")

        root.addWidget(tabs, 1)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """
        Handle window close by detaching tab observers from the stores.

        Parameters
        ----------
        event:
            Qt close event.
        """
        try:
            for tab in (self.toys_tab, self.customers_tab, self.orders_tab):
                tab.shutdown()
        finally:
            super().closeEvent(event)


def main() -> int:
    """
    Run the toy shop GUI application.

    Returns
    -------
    int
        Qt application exit code.
    """
    configure_logging()
    settings = load_gui_settings(data_root=None)
    stores = open_shop_stores(shop_name=settings.shop_name, data_root=settings.data_root)
    for store in (stores.toys, stores.customers, stores.orders):
        if not store.last_load.ok:
            logger.warning("Started with empty %s: %s", store.key, store.last_load.error)

    app = QApplication(sys.argv)
    w = AppWindow(stores, settings)
    w.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
