"""Qt adapters for engine entity stores.

The engine owns state and persistence. The GUI observes a store through a
StoreAdapter (signals) and displays it through an EntityTableModel.

Threading model
---------------
Stores are synchronous and are only touched from the UI thread. The adapter
subscribes to the store directly; its signals fire while the mutating call is
still on the stack, so views refresh before the call returns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, TypeVar

from PySide6.QtCore import QAbstractTableModel, QModelIndex, QObject, Qt, Signal

from shop_engine.data_models import Customer, Order, Toy
from shop_engine.entity_store import EntityStore, StoreChange

E = TypeVar("E")


@dataclass(frozen=True)
class Column(Generic[E]):
    """A table column: header text plus a cell renderer."""

    header: str
    render: Callable[[E], str]
    align_right: bool = False


TOY_COLUMNS: tuple[Column[Toy], ...] = (
    Column("Name", lambda t: t.name),
    Column("Category", lambda t: t.category),
    Column("Price", lambda t: f"${t.price:.2f}", align_right=True),
    Column("Quantity", lambda t: str(t.quantity), align_right=True),
    Column("Description", lambda t: t.description),
)

CUSTOMER_COLUMNS: tuple[Column[Customer], ...] = (
    Column("Name", lambda c: c.name),
    Column("Contact", lambda c: c.contact_info),
    Column("Address", lambda c: c.address),
)

ORDER_COLUMNS: tuple[Column[Order], ...] = (
    Column("Toy", lambda o: o.toy_name),
    Column("Quantity", lambda o: str(o.quantity), align_right=True),
    Column("Total", lambda o: f"${o.total_price:.2f}", align_right=True),
    Column("Customer", lambda o: o.customer_name),
    Column("Date", lambda o: o.order_date.astimezone().strftime("%Y-%m-%d %H:%M")),
    Column("Status", lambda o: o.status.value),
    Column("Payment", lambda o: o.payment_status.value),
)


class StoreAdapter(QObject):
    """Re-emits an EntityStore's change notifications as Qt signals."""

    changed = Signal(str, str)  # store key, action
    save_failed = Signal(str, str)  # store key, message

    def __init__(self, store: EntityStore, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._store = store
        self._unsubscribe: Callable[[], None] | None = store.subscribe(self._on_change)

    @property
    def store(self) -> EntityStore:
        return self._store

    def _on_change(self, change: StoreChange) -> None:
        self.changed.emit(change.key, change.action.value)
        result = self._store.last_save
        if result is not None and not result.ok:
            self.save_failed.emit(change.key, result.error or "unknown error")

    def shutdown(self) -> None:
        """Stop observing the store."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None


class EntityTableModel(QAbstractTableModel):
    """Read-only table model over a store's ordered collection."""

    def __init__(self, adapter: StoreAdapter, columns: Sequence[Column], parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._adapter = adapter
        self._columns = tuple(columns)
        self._rows: tuple[Any, ...] = adapter.store.all()
        adapter.changed.connect(self._reload)

    def entity_at(self, row: int) -> Any | None:
        if 0 <= row < len(self._rows):
            return self._rows[row]
        return None

    def _reload(self, _key: str = "", _action: str = "") -> None:
        self.beginResetModel()
        self._rows = self._adapter.store.all()
        self.endResetModel()

    # ---------------- QAbstractTableModel ----------------

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return 0 if parent.isValid() else len(self._rows)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return 0 if parent.isValid() else len(self._columns)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid():
            return None
        column = self._columns[index.column()]
        if role == Qt.ItemDataRole.DisplayRole:
            return column.render(self._rows[index.row()])
        if role == Qt.ItemDataRole.TextAlignmentRole and column.align_right:
            return int(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        return None

    def headerData(
        self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole
    ) -> Any:
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == Qt.Orientation.Horizontal:
            return self._columns[section].header
        return str(section + 1)
