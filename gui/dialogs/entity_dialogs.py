"""
Add/Edit dialogs for toys, customers and orders (UI only).

Purpose
-------
- Collect one entity's fields in a form.
- Gate Save on engine validation (required fields), as the stores accept
  anything they are given.
- Return a whole entity: new ones carry a fresh identity, edited ones keep
  theirs. The caller hands the result to the store's add or update.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QDoubleSpinBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from shop_engine.clock import Clock, SystemClock
from shop_engine.data_models import (
    Customer,
    Order,
    OrderStatus,
    PaymentStatus,
    Toy,
    order_total,
)
from shop_engine.validation import missing_fields


class _EntityDialog(QDialog):
    """
    Shared dialog chrome: a form, a problems line and Save/Cancel buttons.

    Subclasses populate ``self.form`` and implement ``_build_entity``.
    """

    def __init__(self, parent: QWidget | None, *, title: str) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self.resize(460, 0)

        self._result: Any = None

        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(10)

        self.form = QFormLayout()
        root.addLayout(self.form)

        self._problems_label = QLabel("")
        self._problems_label.setWordWrap(True)
        self._problems_label.setStyleSheet("color: #b00;")
        root.addWidget(self._problems_label)

        self.buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Cancel)
        self.btn_save = self.buttons.addButton("Save", QDialogButtonBox.ButtonRole.AcceptRole)
        self.btn_save.setEnabled(False)
        self.buttons.rejected.connect(self.reject)
        self.btn_save.clicked.connect(self._on_save)
        root.addWidget(self.buttons)

    def result_value(self) -> Any:
        return self._result

    def _build_entity(self) -> Any:
        raise NotImplementedError

    def _sync_state(self, *_args: object) -> None:
        """Re-run validation and update Save enablement."""
        problems = missing_fields(self._build_entity())
        self._problems_label.setText("; ".join(problems))
        self.btn_save.setEnabled(not problems)

    def _on_save(self) -> None:
        entity = self._build_entity()
        if missing_fields(entity):
            return
        self._result = entity
        self.accept()


class ToyDialog(_EntityDialog):
    """Dialog for adding a toy or editing an existing one."""

    def __init__(self, parent: QWidget | None = None, *, toy: Toy | None = None) -> None:
        super().__init__(parent, title="Edit Toy" if toy else "Add New Toy")
        self._original = toy

        self.name_edit = QLineEdit()
        self.category_edit = QLineEdit()
        self.price_spin = QDoubleSpinBox()
        self.price_spin.setRange(0.0, 1_000_000.0)
        self.price_spin.setDecimals(2)
        self.price_spin.setPrefix("$")
        self.quantity_spin = QSpinBox()
        self.quantity_spin.setRange(0, 1_000_000)
        self.description_edit = QPlainTextEdit()
        self.description_edit.setFixedHeight(80)

        self.form.addRow("Name", self.name_edit)
        self.form.addRow("Category", self.category_edit)
        self.form.addRow("Price", self.price_spin)
        self.form.addRow("Quantity", self.quantity_spin)
        self.form.addRow("Description", self.description_edit)

        if toy is not None:
            self.name_edit.setText(toy.name)
            self.category_edit.setText(toy.category)
            self.price_spin.setValue(toy.price)
            self.quantity_spin.setValue(toy.quantity)
            self.description_edit.setPlainText(toy.description)

        self.name_edit.textChanged.connect(self._sync_state)
        self.category_edit.textChanged.connect(self._sync_state)
        self._sync_state()

    def _build_entity(self) -> Toy:
        fields = dict(
            name=self.name_edit.text().strip(),
            category=self.category_edit.text().strip(),
            price=float(self.price_spin.value()),
            quantity=int(self.quantity_spin.value()),
            description=self.description_edit.toPlainText().strip(),
        )
        if self._original is None:
            return Toy.new(**fields)
        return replace(self._original, **fields)


class CustomerDialog(_EntityDialog):
    """Dialog for adding a customer or editing an existing one."""

    def __init__(self, parent: QWidget | None = None, *, customer: Customer | None = None) -> None:
        super().__init__(parent, title="Edit Customer" if customer else "Add New Customer")
        self._original = customer

        self.name_edit = QLineEdit()
        self.contact_edit = QLineEdit()
        self.address_edit = QLineEdit()

        self.form.addRow("Name", self.name_edit)
        self.form.addRow("Contact Info", self.contact_edit)
        self.form.addRow("Address", self.address_edit)

        if customer is not None:
            self.name_edit.setText(customer.name)
            self.contact_edit.setText(customer.contact_info)
            self.address_edit.setText(customer.address)

        for edit in (self.name_edit, self.contact_edit, self.address_edit):
            edit.textChanged.connect(self._sync_state)
        self._sync_state()

    def _build_entity(self) -> Customer:
        fields = dict(
            name=self.name_edit.text().strip(),
            contact_info=self.contact_edit.text().strip(),
            address=self.address_edit.text().strip(),
        )
        if self._original is None:
            return Customer.new(**fields)
        return replace(self._original, **fields)


class OrderDialog(_EntityDialog):
    """
    Dialog for recording an order or editing an existing one.

    Notes
    -----
    The customer picker lists current customer names but stays editable: the
    order keeps a name, not a reference. The total is repriced from the
    quantity on every change.
    """

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        order: Order | None = None,
        customer_names: list[str] | None = None,
        default_status: str = OrderStatus.PENDING.value,
        default_payment: str = PaymentStatus.UNPAID.value,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(parent, title="Edit Order" if order else "Add New Order")
        self._original = order
        self._clock = clock or SystemClock()

        self.toy_edit = QLineEdit()
        self.quantity_spin = QSpinBox()
        self.quantity_spin.setRange(1, 1_000_000)
        self.customer_combo = QComboBox()
        self.customer_combo.setEditable(True)
        self.customer_combo.addItems(customer_names or [])
        self.customer_combo.setCurrentIndex(-1)
        self.status_combo = QComboBox()
        for s in OrderStatus:
            self.status_combo.addItem(s.value, s.value)
        self.payment_combo = QComboBox()
        for s in PaymentStatus:
            self.payment_combo.addItem(s.value, s.value)
        self.total_label = QLabel("")

        self.form.addRow("Toy Name", self.toy_edit)
        self.form.addRow("Quantity", self.quantity_spin)
        self.form.addRow("Customer", self.customer_combo)
        self.form.addRow("Order Status", self.status_combo)
        self.form.addRow("Payment Status", self.payment_combo)
        self.form.addRow("Total", self.total_label)

        if order is not None:
            self.toy_edit.setText(order.toy_name)
            self.quantity_spin.setValue(order.quantity)
            self.customer_combo.setEditText(order.customer_name)
            status, payment = order.status.value, order.payment_status.value
        else:
            status, payment = default_status, default_payment
        self.status_combo.setCurrentIndex(max(0, self.status_combo.findData(status)))
        self.payment_combo.setCurrentIndex(max(0, self.payment_combo.findData(payment)))

        self.toy_edit.textChanged.connect(self._sync_state)
        self.quantity_spin.valueChanged.connect(self._sync_state)
        self.customer_combo.editTextChanged.connect(self._sync_state)
        self._sync_state()

    def _sync_state(self, *_args: object) -> None:
        self.total_label.setText(f"${order_total(self.quantity_spin.value()):.2f}")
        super()._sync_state()

    def _build_entity(self) -> Order:
        toy_name = self.toy_edit.text().strip()
        customer_name = self.customer_combo.currentText().strip()
        quantity = int(self.quantity_spin.value())
        status = OrderStatus(self.status_combo.currentData())
        payment = PaymentStatus(self.payment_combo.currentData())
        if self._original is None:
            return Order.new(
                toy_name=toy_name,
                quantity=quantity,
                customer_name=customer_name,
                status=status,
                payment_status=payment,
                clock=self._clock,
            )
        edited = replace(
            self._original,
            toy_name=toy_name,
            customer_name=customer_name,
            status=status,
            payment_status=payment,
        )
        return edited.with_quantity(quantity)
