from __future__ import annotations

from pathlib import Path

from PySide6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from gui.settings_store import GuiSettings, save_gui_settings, usable_shop_name
from shop_engine.data_models import OrderStatus, PaymentStatus


class SettingsTab(QWidget):
    """
    Settings tab for the toy shop GUI.

    Responsibilities
    ----------------
    - Configure which shop is opened (data root, shop name).
    - Configure order form defaults (status, payment status).
    - Persist settings to disk in a small JSON file under the default data root.

    Notes
    -----
    Changing the data root or shop takes effect on the next start; the open
    stores are not swapped underneath the other tabs.
    """

    def __init__(self, settings: GuiSettings) -> None:
        super().__init__()

        self._settings = settings

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)

        box = QGroupBox("Defaults")
        box_layout = QVBoxLayout(box)

        # Data root
        self.data_root_edit = QLineEdit()
        self.data_root_edit.setPlaceholderText("Data root (blank = default)")

        btn_data_root = QPushButton("Browse…")
        btn_data_root.clicked.connect(self._browse_data_root)

        row = QHBoxLayout()
        row.addWidget(QLabel("Data root:"))
        row.addWidget(self.data_root_edit, 1)
        row.addWidget(btn_data_root)
        box_layout.addLayout(row)

        # Shop name
        self.shop_edit = QLineEdit()
        row2 = QHBoxLayout()
        row2.addWidget(QLabel("Shop:"))
        row2.addWidget(self.shop_edit, 1)
        box_layout.addLayout(row2)

        # Default order status
        self.status_combo = QComboBox()
        for s in OrderStatus:
            self.status_combo.addItem(s.value, s.value)

        row3 = QHBoxLayout()
        row3.addWidget(QLabel("Default order status:"))
        row3.addWidget(self.status_combo, 1)
        box_layout.addLayout(row3)

        # Default payment status
        self.payment_combo = QComboBox()
        for s in PaymentStatus:
            self.payment_combo.addItem(s.value, s.value)

        row4 = QHBoxLayout()
        row4.addWidget(QLabel("Default payment status:"))
        row4.addWidget(self.payment_combo, 1)
        box_layout.addLayout(row4)

        btn_save = QPushButton("Save Settings")
        btn_save.clicked.connect(self._save)
        box_layout.addWidget(btn_save)

        layout.addWidget(box)
        layout.addStretch(1)

        self._load_into_widgets()

    @property
    def settings(self) -> GuiSettings:
        return self._settings

    def _load_into_widgets(self) -> None:
        s = self._settings
        self.data_root_edit.setText("" if s.data_root is None else str(s.data_root))
        self.shop_edit.setText(s.shop_name)
        self._select_combo_by_data(self.status_combo, s.default_order_status)
        self._select_combo_by_data(self.payment_combo, s.default_payment_status)

    @staticmethod
    def _select_combo_by_data(combo: QComboBox, value: str) -> None:
        for i in range(combo.count()):
            if str(combo.itemData(i)) == value:
                combo.setCurrentIndex(i)
                return

    def _browse_data_root(self) -> None:
        start_dir = self.data_root_edit.text().strip() or str(Path.home())
        directory = QFileDialog.getExistingDirectory(self, "Select data root folder", start_dir)
        if directory:
            self.data_root_edit.setText(directory)

    def _save(self) -> None:
        data_root_text = self.data_root_edit.text().strip()
        shop_text = self.shop_edit.text().strip()
        data_root = Path(data_root_text) if data_root_text else None
        if not usable_shop_name(shop_text, data_root):
            QMessageBox.warning(self, "Settings", f"Shop name is empty or not a valid folder name: {shop_text!r}")
            return

        settings = GuiSettings(
            data_root=data_root,
            shop_name=shop_text,
            default_order_status=str(self.status_combo.currentData()),
            default_payment_status=str(self.payment_combo.currentData()),
        )

        try:
            save_gui_settings(data_root=None, settings=settings)
        except OSError as exc:
            QMessageBox.critical(self, "Settings", f"Failed to save settings: {exc}")
            return

        self._settings = settings
        QMessageBox.information(self, "Settings", "Saved.")
