"""
Entity list tab (store-backed).

- Lists one store's collection in a table that refreshes on every store change.
- Add / Edit open a form dialog; the result goes to the store's add or update.
- Delete removes the selected rows by position after confirmation; the row
  context menu deletes a single record by identity.
- Suppressed persistence failures reported by the store are shown as warnings.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from PySide6.QtCore import QModelIndex, QPoint, Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QDialog,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QMenu,
    QMessageBox,
    QPushButton,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from gui.adapters.store_adapter import Column, EntityTableModel, StoreAdapter
from shop_engine.entity_store import EntityStore

# Builds an add (entity=None) or edit dialog exposing ``result_value()``.
DialogFactory = Callable[[QWidget, Any], QDialog]


class EntityTab(QWidget):
    """
    List tab for one entity kind.

    Parameters
    ----------
    title:
        Heading shown above the table.
    store:
        Store holding the collection. Injected; the tab never opens one.
    columns:
        Table column definitions.
    dialog_factory:
        Builds the add/edit dialog.
    describe:
        Short label for a record, used in confirmation prompts.
    """

    def __init__(
        self,
        *,
        title: str,
        store: EntityStore,
        columns: Sequence[Column],
        dialog_factory: DialogFactory,
        describe: Callable[[Any], str],
    ) -> None:
        super().__init__()
        self._store = store
        self._dialog_factory = dialog_factory
        self._describe = describe

        self._adapter = StoreAdapter(store, parent=self)
        self._adapter.save_failed.connect(self._on_save_failed)
        self._model = EntityTableModel(self._adapter, columns, parent=self)
        self._adapter.changed.connect(self._update_count)

        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)

        header = QHBoxLayout()
        heading = QLabel(title)
        f = heading.font()
        f.setPointSize(14)
        f.setBold(True)
        heading.setFont(f)
        self._count_label = QLabel("")
        self._count_label.setStyleSheet("color: #666;")
        header.addWidget(heading)
        header.addSpacing(10)
        header.addWidget(self._count_label)
        header.addStretch(1)
        root.addLayout(header)

        self.table = QTableView()
        self.table.setModel(self._model)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.ExtendedSelection)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self.table.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.table.customContextMenuRequested.connect(self._show_context_menu)
        self.table.doubleClicked.connect(self._on_double_click)
        root.addWidget(self.table, 1)

        buttons = QHBoxLayout()
        self.btn_add = QPushButton("Add…")
        self.btn_edit = QPushButton("Edit…")
        self.btn_delete = QPushButton("Delete")
        self.btn_add.clicked.connect(self._add)
        self.btn_edit.clicked.connect(self._edit_selected)
        self.btn_delete.clicked.connect(self._delete_selected)
        buttons.addWidget(self.btn_add)
        buttons.addWidget(self.btn_edit)
        buttons.addWidget(self.btn_delete)
        buttons.addStretch(1)
        root.addLayout(buttons)

        self._update_count()

    # ---------------- Actions ----------------

    def _add(self) -> None:
        entity = self._run_dialog(None)
        if entity is not None:
            self._store.add(entity)

    def _edit(self, entity: Any) -> None:
        edited = self._run_dialog(entity)
        if edited is not None:
            self._store.update(edited)

    def _edit_selected(self) -> None:
        rows = self._selected_rows()
        if len(rows) != 1:
            return
        entity = self._model.entity_at(rows[0])
        if entity is not None:
            self._edit(entity)

    def _on_double_click(self, index: QModelIndex) -> None:
        entity = self._model.entity_at(index.row())
        if entity is not None:
            self._edit(entity)

    def _delete_selected(self) -> None:
        rows = self._selected_rows()
        if not rows:
            return
        if not self._confirm(f"Delete {len(rows)} selected record(s)?"):
            return
        self._store.delete_at(rows)

    def _delete_one(self, entity: Any) -> None:
        if self._confirm(f"Delete {self._describe(entity)}?"):
            self._store.delete(entity)

    def _run_dialog(self, entity: Any) -> Any:
        dialog = self._dialog_factory(self, entity)
        dialog.exec()
        # None unless the dialog was accepted through Save.
        return dialog.result_value()

    # ---------------- Helpers ----------------

    def _selected_rows(self) -> list[int]:
        return sorted({index.row() for index in self.table.selectionModel().selectedRows()})

    def _confirm(self, text: str) -> bool:
        answer = QMessageBox.question(
            self,
            "Confirm Deletion",
            text,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return answer == QMessageBox.StandardButton.Yes

    def _show_context_menu(self, pos: QPoint) -> None:
        entity = self._model.entity_at(self.table.indexAt(pos).row())
        if entity is None:
            return
        menu = QMenu(self)
        act_edit = menu.addAction("Edit")
        act_delete = menu.addAction("Delete")
        chosen = menu.exec(self.table.viewport().mapToGlobal(pos))
        if chosen is act_edit:
            self._edit(entity)
        elif chosen is act_delete:
            self._delete_one(entity)

    def _update_count(self, *_args: object) -> None:
        self._count_label.setText(f"{len(self._store)} record(s)")

    def _on_save_failed(self, key: str, message: str) -> None:
        QMessageBox.warning(
            self,
            "Not saved",
            f"Changes to {key} are kept for this session but could not be saved:\n{message}",
        )

    def shutdown(self) -> None:
        """Stop observing the store."""
        self._adapter.shutdown()
