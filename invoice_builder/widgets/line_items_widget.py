from __future__ import annotations

from typing import Dict, List

from PySide6.QtCore import Qt, Signal, QRegularExpression
from PySide6.QtGui import QRegularExpressionValidator
from PySide6.QtWidgets import (
    QWidget,
    QHBoxLayout,
    QVBoxLayout,
    QGridLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QFrame,
)

from invoice_builder.core.model import Invoice, LineItem

# Digits with at most one dot; blank is allowed while typing
NUMBER_PATTERN = QRegularExpression(r"^\d*\.?\d*$")


def _field_label(text: str) -> QLabel:
    lbl = QLabel(text)
    lbl.setObjectName("FieldLabel")
    return lbl


class LineItemRow(QFrame):
    """One editable line item, bound to a LineItem id.

    Emits:
      - edited(str, str, str): item id, field name, new text (user edits only)
      - removeRequested(str): item id
    """

    edited = Signal(str, str, str)
    removeRequested = Signal(str)

    def __init__(self, item: LineItem, index: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.item_id = item.id
        self.setObjectName("ItemCard")

        outer = QVBoxLayout(self)
        outer.setContentsMargins(16, 16, 16, 16)
        outer.setSpacing(12)

        head = QHBoxLayout()
        self.title_lbl = QLabel()
        self.title_lbl.setObjectName("SectionTitle")
        head.addWidget(self.title_lbl)
        head.addStretch(1)
        self.remove_btn = QPushButton("Remove")
        self.remove_btn.setObjectName("LinkButton")
        self.remove_btn.setCursor(Qt.PointingHandCursor)
        self.remove_btn.clicked.connect(lambda: self.removeRequested.emit(self.item_id))
        head.addWidget(self.remove_btn)
        outer.addLayout(head)

        outer.addWidget(_field_label("Description:"))
        self.desc_edit = QLineEdit()
        outer.addWidget(self.desc_edit)

        grid = QGridLayout()
        grid.setHorizontalSpacing(16)
        self.qty_edit = QLineEdit()
        self.price_edit = QLineEdit()
        self.discount_edit = QLineEdit()
        self.discount_edit.setPlaceholderText("Optional")
        for col, (label, edit) in enumerate(
            (("Quantity:", self.qty_edit), ("Unit Price:", self.price_edit), ("Discount Amount:", self.discount_edit))
        ):
            edit.setValidator(QRegularExpressionValidator(NUMBER_PATTERN, edit))
            edit.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
            grid.addWidget(_field_label(label), 0, col)
            grid.addWidget(edit, 1, col)
        outer.addLayout(grid)

        self.editors: Dict[str, QLineEdit] = {
            "description": self.desc_edit,
            "quantity": self.qty_edit,
            "unit_price": self.price_edit,
            "discount": self.discount_edit,
        }
        for field_name, edit in self.editors.items():
            # User edits only; set_item() must not echo back
            edit.textEdited.connect(lambda text, f=field_name: self.edited.emit(self.item_id, f, text))

        self.set_index(index)
        self.set_item(item)

    def set_index(self, index: int) -> None:
        self.title_lbl.setText(f"Item {index + 1}")

    def set_item(self, item: LineItem) -> None:
        for field_name, edit in self.editors.items():
            text = str(getattr(item, field_name))
            if edit.text() != text:
                edit.setText(text)


class LineItemsWidget(QWidget):
    """The editable list of line items, kept in sync with an Invoice snapshot.

    Emits:
      - itemEdited(str, str, str): item id, field name, new text
      - removeRequested(str): item id
      - addRequested()
    """

    itemEdited = Signal(str, str, str)
    removeRequested = Signal(str)
    addRequested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(16)

        header = QHBoxLayout()
        title = QLabel("Items")
        title.setObjectName("SectionTitle")
        header.addWidget(title)
        header.addStretch(1)
        self.add_btn = QPushButton("Add Item")
        self.add_btn.setObjectName("SuccessButton")
        self.add_btn.clicked.connect(self.addRequested.emit)
        header.addWidget(self.add_btn)
        root.addLayout(header)

        self.vbox = QVBoxLayout()
        self.vbox.setContentsMargins(0, 0, 0, 0)
        self.vbox.setSpacing(16)
        root.addLayout(self.vbox)

        self._rows: Dict[str, LineItemRow] = {}

    def rows(self) -> List[LineItemRow]:
        out: List[LineItemRow] = []
        for i in range(self.vbox.count()):
            w = self.vbox.itemAt(i).widget()
            if isinstance(w, LineItemRow):
                out.append(w)
        return out

    def row_for(self, item_id: str) -> LineItemRow | None:
        return self._rows.get(item_id)

    def sync(self, invoice: Invoice) -> None:
        """Reconcile rows with invoice.items: keep existing rows, add new ones, drop removed ones."""
        wanted = [it.id for it in invoice.items]
        for item_id in list(self._rows):
            if item_id not in wanted:
                row = self._rows.pop(item_id)
                self.vbox.removeWidget(row)
                row.setParent(None)
                row.deleteLater()

        for index, it in enumerate(invoice.items):
            row = self._rows.get(it.id)
            if row is None:
                row = LineItemRow(it, index)
                row.edited.connect(self.itemEdited)
                row.removeRequested.connect(self.removeRequested)
                self._rows[it.id] = row
            else:
                row.set_index(index)
                row.set_item(it)
            if self.vbox.indexOf(row) != index:
                self.vbox.removeWidget(row)
                self.vbox.insertWidget(index, row)

        # The last remaining item cannot be removed
        removable = len(invoice.items) > 1
        for row in self._rows.values():
            row.remove_btn.setVisible(removable)
