from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QGridLayout, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from invoice_builder.core.currency import (
    format_amount,
    format_currency,
    has_discount,
    item_total,
    payable_total,
    total_discount,
)
from invoice_builder.core.model import Invoice, LineItem
from invoice_builder.core.settings import Settings
from invoice_builder.styles.themes import sheet_qss
from invoice_builder.styles.tokens import Sheet, Space
from invoice_builder.widgets.async_image import AsyncImageLabel


def _label(text: str, name: Optional[str] = None, align: Qt.AlignmentFlag = Qt.AlignLeft | Qt.AlignVCenter) -> QLabel:
    lbl = QLabel(text)
    if name:
        lbl.setObjectName(name)
    lbl.setAlignment(align)
    lbl.setWordWrap(True)
    return lbl


def _rule(height: int = 1) -> QFrame:
    line = QFrame()
    line.setObjectName("Rule")
    line.setFixedHeight(height)
    return line


def unit_price_text(item: LineItem, locale: str) -> str:
    # Blank cell when the price was left empty
    return format_currency(item.unit_price, locale) if str(item.unit_price).strip() else ""


def item_total_text(item: LineItem, locale: str) -> str:
    total = item_total(item)
    return format_currency(total, locale) if total else ""


class InvoiceSheet(QFrame):
    """Read-only, printable rendering of one invoice snapshot (A4 width)."""

    def __init__(self, invoice: Invoice, settings: Settings, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.invoice = invoice
        self.settings = settings
        self.setObjectName("InvoiceSheet")
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setStyleSheet(sheet_qss())
        self.setFixedWidth(Sheet.width)
        self.setMinimumHeight(Sheet.min_height)

        root = QVBoxLayout(self)
        root.setContentsMargins(Sheet.padding, Sheet.padding, Sheet.padding, Sheet.padding)
        root.setSpacing(0)

        root.addLayout(self._build_header())
        root.addSpacing(Space.xxl)
        root.addLayout(self._build_bill_to())
        root.addSpacing(Space.xxl)
        root.addLayout(self._build_items_table())
        root.addSpacing(Space.xxl)
        root.addLayout(self._build_total())
        root.addSpacing(Space.xxl)
        root.addWidget(_label(settings.thank_you, "ThankYou"))
        root.addSpacing(Space.xxl)
        root.addWidget(self._build_payment_box())
        root.addStretch(1)

    def _build_header(self) -> QHBoxLayout:
        header = QHBoxLayout()
        self.logo = AsyncImageLabel(self.settings.logo_path, alt_text=self.settings.business_name, rounded=True)
        self.logo.setObjectName("Logo")
        self.logo.setFixedSize(Sheet.logo, Sheet.logo)
        logo_col = QVBoxLayout()
        logo_col.addSpacing(Space.lg)
        logo_col.addWidget(self.logo)
        logo_col.addStretch(1)
        header.addLayout(logo_col)
        header.addStretch(1)

        right = QVBoxLayout()
        right.setSpacing(Space.xs)
        right.addWidget(_label("INVOICE", "SheetTitle"))
        right_align = Qt.AlignRight | Qt.AlignVCenter
        self.number_lbl = _label(f"Invoice No. {self.invoice.invoice_number}", "SheetMeta", right_align)
        self.date_lbl = _label(self.invoice.date, "SheetMeta", right_align)
        right.addWidget(self.number_lbl)
        right.addWidget(self.date_lbl)
        right.addStretch(1)
        header.addLayout(right)
        return header

    def _build_bill_to(self) -> QVBoxLayout:
        box = QVBoxLayout()
        box.setSpacing(Space.xs)
        box.addWidget(_label("BILLED TO:", "SheetHeading"))
        box.addWidget(_label(self.invoice.customer_name, "CellStrong"))
        box.addWidget(_label(self.invoice.customer_phone))
        return box

    def _build_items_table(self) -> QGridLayout:
        locale = self.settings.locale
        grid = QGridLayout()
        grid.setHorizontalSpacing(Space.md)
        grid.setVerticalSpacing(Space.md)
        grid.setColumnStretch(0, 3)
        grid.setColumnStretch(1, 1)
        grid.setColumnStretch(2, 2)
        grid.setColumnStretch(3, 2)

        left = Qt.AlignLeft | Qt.AlignVCenter
        center = Qt.AlignCenter
        right = Qt.AlignRight | Qt.AlignVCenter
        heads = (("Item", left), ("Quantity", center), ("Unit Price", right), ("Total", right))
        for col, (text, align) in enumerate(heads):
            grid.addWidget(_label(text, "TableHead", align), 0, col)
        grid.addWidget(_rule(2), 1, 0, 1, 4)

        row = 2
        self.item_rows: list[tuple[QLabel, QLabel, QLabel, QLabel]] = []
        for it in self.invoice.items:
            cells = (
                _label(str(it.description), None, left),
                _label(str(it.quantity), None, center),
                _label(unit_price_text(it, locale), None, right),
                _label(item_total_text(it, locale), "CellStrong", right),
            )
            for col, cell in enumerate(cells):
                grid.addWidget(cell, row, col)
            grid.addWidget(_rule(), row + 1, 0, 1, 4)
            self.item_rows.append(cells)
            row += 2

        self.discount_value: Optional[QLabel] = None
        if has_discount(self.invoice):
            grid.addWidget(_label("Discount", None, left), row, 0, 1, 3)
            self.discount_value = _label(f"-{format_currency(total_discount(self.invoice), locale)}", None, right)
            grid.addWidget(self.discount_value, row, 3)
            grid.addWidget(_rule(), row + 1, 0, 1, 4)
        return grid

    def _build_total(self) -> QHBoxLayout:
        row = QHBoxLayout()
        row.addWidget(_label("Total", "TotalLabel"))
        row.addStretch(1)
        total = payable_total(self.invoice, self.settings.subtract_discount)
        self.total_value = _label(
            format_amount(total, self.settings.currency_code, self.settings.locale),
            "TotalValue",
            Qt.AlignRight | Qt.AlignVCenter,
        )
        row.addWidget(self.total_value)
        return row

    def _build_payment_box(self) -> QFrame:
        box = QFrame()
        box.setObjectName("PaymentBox")
        v = QVBoxLayout(box)
        v.setContentsMargins(Space.xl, Space.xl, Space.xl, Space.xl)
        v.setSpacing(Space.xs)
        v.addWidget(_label(self.settings.payment_title, "PaymentTitle"))
        v.addWidget(_label(self.settings.payment_bank))
        v.addWidget(_label(self.settings.payment_account, "CellStrong"))
        return box
