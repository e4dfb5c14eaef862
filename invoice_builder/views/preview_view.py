from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QPushButton, QScrollArea, QVBoxLayout, QWidget

from invoice_builder.core.model import Invoice
from invoice_builder.core.settings import Settings
from invoice_builder.styles.tokens import Sheet
from invoice_builder.widgets.invoice_sheet import InvoiceSheet


class PreviewView(QWidget):
    """Preview mode: the rendered invoice with "Back to Form" and "Generate PDF"."""

    def __init__(self, settings: Settings, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.settings = settings
        self.sheet: Optional[InvoiceSheet] = None

        v = QVBoxLayout(self)
        v.setContentsMargins(24, 24, 24, 24)
        v.setSpacing(16)

        bar = QHBoxLayout()
        self.btn_back = QPushButton("Back to Form")
        self.btn_back.setObjectName("PrimaryButton")
        self.btn_generate = QPushButton("Generate PDF")
        self.btn_generate.setObjectName("SuccessButton")
        for b in (self.btn_back, self.btn_generate):
            b.setCursor(Qt.PointingHandCursor)
        bar.addWidget(self.btn_back)
        bar.addStretch(1)
        bar.addWidget(self.btn_generate)
        bar_box = QWidget()
        bar_box.setLayout(bar)
        bar_box.setMaximumWidth(Sheet.width)
        v.addWidget(bar_box, 0, Qt.AlignHCenter)

        # Not resizable: the sheet keeps its full size and the scroll area shows a window onto it
        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(False)
        self.scroll.setAlignment(Qt.AlignHCenter | Qt.AlignTop)
        v.addWidget(self.scroll, 1)

    def show_invoice(self, invoice: Invoice) -> InvoiceSheet:
        sheet = InvoiceSheet(invoice, self.settings)
        sheet.adjustSize()
        old = self.scroll.takeWidget()
        if old is not None:
            old.deleteLater()
        self.scroll.setWidget(sheet)
        self.sheet = sheet
        return sheet
