from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont, QKeySequence, QShortcut
from PySide6.QtWidgets import QLabel, QMainWindow, QMessageBox, QStackedWidget, QVBoxLayout, QHBoxLayout, QWidget

from invoice_builder.core.session import SessionController, ViewState
from invoice_builder.core.settings import Settings, load_settings
from invoice_builder.pdf.export import ExportPipeline
from invoice_builder.styles.themes import light_qss
from invoice_builder.views.preview_view import PreviewView
from invoice_builder.widgets.invoice_form import InvoiceForm

logger = logging.getLogger(__name__)

FORM_INDEX = 0
PREVIEW_INDEX = 1


class AppWindow(QMainWindow):
    def __init__(self, settings: Optional[Settings] = None, pipeline: Optional[ExportPipeline] = None) -> None:
        super().__init__()
        self.settings = settings or load_settings()
        self.setWindowTitle("Invoice Builder")
        self.resize(900, 900)

        root = QWidget(self)
        layout = QVBoxLayout(root)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        header = QHBoxLayout()
        header.setContentsMargins(12, 8, 12, 8)
        title = QLabel(self.settings.business_name or "Invoice Builder")
        f = QFont(); f.setPointSize(14); f.setBold(True)
        title.setFont(f)
        header.addWidget(title)
        header.addStretch(1)
        layout.addLayout(header)

        self.session = SessionController(parent=self)
        self.pipeline = pipeline or ExportPipeline(self.settings, parent=self)

        self.stack = QStackedWidget()
        self.form = InvoiceForm(self.session)
        self.preview = PreviewView(self.settings)
        self.stack.addWidget(self.form)
        self.stack.addWidget(self.preview)
        layout.addWidget(self.stack, 1)
        self.setCentralWidget(root)

        # Wiring
        self.session.viewStateChanged.connect(self._on_view_state)
        self.preview.btn_back.clicked.connect(self.session.back_to_form)
        self.preview.btn_generate.clicked.connect(self.generate_pdf)
        self.pipeline.busyChanged.connect(lambda busy: self.preview.btn_generate.setEnabled(not busy))
        self.pipeline.exported.connect(self._on_exported)
        self.pipeline.failed.connect(self._on_export_failed)

        new_sc = QShortcut(QKeySequence.New, self)
        new_sc.activated.connect(self.new_invoice)

        self.setStyleSheet(light_qss())
        self.stack.setCurrentIndex(FORM_INDEX)

    def _on_view_state(self, state: ViewState) -> None:
        if state is ViewState.PREVIEWING:
            self.preview.show_invoice(self.session.invoice)
            self.stack.setCurrentIndex(PREVIEW_INDEX)
        else:
            self.stack.setCurrentIndex(FORM_INDEX)

    def new_invoice(self) -> None:
        if self.pipeline.is_busy:
            return
        self.session.reset()

    def generate_pdf(self) -> bool:
        sheet = self.preview.sheet
        if sheet is None:
            return False
        return self.pipeline.start(sheet, sheet.invoice.invoice_number)

    def _on_exported(self, path: str) -> None:
        logger.info("Invoice exported: %s", path)
        self.statusBar().showMessage(f"Saved {path}", 8000)

    def _on_export_failed(self, reason: str) -> None:
        QMessageBox.critical(self, "PDF failed", f"Could not generate the PDF.\n\nDetails: {reason}")


def create_main_window(settings: Optional[Settings] = None) -> AppWindow:
    return AppWindow(settings)
