from __future__ import annotations

import pytest
import shiboken6
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QScrollArea, QWidget

pytest.importorskip("pytestqt")

from invoice_builder.core.model import Invoice, LineItem
from invoice_builder.core.settings import Settings
from invoice_builder.pdf.errors import RasterizationError
from invoice_builder.pdf.raster import content_size, encode_png, rasterize_widget
from invoice_builder.widgets.invoice_sheet import InvoiceSheet


def _sheet() -> InvoiceSheet:
    inv = Invoice(
        customer_name="Budi",
        customer_phone="0812",
        invoice_number="INV-001",
        date="2025-07-01",
        items=(LineItem(description="PPF Install", quantity="2", unit_price="250000"),),
    )
    return InvoiceSheet(inv, Settings(logo_path=None, open_after_export=False))


def test_captures_full_extent_not_scroll_viewport(qtbot) -> None:  # type: ignore[reportUnknownParameterType]
    scroll = QScrollArea()
    scroll.setWidgetResizable(False)
    sheet = _sheet()
    sheet.adjustSize()
    scroll.setWidget(sheet)
    scroll.resize(300, 200)
    qtbot.addWidget(scroll)

    before = sheet.size()
    extent = content_size(sheet)
    image = rasterize_widget(sheet)

    assert image.width() == 2 * sheet.width()
    assert image.height() == 2 * extent.height()
    assert image.width() > 2 * scroll.viewport().width()
    assert not image.hasAlphaChannel()
    assert sheet.size() == before


def test_transparent_regions_come_out_white(qtbot) -> None:  # type: ignore[reportUnknownParameterType]
    w = QWidget()
    pal = w.palette()
    pal.setColor(QPalette.Window, QColor(Qt.transparent))
    w.setPalette(pal)
    w.resize(40, 30)
    qtbot.addWidget(w)

    image = rasterize_widget(w)

    assert (image.width(), image.height()) == (80, 60)
    assert not image.hasAlphaChannel()
    assert QColor(image.pixel(5, 5)) == QColor(Qt.white)
    assert encode_png(image).startswith(b"\x89PNG")


def test_zero_size_widget_raises(qtbot) -> None:  # type: ignore[reportUnknownParameterType]
    w = QWidget()
    w.resize(0, 0)
    qtbot.addWidget(w)
    with pytest.raises(RasterizationError):
        rasterize_widget(w)


def test_invalid_scale_raises(qtbot) -> None:  # type: ignore[reportUnknownParameterType]
    w = QWidget()
    w.resize(10, 10)
    qtbot.addWidget(w)
    with pytest.raises(RasterizationError):
        rasterize_widget(w, scale=0)


def test_sheet_closed_before_images_start_loading(qtbot) -> None:  # type: ignore[reportUnknownParameterType]
    sheet = _sheet()
    sheet.adjustSize()
    rasterize_widget(sheet)
    shiboken6.delete(sheet)
    # The deleted logo's pending load must not run
    qtbot.wait(50)
