from __future__ import annotations

import logging

from PySide6.QtCore import QBuffer, QByteArray, QIODevice, QPoint, QSize, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QRegion
from PySide6.QtWidgets import QWidget

from invoice_builder.pdf.errors import RasterizationError

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 2.0


def content_size(widget: QWidget) -> QSize:
    """Full extent of the widget's content, not just the part a scroll area shows."""
    hint = widget.sizeHint()
    size = widget.size()
    return QSize(max(size.width(), hint.width()), max(size.height(), hint.height()))


def rasterize_widget(widget: QWidget, scale: float = DEFAULT_SCALE, background: QColor | Qt.GlobalColor = Qt.white) -> QImage:
    """Render widget and its children into an opaque bitmap oversampled by scale.

    Raises RasterizationError when nothing can be captured.
    """
    if scale <= 0:
        raise RasterizationError(f"Invalid raster scale: {scale}")
    extent = content_size(widget)
    if extent.isEmpty():
        raise RasterizationError(f"Nothing to capture: widget extent is {extent.width()}x{extent.height()}")

    original = widget.size()
    if original != extent:
        widget.resize(extent)
        if widget.layout() is not None:
            widget.layout().activate()
    try:
        image = QImage(round(extent.width() * scale), round(extent.height() * scale), QImage.Format_ARGB32_Premultiplied)
        if image.isNull():
            raise RasterizationError(f"Could not allocate a {extent.width()}x{extent.height()} @{scale}x bitmap")
        image.setDevicePixelRatio(scale)
        image.fill(QColor(background))
        painter = QPainter(image)
        if not painter.isActive():
            raise RasterizationError("Could not start painting on the bitmap")
        try:
            painter.setRenderHint(QPainter.Antialiasing)
            painter.setRenderHint(QPainter.SmoothPixmapTransform)
            widget.render(
                painter,
                QPoint(0, 0),
                QRegion(0, 0, extent.width(), extent.height()),
                QWidget.RenderFlag.DrawWindowBackground | QWidget.RenderFlag.DrawChildren,
            )
        finally:
            painter.end()
    finally:
        if original != extent:
            widget.resize(original)

    logger.info("Rasterized %dx%d widget to %dx%d px", extent.width(), extent.height(), image.width(), image.height())
    # Drop alpha so transparent regions come out white
    return image.convertToFormat(QImage.Format_RGB32)


def encode_png(image: QImage) -> bytes:
    data = QByteArray()
    buffer = QBuffer(data)
    buffer.open(QIODevice.WriteOnly)
    try:
        if not image.save(buffer, "PNG"):
            raise RasterizationError("Could not encode bitmap as PNG")
    finally:
        buffer.close()
    return bytes(data.data())
