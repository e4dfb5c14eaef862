from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, QTimer, QUrl, Signal
from PySide6.QtGui import QImage, QImageReader, QPainter, QPainterPath, QPixmap
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest
from PySide6.QtWidgets import QLabel, QWidget

from invoice_builder.core.paths import resource_path

logger = logging.getLogger(__name__)


class AsyncImageLabel(QLabel):
    """Label that loads its image off the current call stack and reports when it settles.

    Local files are decoded on the next event-loop turn; http(s) sources are
    fetched with QNetworkAccessManager. Loading either succeeds or fails, and
    both outcomes count as settled. A failed image shows its alt text.

    Emits:
      - settled(bool): True when the image loaded, False when it failed
    """

    settled = Signal(bool)

    _network: Optional[QNetworkAccessManager] = None

    def __init__(self, source: Optional[str], alt_text: str = "", rounded: bool = False, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.source = (source or "").strip()
        self.alt_text = alt_text
        self.rounded = rounded
        self._settled = False
        self._ok = False
        self._reply: Optional[QNetworkReply] = None
        self.setAlignment(Qt.AlignCenter)
        self.setWordWrap(True)
        # Owned by the label so deleting it before the next turn cancels the load
        self._start_timer = QTimer(self)
        self._start_timer.setSingleShot(True)
        self._start_timer.timeout.connect(self._start)
        self._start_timer.start(0)

    @property
    def is_settled(self) -> bool:
        return self._settled

    @property
    def ok(self) -> bool:
        return self._ok

    @classmethod
    def network(cls) -> QNetworkAccessManager:
        if cls._network is None:
            cls._network = QNetworkAccessManager()
        return cls._network

    def _start(self) -> None:
        if self._settled:
            return
        if not self.source:
            self._settle(None, "no image source")
            return
        if self.source.startswith(("http://", "https://")):
            self._reply = self.network().get(QNetworkRequest(QUrl(self.source)))
            self._reply.finished.connect(self._on_reply_finished)
            return
        path = Path(self.source)
        if not path.exists():
            path = resource_path(self.source)
        reader = QImageReader(str(path))
        image = reader.read()
        self._settle(image if not image.isNull() else None, reader.errorString())

    def _on_reply_finished(self) -> None:
        reply = self._reply
        self._reply = None
        if reply is None:
            return
        image = None
        error = reply.errorString()
        if reply.error() == QNetworkReply.NetworkError.NoError:
            loaded = QImage.fromData(reply.readAll())
            if not loaded.isNull():
                image = loaded
            else:
                error = "unsupported image data"
        reply.deleteLater()
        self._settle(image, error)

    def _settle(self, image: Optional[QImage], error: str = "") -> None:
        if self._settled:
            return
        self._settled = True
        self._ok = image is not None
        if image is not None:
            self.setPixmap(self._fit(image))
        else:
            logger.warning("Image %r failed to load: %s", self.source, error)
            self.setText(self.alt_text)
        self.settled.emit(self._ok)

    def _fit(self, image: QImage) -> QPixmap:
        size = self.size() if self.width() > 1 and self.height() > 1 else image.size()
        mode = Qt.KeepAspectRatioByExpanding if self.rounded else Qt.KeepAspectRatio
        pm = QPixmap.fromImage(image).scaled(size, mode, Qt.SmoothTransformation)
        if not self.rounded:
            return pm
        # Clip to a circle inscribed in the label
        out = QPixmap(size)
        out.fill(Qt.transparent)
        painter = QPainter(out)
        painter.setRenderHint(QPainter.Antialiasing)
        path = QPainterPath()
        path.addEllipse(0, 0, size.width(), size.height())
        painter.setClipPath(path)
        painter.drawPixmap((size.width() - pm.width()) // 2, (size.height() - pm.height()) // 2, pm)
        painter.end()
        return out
