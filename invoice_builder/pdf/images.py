from __future__ import annotations

import logging
from typing import List, Optional

from PySide6.QtCore import QObject, QTimer, Signal
from PySide6.QtWidgets import QWidget

from invoice_builder.widgets.async_image import AsyncImageLabel

logger = logging.getLogger(__name__)


def embedded_images(root: QWidget) -> List[AsyncImageLabel]:
    images = list(root.findChildren(AsyncImageLabel))
    if isinstance(root, AsyncImageLabel):
        images.insert(0, root)
    return images


class ImageBarrier(QObject):
    """Releases once every image inside a widget has settled (loaded or failed).

    With no pending images the barrier releases on the next event-loop turn.
    timeout_ms == 0 waits indefinitely; otherwise the barrier releases after the
    timeout with whatever has loaded, and timed_out is set.

    Emits:
      - released(): exactly once per start()
    """

    released = Signal()

    def __init__(self, root: QWidget, timeout_ms: int = 0, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.root = root
        self.timeout_ms = max(0, int(timeout_ms))
        self.total = 0
        self.failed = 0
        self.timed_out = False
        self._pending: List[AsyncImageLabel] = []
        self._done = False
        self._timer: Optional[QTimer] = None

    @property
    def pending(self) -> int:
        return len(self._pending)

    def start(self) -> None:
        images = embedded_images(self.root)
        self.total = len(images)
        self.failed = sum(1 for img in images if img.is_settled and not img.ok)
        self._pending = [img for img in images if not img.is_settled]
        logger.info("Waiting for %d of %d image(s)", len(self._pending), self.total)
        if not self._pending:
            QTimer.singleShot(0, self._release)
            return
        for img in self._pending:
            img.settled.connect(lambda ok, img=img: self._on_settled(img, ok))
        if self.timeout_ms:
            self._timer = QTimer(self)
            self._timer.setSingleShot(True)
            self._timer.timeout.connect(self._on_timeout)
            self._timer.start(self.timeout_ms)

    def _on_settled(self, img: AsyncImageLabel, ok: bool) -> None:
        if self._done or img not in self._pending:
            return
        self._pending.remove(img)
        if not ok:
            self.failed += 1
        if not self._pending:
            self._release()

    def _on_timeout(self) -> None:
        if self._done:
            return
        self.timed_out = True
        logger.warning("Gave up on %d image(s) after %d ms; exporting best-effort", len(self._pending), self.timeout_ms)
        self._release()

    def _release(self) -> None:
        if self._done:
            return
        self._done = True
        if self._timer is not None:
            self._timer.stop()
        self.released.emit()
