"""Invoice export: wait for images, rasterize the preview, size the page, write the PDF.

The stages run strictly in order on the Qt event loop. The pipeline yields to
the loop while images settle. Any failure is reported through `failed` and
never leaves a partial file; a second start() while busy is rejected.
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QImage
from PySide6.QtWidgets import QWidget

from invoice_builder.core.settings import Settings
from invoice_builder.pdf.compose import compose_page, export_filename
from invoice_builder.pdf.document import ReportLabDocument
from invoice_builder.pdf.errors import ExportError
from invoice_builder.pdf.images import ImageBarrier
from invoice_builder.pdf.raster import encode_png, rasterize_widget
from invoice_builder.printing.viewer import open_file

logger = logging.getLogger(__name__)


class ExportStage(enum.Enum):
    IDLE = "idle"
    AWAIT_IMAGES = "await-images"
    RASTERIZE = "rasterize"
    COMPOSE = "compose-page"
    SERIALIZE = "serialize"


def _open_in_viewer(path: Path) -> None:
    if not open_file(str(path)):
        logger.warning("Could not open %s in the default viewer", path)


class ExportPipeline(QObject):
    """Exports a rendered invoice widget to Invoice-<number>.pdf.

    Emits:
      - stageChanged(object): the ExportStage just entered
      - exported(str): path of the written PDF
      - failed(str): human-readable reason the export was abandoned
      - busyChanged(bool)
    """

    stageChanged = Signal(object)
    exported = Signal(str)
    failed = Signal(str)
    busyChanged = Signal(bool)

    def __init__(
        self,
        settings: Settings,
        parent: Optional[QObject] = None,
        rasterizer: Callable[[QWidget, float], QImage] = rasterize_widget,
        deliver: Optional[Callable[[Path], None]] = None,
    ) -> None:
        super().__init__(parent)
        self.settings = settings
        self._rasterizer = rasterizer
        if deliver is None and settings.open_after_export:
            deliver = _open_in_viewer
        self._deliver = deliver
        self._stage = ExportStage.IDLE
        self._barrier: Optional[ImageBarrier] = None
        self._node: Optional[QWidget] = None
        self._invoice_number = ""

    @property
    def stage(self) -> ExportStage:
        return self._stage

    @property
    def is_busy(self) -> bool:
        return self._stage is not ExportStage.IDLE

    def _enter(self, stage: ExportStage) -> None:
        self._stage = stage
        logger.info("Export stage -> %s", stage.value)
        self.stageChanged.emit(stage)

    def start(self, node: QWidget, invoice_number: str) -> bool:
        """Begin exporting node. Returns False (and does nothing) if an export is in flight."""
        if self.is_busy:
            logger.warning("Export already in progress; ignoring request for %s", invoice_number)
            return False
        self._node = node
        self._invoice_number = invoice_number
        self.busyChanged.emit(True)
        self._enter(ExportStage.AWAIT_IMAGES)
        self._barrier = ImageBarrier(node, self.settings.image_timeout_ms, self)
        self._barrier.released.connect(self._on_images_settled)
        self._barrier.start()
        return True

    def _on_images_settled(self) -> None:
        barrier = self._barrier
        self._barrier = None
        if barrier is not None:
            if barrier.failed:
                logger.warning("%d image(s) failed to load; continuing without them", barrier.failed)
            barrier.deleteLater()
        try:
            out = self._write_pdf()
        except ExportError as e:
            logger.error("Export of %s failed: %s", self._invoice_number, e)
            self._finish()
            self.failed.emit(str(e))
            return
        except Exception as e:
            logger.exception("Unexpected error while exporting %s", self._invoice_number)
            self._finish()
            self.failed.emit(f"Unexpected error: {e}")
            return

        self._finish()
        if self._deliver is not None:
            self._deliver(out)
        self.exported.emit(str(out))

    def _write_pdf(self) -> Path:
        node = self._node
        if node is None:
            raise ExportError("Nothing to export")

        self._enter(ExportStage.RASTERIZE)
        image = self._rasterizer(node, float(self.settings.raster_scale))

        self._enter(ExportStage.COMPOSE)
        doc = ReportLabDocument(orientation="portrait", unit="pt", page_format=self.settings.page_format)
        doc.title = f"Invoice {self._invoice_number}"
        doc.author = self.settings.business_name
        layout = compose_page(image.width(), image.height(), doc.page_width)
        doc.set_page_height(layout.page_height)
        doc.embed_image(encode_png(image), layout.x, layout.y, layout.width, layout.height)

        self._enter(ExportStage.SERIALIZE)
        out = self.settings.resolved_export_dir() / export_filename(self._invoice_number)
        return doc.save(out)

    def _finish(self) -> None:
        self._node = None
        self._enter(ExportStage.IDLE)
        self.busyChanged.emit(False)
