from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Tuple

from reportlab.lib.pagesizes import landscape, portrait
from reportlab.lib.units import inch, mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from invoice_builder.pdf.compose import page_format_size
from invoice_builder.pdf.errors import ExportError

logger = logging.getLogger(__name__)

# Size of one unit in points
UNITS = {
    "pt": 1.0,
    "px": 72.0 / 96.0,
    "mm": mm,
    "in": inch,
}


class ReportLabDocument:
    """A one-page PDF holding full-page raster images.

    Coordinates passed to embed_image are in the document unit with a top-left
    origin, matching how the bitmap was laid out.
    """

    def __init__(self, orientation: str = "portrait", unit: str = "pt", page_format: str = "A4") -> None:
        if unit not in UNITS:
            raise ValueError(f"Unsupported unit: {unit!r}")
        if orientation not in ("portrait", "landscape"):
            raise ValueError(f"Unsupported orientation: {orientation!r}")
        self.unit = unit
        self.k = UNITS[unit]
        size = page_format_size(page_format)
        self._page_size: Tuple[float, float] = landscape(size) if orientation == "landscape" else portrait(size)
        self._images: list[tuple[bytes, float, float, float, float]] = []
        self.title: Optional[str] = None
        self.author: Optional[str] = None

    @property
    def page_width(self) -> float:
        """Page width in document units."""
        return self._page_size[0] / self.k

    @property
    def page_height(self) -> float:
        return self._page_size[1] / self.k

    def set_page_height(self, height: float) -> None:
        self._page_size = (self._page_size[0], height * self.k)

    def embed_image(self, png_bytes: bytes, x: float, y: float, width: float, height: float) -> None:
        if not png_bytes:
            raise ExportError("Cannot embed an empty image")
        self._images.append((png_bytes, x, y, width, height))

    def save(self, out_path: Path | str) -> Path:
        """Write the PDF; on failure any partially written file is removed."""
        out = Path(out_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        page_w, page_h = self._page_size
        try:
            c = Canvas(str(out), pagesize=(page_w, page_h))
            if self.title:
                c.setTitle(self.title)
            if self.author:
                c.setAuthor(self.author)
            for png, x, y, w, h in self._images:
                k = self.k
                # ReportLab's origin is bottom-left
                c.drawImage(ImageReader(io.BytesIO(png)), x * k, page_h - (y + h) * k, width=w * k, height=h * k)
            c.showPage()
            c.save()
        except Exception as e:
            out.unlink(missing_ok=True)
            raise ExportError(f"Could not write {out.name}: {e}") from e
        logger.info("Wrote %s (%.1fx%.1f pt)", out, page_w, page_h)
        return out
