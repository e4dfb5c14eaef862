from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from reportlab.lib.pagesizes import A4, LETTER, LEGAL, portrait

PAGE_FORMATS = {
    "a4": A4,
    "letter": LETTER,
    "legal": LEGAL,
}

EXPORT_PREFIX = "Invoice-"


@dataclass(frozen=True)
class PageLayout:
    """Where the bitmap goes on the output page (points, bottom-left origin)."""

    page_width: float
    page_height: float
    x: float
    y: float
    width: float
    height: float

    @property
    def pagesize(self) -> Tuple[float, float]:
        return (self.page_width, self.page_height)


def page_format_size(page_format: str) -> Tuple[float, float]:
    try:
        return portrait(PAGE_FORMATS[page_format.strip().lower()])
    except KeyError:
        raise ValueError(f"Unsupported page format: {page_format!r}") from None


def compose_page(bitmap_width: int, bitmap_height: int, page_width: float) -> PageLayout:
    """Scale the bitmap to exactly fill page_width, keeping its aspect ratio.

    The page is as tall as the scaled bitmap; content is never split across pages.
    """
    if bitmap_width <= 0 or bitmap_height <= 0:
        raise ValueError(f"Bitmap has no area: {bitmap_width}x{bitmap_height}")
    height = bitmap_height * (page_width / bitmap_width)
    return PageLayout(
        page_width=page_width,
        page_height=height,
        x=0.0,
        y=0.0,
        width=page_width,
        height=height,
    )


def export_filename(invoice_number: str) -> str:
    # Path separators and characters Windows rejects would escape the export folder
    safe = re.sub(r'[\\/:*?"<>|]', "_", invoice_number.strip())
    return f"{EXPORT_PREFIX}{safe}.pdf"
