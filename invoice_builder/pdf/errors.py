from __future__ import annotations


class ExportError(RuntimeError):
    """Raised when an invoice export attempt fails; the attempt leaves no file behind."""


class RasterizationError(ExportError):
    """Raised when the preview cannot be rendered to a bitmap."""
