from __future__ import annotations

# Allow running this file directly (python invoice_builder/main.py) by ensuring the project root is on sys.path
import os
import sys
if __package__ in (None, ""):
    sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import logging

from PySide6.QtWidgets import QApplication

from invoice_builder.core.settings import load_settings
from invoice_builder.shell import create_main_window

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level = os.getenv("INVOICE_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    configure_logging()
    app = QApplication(sys.argv)
    QApplication.setStyle("Fusion")
    settings = load_settings()
    logger.info("Exports go to %s", settings.resolved_export_dir())

    win = create_main_window(settings)
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
