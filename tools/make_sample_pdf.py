from __future__ import annotations

import os
import sys
from pathlib import Path

# Render without a display when run from a terminal or CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from PySide6.QtWidgets import QApplication

from invoice_builder.core.model import Invoice, LineItem
from invoice_builder.core.settings import Settings
from invoice_builder.pdf.export import ExportPipeline
from invoice_builder.widgets.invoice_sheet import InvoiceSheet

# Generates a sample invoice PDF for README/demo purposes.


def main() -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    out_dir = ROOT / "assets" / "samples"
    settings = Settings(export_dir=str(out_dir), open_after_export=False)

    sample = Invoice(
        customer_name="(Customer Name)",
        customer_phone="(redacted)",
        invoice_number="SAMPLE-001",
        date="2025-07-01",
        items=(
            LineItem(description="PPF Full Body", quantity="1", unit_price="12500000", discount="500000"),
            LineItem(description="Ceramic Coating", quantity="1", unit_price="3500000"),
            LineItem(description="Headlight Film", quantity="2", unit_price="450000"),
        ),
    )
    sheet = InvoiceSheet(sample, settings)
    sheet.adjustSize()

    result = {"code": 1}
    pipeline = ExportPipeline(settings)

    def done(path: str) -> None:
        print(f"Wrote sample to: {path}")
        result["code"] = 0
        app.quit()

    def failed(reason: str) -> None:
        print(f"Sample export failed: {reason}", file=sys.stderr)
        app.quit()

    pipeline.exported.connect(done)
    pipeline.failed.connect(failed)
    pipeline.start(sheet, sample.invoice_number)
    app.exec()
    return result["code"]


if __name__ == "__main__":
    raise SystemExit(main())
