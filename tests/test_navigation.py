from __future__ import annotations

import pytest
from PySide6.QtWidgets import QMessageBox

pytest.importorskip("pytestqt")

from invoice_builder.core.session import ViewState
from invoice_builder.core.settings import Settings
from invoice_builder.shell import FORM_INDEX, PREVIEW_INDEX, AppWindow


@pytest.fixture
def win(qtbot, tmp_path):  # type: ignore[reportUnknownParameterType]
    w = AppWindow(Settings(export_dir=str(tmp_path), open_after_export=False))
    qtbot.addWidget(w)
    return w


def _fill_valid(win: AppWindow) -> None:
    s = win.session
    s.set_header_field("customer_name", "Budi")
    s.set_header_field("customer_phone", "0812")
    s.set_header_field("invoice_number", "INV-001")
    item_id = s.invoice.items[0].id
    s.update_item(item_id, "description", "PPF Install")
    s.update_item(item_id, "quantity", "2")
    s.update_item(item_id, "unit_price", "250000")


def test_app_window_starts_on_form(win) -> None:  # type: ignore[reportUnknownParameterType]
    assert win.stack.currentIndex() == FORM_INDEX
    assert win.preview.sheet is None
    assert win.form.btn_preview.text() == "Preview Invoice"


def test_invalid_submit_warns_and_stays(win, monkeypatch) -> None:  # type: ignore[reportUnknownParameterType]
    shown = []
    monkeypatch.setattr(QMessageBox, "warning", lambda *a, **k: shown.append(a))
    assert win.form.submit() is False
    assert shown and "Customer name is required." in shown[0][2]
    assert win.stack.currentIndex() == FORM_INDEX
    assert win.form.name_edit.property("invalid") is True


def test_form_to_preview_and_back(win) -> None:  # type: ignore[reportUnknownParameterType]
    _fill_valid(win)
    assert win.form.name_edit.text() == "Budi"
    assert win.form.submit() is True
    assert win.session.view_state is ViewState.PREVIEWING
    assert win.stack.currentIndex() == PREVIEW_INDEX
    assert win.preview.sheet is not None
    assert win.preview.sheet.total_value.text() == "IDR 500.000.00"

    before = win.session.invoice
    win.preview.btn_back.click()
    assert win.stack.currentIndex() == FORM_INDEX
    assert win.session.invoice is before
    assert win.form.number_edit.text() == "INV-001"


def test_generate_pdf_from_preview(qtbot, win, tmp_path) -> None:  # type: ignore[reportUnknownParameterType]
    _fill_valid(win)
    win.form.submit()
    with qtbot.waitSignal(win.pipeline.exported, timeout=5000):
        assert win.generate_pdf()
        assert not win.preview.btn_generate.isEnabled()
    assert (tmp_path / "Invoice-INV-001.pdf").exists()
    assert win.preview.btn_generate.isEnabled()
