from __future__ import annotations

from datetime import date

import pytest

pytest.importorskip("pytestqt")

from invoice_builder.core.model import Invoice, LineItem
from invoice_builder.core.session import SessionController, ViewState, validate_invoice


def _valid_invoice() -> Invoice:
    return Invoice(
        customer_name="Budi",
        customer_phone="0812",
        invoice_number="INV-001",
        date="2025-07-01",
        items=(LineItem(description="PPF Install", quantity="2", unit_price="250000"),),
    )


def test_validate_accepts_complete_invoice() -> None:
    assert validate_invoice(_valid_invoice()) == []


def test_validate_lists_every_issue_with_item_numbers() -> None:
    inv = Invoice(
        date="not-a-date",
        items=(
            LineItem(description="ok", quantity="1", unit_price="10"),
            LineItem(quantity="two", unit_price="", discount="x"),
        ),
    )
    issues = validate_invoice(inv)
    assert "Customer name is required." in issues
    assert "Phone number is required." in issues
    assert "Invoice number is required." in issues
    assert "Date must be a valid date (YYYY-MM-DD)." in issues
    assert "Item 2: Description is required." in issues
    assert "Item 2: Quantity must be a number." in issues
    assert "Item 2: Unit price is required." in issues
    assert "Item 2: Discount must be a number." in issues
    assert not any(m.startswith("Item 1:") for m in issues)


def test_blank_discount_is_allowed() -> None:
    inv = _valid_invoice()
    item = inv.items[0]
    assert item.discount == ""
    assert validate_invoice(inv) == []


def test_submit_invalid_stays_in_editing(qtbot) -> None:  # type: ignore[reportUnknownParameterType]
    session = SessionController()
    issues = session.submit()
    assert issues
    assert session.view_state is ViewState.EDITING


def test_submit_then_back_preserves_invoice(qtbot) -> None:  # type: ignore[reportUnknownParameterType]
    session = SessionController(_valid_invoice())
    before = session.invoice
    with qtbot.waitSignal(session.viewStateChanged) as blocker:
        assert session.submit() == []
    assert blocker.args == [ViewState.PREVIEWING]
    session.back_to_form()
    assert session.view_state is ViewState.EDITING
    assert session.invoice is before


def test_edits_emit_new_snapshot(qtbot) -> None:  # type: ignore[reportUnknownParameterType]
    session = SessionController()
    with qtbot.waitSignal(session.invoiceChanged) as blocker:
        session.add_item()
    assert len(blocker.args[0].items) == 2

    item_id = session.invoice.items[0].id
    session.update_item(item_id, "description", "Coating")
    assert session.invoice.items[0].description == "Coating"
    session.set_header_field("customer_name", "Sari")
    assert session.invoice.customer_name == "Sari"


def test_noop_edit_does_not_emit(qtbot) -> None:  # type: ignore[reportUnknownParameterType]
    session = SessionController()
    with qtbot.assertNotEmitted(session.invoiceChanged):
        session.remove_item(session.invoice.items[0].id)


def test_reset_starts_fresh_in_editing(qtbot) -> None:  # type: ignore[reportUnknownParameterType]
    session = SessionController(_valid_invoice())
    session.submit()
    session.reset(today=date(2025, 1, 2))
    assert session.view_state is ViewState.EDITING
    assert session.invoice.customer_name == ""
    assert session.invoice.date == "2025-01-02"
    assert len(session.invoice.items) == 1
