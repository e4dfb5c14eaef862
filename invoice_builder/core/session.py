from __future__ import annotations

import enum
import logging
from datetime import date as _date
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from PySide6.QtCore import QObject, Signal

from invoice_builder.core import model
from invoice_builder.core.model import Invoice

logger = logging.getLogger(__name__)


class ViewState(enum.Enum):
    EDITING = "editing"
    PREVIEWING = "previewing"


def _is_number(value: Any) -> bool:
    try:
        return Decimal(str(value).strip()).is_finite()
    except InvalidOperation:
        return False


def validate_invoice(invoice: Invoice) -> List[str]:
    """Return human-readable issues; an empty list means the invoice can be previewed."""
    issues: List[str] = []
    if not invoice.customer_name.strip():
        issues.append("Customer name is required.")
    if not invoice.customer_phone.strip():
        issues.append("Phone number is required.")
    if not invoice.invoice_number.strip():
        issues.append("Invoice number is required.")
    try:
        _date.fromisoformat(invoice.date)
    except (TypeError, ValueError):
        issues.append("Date must be a valid date (YYYY-MM-DD).")

    for i, it in enumerate(invoice.items, start=1):
        if not str(it.description).strip():
            issues.append(f"Item {i}: Description is required.")
        if not str(it.quantity).strip():
            issues.append(f"Item {i}: Quantity is required.")
        elif not _is_number(it.quantity):
            issues.append(f"Item {i}: Quantity must be a number.")
        if not str(it.unit_price).strip():
            issues.append(f"Item {i}: Unit price is required.")
        elif not _is_number(it.unit_price):
            issues.append(f"Item {i}: Unit price must be a number.")
        if str(it.discount).strip() and not _is_number(it.discount):
            issues.append(f"Item {i}: Discount must be a number.")
    return issues


class SessionController(QObject):
    """Owns the current invoice snapshot and which view (form or preview) is shown.

    Emits:
      - invoiceChanged(object): the new Invoice after any edit
      - viewStateChanged(object): the new ViewState
    """

    invoiceChanged = Signal(object)
    viewStateChanged = Signal(object)

    def __init__(self, invoice: Optional[Invoice] = None, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._invoice = invoice or model.new_invoice()
        self._view_state = ViewState.EDITING

    @property
    def invoice(self) -> Invoice:
        return self._invoice

    @property
    def view_state(self) -> ViewState:
        return self._view_state

    def _replace(self, invoice: Invoice) -> None:
        if invoice is self._invoice:
            return
        self._invoice = invoice
        self.invoiceChanged.emit(invoice)

    def _set_view_state(self, state: ViewState) -> None:
        if state is self._view_state:
            return
        self._view_state = state
        logger.info("View state -> %s", state.value)
        self.viewStateChanged.emit(state)

    # Edits
    def add_item(self) -> None:
        self._replace(model.add_item(self._invoice))

    def remove_item(self, item_id: str) -> None:
        self._replace(model.remove_item(self._invoice, item_id))

    def update_item(self, item_id: str, field_name: str, value: Any) -> None:
        self._replace(model.update_item(self._invoice, item_id, field_name, value))

    def set_header_field(self, field_name: str, value: str) -> None:
        self._replace(model.set_header_field(self._invoice, field_name, value))

    # Mode switches
    def submit(self) -> List[str]:
        issues = validate_invoice(self._invoice)
        if issues:
            logger.info("Submit rejected with %d issue(s)", len(issues))
            return issues
        self._set_view_state(ViewState.PREVIEWING)
        return []

    def back_to_form(self) -> None:
        self._set_view_state(ViewState.EDITING)

    def reset(self, today: Optional[_date] = None) -> None:
        self._replace(model.new_invoice(today))
        self._set_view_state(ViewState.EDITING)
