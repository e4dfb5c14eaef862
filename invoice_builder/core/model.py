"""Immutable invoice values and their copy-on-write edit operations.

Every operation returns a new Invoice; the input is never mutated. An invoice
always holds at least one line item.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import date as _date
from typing import Any, Optional, Tuple

ITEM_FIELDS = ("description", "quantity", "unit_price", "discount")
HEADER_FIELDS = ("customer_name", "customer_phone", "invoice_number", "date")


def new_item_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class LineItem:
    # Raw form values; numeric coercion happens in core.currency
    id: str = field(default_factory=new_item_id)
    description: str = ""
    quantity: Any = ""
    unit_price: Any = ""
    discount: Any = ""


@dataclass(frozen=True)
class Invoice:
    customer_name: str = ""
    customer_phone: str = ""
    invoice_number: str = ""
    date: str = ""
    items: Tuple[LineItem, ...] = field(default_factory=lambda: (LineItem(),))

    def item(self, item_id: str) -> Optional[LineItem]:
        for it in self.items:
            if it.id == item_id:
                return it
        return None


def new_invoice(today: Optional[_date] = None) -> Invoice:
    """Blank invoice with one empty line item, dated today (ISO 8601)."""
    d = today or _date.today()
    return Invoice(date=d.isoformat(), items=(LineItem(),))


def add_item(invoice: Invoice) -> Invoice:
    return replace(invoice, items=invoice.items + (LineItem(),))


def remove_item(invoice: Invoice, item_id: str) -> Invoice:
    # The last remaining item is never removed
    if len(invoice.items) <= 1:
        return invoice
    kept = tuple(it for it in invoice.items if it.id != item_id)
    if len(kept) == len(invoice.items):
        return invoice
    return replace(invoice, items=kept)


def update_item(invoice: Invoice, item_id: str, field_name: str, value: Any) -> Invoice:
    if field_name not in ITEM_FIELDS:
        raise ValueError(f"Unknown line item field: {field_name!r}")
    if invoice.item(item_id) is None:
        return invoice
    items = tuple(
        replace(it, **{field_name: value}) if it.id == item_id else it
        for it in invoice.items
    )
    return replace(invoice, items=items)


def set_header_field(invoice: Invoice, field_name: str, value: str) -> Invoice:
    if field_name not in HEADER_FIELDS:
        raise ValueError(f"Unknown invoice field: {field_name!r}")
    return replace(invoice, **{field_name: value})
