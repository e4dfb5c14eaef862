from __future__ import annotations

from decimal import Decimal

import pytest

from invoice_builder.core.currency import (
    format_amount,
    format_currency,
    grand_total,
    has_discount,
    item_total,
    payable_total,
    to_decimal,
    total_discount,
)
from invoice_builder.core.model import Invoice, LineItem


def _invoice(*items: LineItem) -> Invoice:
    return Invoice(invoice_number="INV-001", items=tuple(items))


def test_item_total_multiplies_quantity_and_price() -> None:
    assert item_total(LineItem(quantity=3, unit_price=1500)) == 4500


@pytest.mark.parametrize("qty", ["", None, "abc", "NaN", "inf"])
def test_item_total_normalizes_bad_numbers_to_zero(qty) -> None:
    assert item_total(LineItem(quantity=qty, unit_price=1500)) == 0


def test_item_total_ignores_discount() -> None:
    assert item_total(LineItem(quantity="2", unit_price="100", discount="50")) == 200


def test_to_decimal_accepts_strings_with_whitespace() -> None:
    assert to_decimal(" 2.5 ") == Decimal("2.5")


def test_grand_total_is_order_independent() -> None:
    a = LineItem(quantity=2, unit_price=250000)
    b = LineItem(quantity=1, unit_price=99999)
    c = LineItem(quantity="", unit_price=10)
    assert grand_total(_invoice(a, b, c)) == grand_total(_invoice(c, a, b)) == 599999


def test_total_discount_treats_missing_as_zero() -> None:
    inv = _invoice(
        LineItem(discount=1000),
        LineItem(discount=""),
        LineItem(discount=500),
    )
    assert total_discount(inv) == 1500
    assert has_discount(inv)


def test_has_discount_false_when_all_blank_or_zero() -> None:
    assert not has_discount(_invoice(LineItem(discount=""), LineItem(discount="0")))


def test_grand_total_does_not_subtract_discount_by_default() -> None:
    inv = _invoice(LineItem(quantity=2, unit_price=250000, discount=100000))
    assert payable_total(inv) == 500000
    assert payable_total(inv, subtract_discount=True) == 400000


def test_format_currency_uses_indonesian_grouping() -> None:
    assert format_currency(1500000) == "1.500.000"
    assert format_currency(0) == "0"
    assert format_currency(999) == "999"


def test_format_currency_rounds_to_whole_units() -> None:
    assert format_currency(Decimal("1499.5")) == "1.500"
    assert format_currency("1234.4") == "1.234"


def test_format_currency_other_locale_and_nan() -> None:
    assert format_currency(1500000, "en-US") == "1,500,000"
    assert format_currency("not a number") == "0"
    with pytest.raises(ValueError):
        format_currency(1, "xx-XX")


def test_end_to_end_total_display() -> None:
    inv = _invoice(LineItem(description="PPF Install", quantity=2, unit_price=250000, discount=0))
    assert format_amount(grand_total(inv)) == "IDR 500.000.00"


def test_format_currency_handles_more_digits_than_default_precision() -> None:
    inv = _invoice(LineItem(description="Fleet", quantity="1" * 29, unit_price="1"))
    assert format_currency(grand_total(inv)) == ".".join(["11"] + ["111"] * 9)


def test_huge_line_item_total_is_exact() -> None:
    nines = "9" * 17
    inv = _invoice(
        LineItem(quantity=nines, unit_price=nines, discount="1"),
        LineItem(quantity="1", unit_price="1"),
    )
    expected = int(nines) * int(nines) + 1
    assert grand_total(inv) == expected
    assert payable_total(inv, subtract_discount=True) == expected - 1
    assert format_currency(grand_total(inv)) == f"{expected:,}".replace(",", ".")
