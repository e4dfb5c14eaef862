from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, localcontext
from typing import Any, Iterable

from invoice_builder.core.model import Invoice, LineItem

# Thousands separator per supported display locale
GROUP_SEPARATORS = {
	"id-ID": ".",
	"en-US": ",",
}
DEFAULT_LOCALE = "id-ID"


def to_decimal(x: Any) -> Decimal:
	"""Best-effort conversion to Decimal via str; empty, non-numeric, NaN and infinite become 0."""
	if x is None or isinstance(x, bool):
		return Decimal("0")
	try:
		d = Decimal(str(x).strip())
	except (InvalidOperation, ValueError, TypeError):
		return Decimal("0")
	return d if d.is_finite() else Decimal("0")


def sum_money(values: Iterable[Any]) -> Decimal:
	nums = [to_decimal(v) for v in values]
	if not nums:
		return Decimal("0")
	# Enough digits that no addition rounds, however large the amounts
	span = max(d.adjusted() for d in nums) - min(d.as_tuple().exponent for d in nums)
	with localcontext() as ctx:
		ctx.prec = max(28, span + len(str(len(nums))) + 2)
		total = Decimal("0")
		for d in nums:
			total += d
	return total


def item_total(item: LineItem) -> Decimal:
	"""quantity x unit price; the discount is not subtracted per item."""
	qty = to_decimal(item.quantity)
	price = to_decimal(item.unit_price)
	with localcontext() as ctx:
		ctx.prec = max(28, len(qty.as_tuple().digits) + len(price.as_tuple().digits))
		return qty * price


def grand_total(invoice: Invoice) -> Decimal:
	return sum_money(item_total(it) for it in invoice.items)


def total_discount(invoice: Invoice) -> Decimal:
	return sum_money(it.discount for it in invoice.items)


def has_discount(invoice: Invoice) -> bool:
	return any(to_decimal(it.discount) != 0 for it in invoice.items)


def payable_total(invoice: Invoice, subtract_discount: bool = False) -> Decimal:
	total = grand_total(invoice)
	if subtract_discount:
		total = sum_money((total, total_discount(invoice).copy_negate()))
	return total


def format_currency(x: Any, locale: str = DEFAULT_LOCALE) -> str:
	"""
	Group digits for display with no fractional part, e.g. 1500000 -> '1.500.000' (id-ID).

	The currency code and the trailing '.00' are added by the caller (see format_amount).
	"""
	sep = GROUP_SEPARATORS.get(locale)
	if sep is None:
		raise ValueError(f"Unsupported locale: {locale!r}")
	d = to_decimal(x)
	with localcontext() as ctx:
		# quantize needs every integer digit to fit in the context precision
		ctx.prec = max(28, d.adjusted() + 2)
		n = int(d.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
	return f"{n:,}".replace(",", sep)


def format_amount(x: Any, currency: str = "IDR", locale: str = DEFAULT_LOCALE) -> str:
	return f"{currency} {format_currency(x, locale)}.00"
