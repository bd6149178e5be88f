"""Order pricing and receipt breakdown."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from restaurant_ops.constant import TAX_RATE
from restaurant_ops.errors import ValidationError
from restaurant_ops.models import Order, OrderLine

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class ReceiptBreakdown:
    """Cent-rounded figures printed on a bill."""

    subtotal: Decimal
    tax: Decimal
    total: Decimal


def to_money(value: object) -> Decimal:
    """Coerce a price given as Decimal, int, float or numeric string."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid price: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            # str() keeps floats like 8.99 from picking up binary noise.
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(f"Invalid price: {value!r}") from None
    if not amount.is_finite():
        raise ValidationError(f"Invalid price: {value!r}")
    return amount


def round_cents(amount: Decimal) -> Decimal:
    return amount.quantize(_CENT, rounding=ROUND_HALF_UP)


def subtotal(lines: Iterable[OrderLine]) -> Decimal:
    return sum((line.subtotal for line in lines), Decimal("0"))


def tax(amount: Decimal) -> Decimal:
    return amount * TAX_RATE


def total(lines: Iterable[OrderLine]) -> Decimal:
    """Subtotal plus tax, unrounded."""
    base = subtotal(lines)
    return base + tax(base)


def subtotal_from_total(order_total: Decimal) -> Decimal:
    """Recover the pre-tax amount from a stored total."""
    return order_total / (1 + TAX_RATE)


def receipt_breakdown(order: Order) -> ReceiptBreakdown:
    """
    Derive bill figures from the order's stored total.

    Tax is taken as the remainder after rounding the subtotal, so the three
    printed amounts always add up to the printed total.
    """
    shown_total = round_cents(order.total)
    shown_subtotal = round_cents(subtotal_from_total(order.total))
    return ReceiptBreakdown(subtotal=shown_subtotal, tax=shown_total - shown_subtotal, total=shown_total)
