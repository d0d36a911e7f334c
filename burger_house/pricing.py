"""Money and tax calculation"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, NamedTuple, Union

from burger_house.errors import InvalidLineItemError, InvalidTaxRateError
from burger_house.models import LineItem

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


class Totals(NamedTuple):
    subtotal: Decimal
    tax: Decimal
    total: Decimal


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal, going through str() so 0.08 stays 0.08"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidOperation(f"not a number: {value!r}")
    return Decimal(str(value))


def round_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(amount: Decimal) -> int:
    return int(round_cents(amount) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def compute_totals(items: Iterable[LineItem], tax_rate: Number) -> Totals:
    """
    Compute subtotal, tax and total for a list of line items.

    The subtotal is rounded half-up once, on the final sum, so per-line
    rounding never accumulates. Tax is rounded half-up on the rounded
    subtotal, and total is their exact sum.
    """
    try:
        rate = to_decimal(tax_rate)
    except (InvalidOperation, ValueError):
        raise InvalidTaxRateError(tax_rate)
    if not rate.is_finite() or rate < 0:
        raise InvalidTaxRateError(tax_rate)

    raw_subtotal = Decimal(0)
    for index, item in enumerate(items):
        price = item.unit_price
        if not price.is_finite() or price < 0:
            raise InvalidLineItemError(index, "unit_price", price, "must be >= 0")
        if isinstance(item.quantity, bool) or not isinstance(item.quantity, int):
            raise InvalidLineItemError(index, "quantity", item.quantity, "must be an integer")
        if item.quantity <= 0:
            raise InvalidLineItemError(index, "quantity", item.quantity, "must be >= 1")
        raw_subtotal += price * item.quantity

    subtotal = round_cents(raw_subtotal)
    tax = round_cents(subtotal * rate)
    return Totals(subtotal=subtotal, tax=tax, total=subtotal + tax)
