"""
Line item pricing.

Totals are never stored; they are recomputed from the current catalog on
every read. The unit price is multiplied by the quantity first and the
product is rounded once, half-up, to cents.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 29.99 from expanding to their binary value
    return Decimal(str(value))


def unit_price(base_price: Number, price_adjustment: Number) -> Decimal:
    return to_decimal(base_price) + to_decimal(price_adjustment)


def line_total(base_price: Number, price_adjustment: Number, quantity: int) -> Decimal:
    """round((base_price + price_adjustment) * quantity, 2)"""
    total = unit_price(base_price, price_adjustment) * quantity
    return total.quantize(CENT, rounding=ROUND_HALF_UP)


def price_item(product, variation, quantity: int) -> Decimal:
    return line_total(product.base_price, variation.price_adjustment, quantity)


def cart_total(line_totals: Iterable[Decimal]) -> Decimal:
    return sum(line_totals, Decimal("0.00")).quantize(CENT, rounding=ROUND_HALF_UP)
