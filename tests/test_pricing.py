import pytest
from decimal import Decimal

from storefront.services.pricing import line_total, unit_price, cart_total


@pytest.mark.parametrize(
    "base_price, adjustment, quantity, expected",
    [
        ("10.00", "2.50", 2, "25.00"),
        ("10.00", "2.50", 5, "62.50"),
        ("29.99", "-2.50", 3, "82.47"),
        ("19.99", "0.00", 1, "19.99"),
        ("45.99", "-5.00", 4, "163.96"),
        ("0.01", "0.00", 1000, "10.00"),
    ],
)
def test_line_total(base_price, adjustment, quantity, expected):
    assert line_total(Decimal(base_price), Decimal(adjustment), quantity) == Decimal(expected)


def test_line_total_accepts_floats_without_drift():
    # 0.1 + 0.2 is 0.30000000000000004 as a float
    assert line_total(0.1, 0.2, 3) == Decimal("0.90")
    assert line_total(29.99, -2.5, 3) == Decimal("82.47")


def test_line_total_rounds_product_half_up():
    # unit price 0.125 rounds to 0.13 on its own, but 0.125 * 3 = 0.375 -> 0.38
    assert line_total(Decimal("0.125"), Decimal("0"), 3) == Decimal("0.38")
    assert line_total(Decimal("0.005"), Decimal("0"), 1) == Decimal("0.01")


def test_line_total_has_two_decimal_places():
    total = line_total(Decimal("10"), Decimal("0"), 2)
    assert total.as_tuple().exponent == -2


def test_unit_price_allows_negative_adjustment():
    assert unit_price(Decimal("29.99"), Decimal("-2.50")) == Decimal("27.49")


def test_cart_total():
    assert cart_total([Decimal("25.00"), Decimal("82.47")]) == Decimal("107.47")
    assert cart_total([]) == Decimal("0.00")
