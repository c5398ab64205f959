"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from ledgerlens.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("₹1,23,456.78", Decimal("123456.78")),
        ("$1,234.56", Decimal("1234.56")),
        ("Rs. 500", Decimal("500")),
        ("-42", Decimal("-42")),
        ("(99.50)", Decimal("-99.50")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "NaN", "Infinity"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)
