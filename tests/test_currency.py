"""
Test suite for amount parsing and formatting
"""

import pytest
from decimal import Decimal

from dhaka_bank.currency import format_amount, parse_amount, to_decimal


class TestParseAmount:
    """Test parsing of user-entered amounts"""

    @pytest.mark.parametrize("text,expected", [
        ("100", Decimal("100")),
        ("100.50", Decimal("100.50")),
        (" 42.1 ", Decimal("42.1")),
        ("1,234.56", Decimal("1234.56")),
        ("$75", Decimal("75")),
        ("৳ 500", Decimal("500")),
        ("-20", Decimal("-20")),
        ("0", Decimal("0")),
        ("999,999,999,999,999.99", Decimal("999999999999999.99")),
    ])
    def test_valid(self, text, expected):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", [
        None, "", "   ", "abc", "12abc", "NaN", "Infinity", "-Infinity", "1.2.3",
        "1000000000000000", "1e15", "1e30", "1000000000000000000000000000",
    ])
    def test_invalid(self, text):
        assert parse_amount(text) is None


class TestFormatAmount:
    """Test display formatting"""

    def test_two_decimal_currency(self):
        assert format_amount(Decimal("1234.5")) == "USD 1,234.50"
        assert format_amount(Decimal("0")) == "USD 0.00"

    def test_rounds_half_up(self):
        assert format_amount(Decimal("0.125"), "EUR") == "EUR 0.13"

    def test_zero_decimal_currency(self):
        assert format_amount(Decimal("1500.6"), "JPY") == "JPY 1,501"

    def test_unknown_currency_uses_two_places(self):
        assert format_amount(Decimal("3"), "xyz") == "XYZ 3.00"

    def test_beyond_precision_falls_back_to_plain_text(self):
        """Test values too wide to quantize are shown unrounded"""
        assert format_amount(Decimal("1e30")) == "USD 1E+30"
        big = Decimal("1" + "0" * 27)
        assert format_amount(big) == f"USD {big}"


class TestToDecimal:
    """Test conversion without float artifacts"""

    def test_float_goes_through_str(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_decimal_passthrough(self):
        value = Decimal("2.50")
        assert to_decimal(value) is value
