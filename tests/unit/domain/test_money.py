"""
Unit tests for the money/quantity parser.
"""

from decimal import Decimal

import pytest

from tracura.domain.exceptions import ParseError
from tracura.domain.money import (
    MAX_AMOUNT,
    MAX_TOTAL,
    format_amount_input,
    format_grouped,
    is_zero_amount_text,
    money_product,
    parse_amount,
    quantize_money,
    to_decimal_string,
)


class TestParseAmount:
    """Test parse_amount"""

    @pytest.mark.parametrize("raw,expected", [
        ("12,34,567.50", Decimal("1234567.50")),
        ("1,000", Decimal("1000")),
        ("₹1,000", Decimal("1000")),
        ("  42  ", Decimal("42")),
        ("1 000", Decimal("1000")),
        (" 12", Decimal("12")),
        ("-₹50", Decimal("-50")),
        ("0.01", Decimal("0.01")),
    ])
    def test_valid_input(self, raw, expected):
        assert parse_amount(raw) == expected

    def test_empty_input_is_zero(self):
        assert parse_amount("") == Decimal("0")
        assert parse_amount("   ") == Decimal("0")
        assert parse_amount(None) == Decimal("0")

    def test_numbers_are_exact(self):
        assert parse_amount(0.1) == Decimal("0.1")
        assert parse_amount(1500) == Decimal("1500")

    @pytest.mark.parametrize("raw", ["abc", "1.2.3", "12a", "NaN", "Infinity"])
    def test_invalid_input(self, raw):
        with pytest.raises(ParseError) as exc_info:
            parse_amount(raw)
        assert exc_info.value.raw == raw

    @pytest.mark.parametrize("raw", ["1e27", "1E3", "2.5e-2", "₹1e5"])
    def test_exponent_notation_rejected(self, raw):
        with pytest.raises(ParseError):
            parse_amount(raw)

    @pytest.mark.parametrize("raw", [
        "1" + "0" * 27,
        "1,00,00,00,00,000",
        "-1000000000000",
        Decimal(10) ** 27,
    ])
    def test_magnitude_limit(self, raw):
        with pytest.raises(ParseError, match="too large"):
            parse_amount(raw)

    def test_just_below_limit(self):
        assert parse_amount("999999999999.99") == MAX_AMOUNT - Decimal("0.01")

    def test_stored_total_limit(self):
        assert parse_amount("5000000000000", MAX_TOTAL) == Decimal("5000000000000")
        with pytest.raises(ParseError):
            parse_amount(str(MAX_TOTAL), MAX_TOTAL)


class TestFormatGrouped:
    """Test Indian digit grouping"""

    @pytest.mark.parametrize("value,expected", [
        (Decimal("0"), "0"),
        (Decimal("999"), "999"),
        (Decimal("1000"), "1,000"),
        (Decimal("100000"), "1,00,000"),
        (Decimal("1234567"), "12,34,567"),
        (Decimal("12345678.9"), "1,23,45,678.90"),
        (1000.5, "1,000.50"),
        (Decimal("-1234.5"), "-1,234.50"),
    ])
    def test_grouping(self, value, expected):
        assert format_grouped(value) == expected

    def test_no_fraction_noise(self):
        """Residue below 0.0001 is not rendered"""
        assert format_grouped(Decimal("350.00001")) == "350"
        assert format_grouped(350) == "350"

    def test_money_precision_keeps_cents(self):
        assert format_grouped(Decimal("350.00")) == "350.00"

    @pytest.mark.parametrize("value", [
        "0", "0.01", "5", "999", "1000", "1234567.89", "100000.10", "99999999.99",
    ])
    def test_round_trip(self, value):
        x = Decimal(value)
        assert parse_amount(format_grouped(x)) == x

    def test_round_trip_at_largest_amount(self):
        x = Decimal("999999999999.99")
        assert format_grouped(x) == "9,99,99,99,99,999.99"
        assert parse_amount(format_grouped(x)) == x

    def test_huge_value_formats(self):
        assert format_grouped(Decimal(10) ** 27) == "1," + ",".join(["00"] * 12) + ",000"


class TestHelpers:
    """Test formatting helpers"""

    def test_format_amount_input(self):
        assert format_amount_input("1234567") == "12,34,567"
        assert format_amount_input("1,00,0") == "1,000"
        assert format_amount_input("") == ""
        assert format_amount_input("12a") == "12a"

    @pytest.mark.parametrize("raw,expected", [
        ("", True),
        (None, True),
        ("0", True),
        ("0.00", True),
        ("₹0.00", True),
        ("₹350", False),
        ("abc", False),
    ])
    def test_is_zero_amount_text(self, raw, expected):
        assert is_zero_amount_text(raw) is expected

    def test_quantize_half_up(self):
        assert quantize_money(Decimal("2.345")) == Decimal("2.35")
        assert quantize_money(Decimal("2.344")) == Decimal("2.34")

    def test_money_product_is_exact_at_largest_amounts(self):
        largest = MAX_AMOUNT - Decimal("0.01")
        assert money_product(largest, largest) == Decimal("999999999999980000000000.00")
        assert money_product(Decimal("2.5"), Decimal("0.333")) == Decimal("0.83")

    def test_to_decimal_string(self):
        assert to_decimal_string(Decimal("1234.5")) == "1234.50"
        assert to_decimal_string(Decimal("0")) == "0.00"
