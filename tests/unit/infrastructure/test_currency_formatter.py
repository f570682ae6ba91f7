"""
Unit tests for currency formatting.
"""

from decimal import Decimal

import pytest

from tracura.domain.exceptions import ParseError
from tracura.domain.models.config import AppConfig, FormattingConfig
from tracura.domain.money import parse_amount
from tracura.infrastructure.factory import create_currency_formatter
from tracura.infrastructure.formatting import GroupedCurrencyFormatter


class TestGroupedCurrencyFormatter:
    """Test GroupedCurrencyFormatter"""

    def test_always_two_decimals(self):
        formatter = GroupedCurrencyFormatter()
        assert formatter.format(Decimal("1234567")) == "₹12,34,567.00"
        assert formatter.format(Decimal("0")) == "₹0.00"

    def test_rounds_half_up(self):
        assert GroupedCurrencyFormatter().format(Decimal("10.005")) == "₹10.01"

    def test_negative(self):
        assert GroupedCurrencyFormatter().format(Decimal("-1500")) == "-₹1,500.00"

    @pytest.mark.parametrize("code", ["INR", "USD", "EUR", "GBP"])
    def test_symbol_output_parses_back(self, code):
        text = GroupedCurrencyFormatter.for_currency(code).format(Decimal("-98765.4"))
        assert parse_amount(text) == Decimal("-98765.40")

    def test_code_prefixed_output_is_display_only(self):
        text = GroupedCurrencyFormatter.for_currency("chf").format(Decimal("5"))
        assert text == "CHF 5.00"
        with pytest.raises(ParseError):
            parse_amount(text)

    def test_for_currency(self):
        assert GroupedCurrencyFormatter.for_currency("usd").format(Decimal("5")) == "$5.00"
        assert GroupedCurrencyFormatter.for_currency("AED").symbol == "AED "

    def test_factory_symbol_from_config(self):
        config = AppConfig(formatting=FormattingConfig(currency="EUR", currency_symbol=""))
        assert create_currency_formatter(config).symbol == "€"
        assert create_currency_formatter(AppConfig()).symbol == "₹"
