"""
Tracura - Currency Formatter

CurrencyFormatter implementation: currency symbol + Indian digit grouping,
always with 2 decimals.
"""
from decimal import Decimal

from tracura.domain.money import format_grouped, quantize_money

CURRENCY_SYMBOLS_BY_CODE = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


class GroupedCurrencyFormatter:
    """
    Formats amounts as e.g. "₹12,34,567.00".

    Output with one of the ₹, $, € or £ symbols parses back with
    parse_amount. Code-prefixed output ("CHF 5.00") is display text only.
    """

    def __init__(self, symbol: str = "₹"):
        self.symbol = symbol

    @classmethod
    def for_currency(cls, currency: str) -> "GroupedCurrencyFormatter":
        """Formatter for an ISO currency code (unknown codes use the code as prefix)."""
        code = currency.strip().upper()
        return cls(CURRENCY_SYMBOLS_BY_CODE.get(code, f"{code} "))

    def format(self, value: Decimal) -> str:
        amount = quantize_money(value)
        grouped = format_grouped(abs(amount))
        sign = "-" if amount < 0 else ""
        return f"{sign}{self.symbol}{grouped}"
