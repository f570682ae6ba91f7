"""
Tracura - Currency Formatter Protocol Interface
"""
from decimal import Decimal
from typing import Protocol


class CurrencyFormatter(Protocol):
    """Produces the user-facing string for a monetary value."""

    def format(self, value: Decimal) -> str:
        """Render an amount for display (e.g. "₹12,34,567.00")."""
        ...
