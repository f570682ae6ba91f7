"""Tracura - Formatting adapters."""

from .currency_formatter import GroupedCurrencyFormatter

__all__ = ["GroupedCurrencyFormatter"]
