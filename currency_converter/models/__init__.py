"""Domain models for the currency converter."""

from .constants import (
    CURRENCIES,
    CURRENCY_CODES,
    Currency,
    get_currency,
    is_supported,
    symbol_for,
)  # re-export
from .conversion import ConversionForm, ConversionState
from .rates import RatesPayload, RateTable

__all__ = [
    "CURRENCIES",
    "CURRENCY_CODES",
    "Currency",
    "get_currency",
    "is_supported",
    "symbol_for",
    "ConversionForm",
    "ConversionState",
    "RatesPayload",
    "RateTable",
]
