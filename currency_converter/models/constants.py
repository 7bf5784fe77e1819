"""Supported currencies.

The list is fixed for the process lifetime; tuple order is the order the
pickers display them in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class Currency:
    code: str
    name: str
    symbol: str


CURRENCIES: Tuple[Currency, ...] = (
    Currency("USD", "US Dollar", "$"),
    Currency("EUR", "Euro", "€"),
    Currency("GBP", "British Pound", "£"),
    Currency("JPY", "Japanese Yen", "¥"),
    Currency("CAD", "Canadian Dollar", "C$"),
    Currency("AUD", "Australian Dollar", "A$"),
    Currency("CHF", "Swiss Franc", "CHF"),
    Currency("CNY", "Chinese Yuan", "¥"),
    Currency("INR", "Indian Rupee", "₹"),
    Currency("KRW", "South Korean Won", "₩"),
)

CURRENCY_CODES: FrozenSet[str] = frozenset(c.code for c in CURRENCIES)

_BY_CODE: Dict[str, Currency] = {c.code: c for c in CURRENCIES}


def get_currency(code: str) -> Optional[Currency]:
    return _BY_CODE.get(code)


def is_supported(code: str) -> bool:
    return code in _BY_CODE


def symbol_for(code: str) -> str:
    """Display symbol for `code`, or the code itself when it is not listed."""
    currency = _BY_CODE.get(code)
    return currency.symbol if currency else code
