from __future__ import annotations

"""Rate fetcher abstraction.

A fetcher turns a base currency code into a complete `RateTable` or raises
`FetchError`; it never returns partial data and keeps no state between calls.
"""
from abc import ABC, abstractmethod

from currency_converter.models.rates import RateTable


class FetchError(Exception):
    """Rates for `base_currency` could not be obtained."""

    def __init__(self, base_currency: str, message: str):
        super().__init__(message)
        self.base_currency = base_currency


class RateFetcher(ABC):
    @abstractmethod
    async def fetch_rates(self, base_currency: str) -> RateTable:
        """Return rates relative to `base_currency`, or raise FetchError."""
        raise NotImplementedError
