from __future__ import annotations

"""Concrete HTTP rate fetchers and factory.

Both providers answer with a JSON object holding a `rates` map keyed by
currency code; they only differ in where the base currency goes in the URL.
"""
import logging
from typing import Dict, Optional, Type
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from currency_converter.models.rates import RatesPayload, RateTable
from currency_converter.services.http_client import HttpError, get_json
from .base import FetchError, RateFetcher

logger = logging.getLogger("converter.rates")


class HttpRateFetcher(RateFetcher):
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def build_url(self, base_currency: str) -> str:
        raise NotImplementedError

    async def fetch_rates(self, base_currency: str) -> RateTable:  # type: ignore[override]
        url = self.build_url(base_currency)
        logger.info("fetching rates for %s", base_currency)
        try:
            data = await get_json(url, timeout=self._timeout, transport=self._transport)
        except HttpError as e:
            raise FetchError(base_currency, str(e)) from e
        try:
            payload = RatesPayload.model_validate(data)
        except ValidationError as e:
            raise FetchError(
                base_currency, f"Malformed rates body: {e.error_count()} error(s)"
            ) from e
        if payload.base is not None and payload.base != base_currency:
            raise FetchError(
                base_currency,
                f"Provider answered for base {payload.base}, asked for {base_currency}",
            )
        table = RateTable.from_mapping(base_currency, payload.rates, as_of=payload.date)
        logger.info("fetched %d rates for %s", len(table), base_currency)
        return table


class ExchangeRateApiFetcher(HttpRateFetcher):
    """exchangerate-api.com v4: GET {base_url}/{BASE}."""

    def build_url(self, base_currency: str) -> str:
        return f"{self._base_url}/{base_currency}"


class ExchangeRateHostFetcher(HttpRateFetcher):
    """exchangerate.host / frankfurter style: GET {base_url}?base={BASE}."""

    def build_url(self, base_currency: str) -> str:
        return f"{self._base_url}?{urlencode({'base': base_currency})}"


_FETCHER_REGISTRY: Dict[str, Type[HttpRateFetcher]] = {
    "exchangerate-api": ExchangeRateApiFetcher,
    "exchangerate-host": ExchangeRateHostFetcher,
}


def make_rate_fetcher(
    kind: str,
    base_url: str,
    *,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> RateFetcher:
    cls = _FETCHER_REGISTRY.get(kind)
    if not cls:
        raise ValueError(f"Unknown rate provider kind '{kind}'")
    return cls(base_url, timeout=timeout, transport=transport)
