import asyncio
from typing import Dict, List, Set

import pytest
from fastapi.testclient import TestClient

from currency_converter.core.config import Settings
from currency_converter.main import create_app
from currency_converter.models.rates import RateTable
from currency_converter.services.rates.base import FetchError, RateFetcher

USD_RATES: Dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.9123,
    "GBP": 0.79,
    "JPY": 151.2,
    "INR": 83.1,
}
EUR_RATES: Dict[str, float] = {
    "EUR": 1.0,
    "USD": 1 / 0.9123,
    "GBP": 0.8659,
    "JPY": 165.7,
}


class StubRateFetcher(RateFetcher):
    """Answers from fixed tables; bases in `failing` (or unknown) raise FetchError."""

    def __init__(self, tables: Dict[str, Dict[str, float]]):
        self.tables = dict(tables)
        self.failing: Set[str] = set()
        self.calls: List[str] = []

    async def fetch_rates(self, base_currency: str) -> RateTable:
        self.calls.append(base_currency)
        if base_currency in self.failing or base_currency not in self.tables:
            raise FetchError(base_currency, "stub failure")
        return RateTable.from_mapping(
            base_currency, self.tables[base_currency], as_of="2024-05-21"
        )


class GatedRateFetcher(RateFetcher):
    """Every call blocks until the test resolves it, so completion order is controlled."""

    def __init__(self):
        self.pending: Dict[str, List[asyncio.Future]] = {}

    async def fetch_rates(self, base_currency: str) -> RateTable:
        fut = asyncio.get_running_loop().create_future()
        self.pending.setdefault(base_currency, []).append(fut)
        return await fut

    async def wait_for(self, base_currency: str) -> None:
        while not self.pending.get(base_currency):
            await asyncio.sleep(0)

    def resolve(self, base_currency: str, rates: Dict[str, float]) -> None:
        fut = self.pending[base_currency].pop(0)
        fut.set_result(RateTable.from_mapping(base_currency, rates))

    def fail(self, base_currency: str) -> None:
        fut = self.pending[base_currency].pop(0)
        fut.set_exception(FetchError(base_currency, "gated failure"))


@pytest.fixture
def stub_fetcher() -> StubRateFetcher:
    return StubRateFetcher({"USD": USD_RATES, "EUR": EUR_RATES})


@pytest.fixture
def gated_fetcher() -> GatedRateFetcher:
    return GatedRateFetcher()


@pytest.fixture
def settings() -> Settings:
    s = Settings(_env_file=None)
    s.init_post_load()
    return s


@pytest.fixture
def client(settings, stub_fetcher):
    app = create_app(settings_override=settings, fetcher_override=stub_fetcher)
    with TestClient(app) as c:
        yield c
