import httpx
import pytest

from currency_converter.services.http_client import HttpError, get_json
from currency_converter.services.rates.base import FetchError
from currency_converter.services.rates.providers import (
    ExchangeRateApiFetcher,
    ExchangeRateHostFetcher,
    make_rate_fetcher,
)

BASE_URL = "https://api.exchangerate-api.com/v4/latest"


def api_fetcher(handler) -> ExchangeRateApiFetcher:
    return ExchangeRateApiFetcher(BASE_URL, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_exchangerate_api_success():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(
            200,
            json={
                "base": "USD",
                "date": "2024-05-21",
                "time_last_updated": 1716249601,
                "rates": {"USD": 1, "EUR": 0.9123, "GBP": 0.79},
            },
        )

    table = await api_fetcher(handler).fetch_rates("USD")

    assert seen == [f"{BASE_URL}/USD"]
    assert table.base == "USD"
    assert table.as_of == "2024-05-21"
    assert table.rate_for("EUR") == 0.9123
    assert table.rate_for("USD") == 1.0
    assert len(table) == 3


@pytest.mark.asyncio
async def test_unusable_rates_are_dropped():
    def handler(request):
        return httpx.Response(
            200, json={"rates": {"EUR": 0.9, "XXX": 0, "YYY": -2.5}}
        )

    table = await api_fetcher(handler).fetch_rates("USD")

    assert table.as_dict() == {"EUR": 0.9}
    assert "XXX" not in table


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(404, text="unsupported code"),
        httpx.Response(200, content=b"<html>not json</html>"),
        httpx.Response(200, json=[1, 2, 3]),
        httpx.Response(200, json={"result": "error", "error-type": "unsupported-code"}),
        httpx.Response(200, json={"rates": {"EUR": "lots"}}),
        httpx.Response(200, json={"rates": {"EUR": True}}),
        httpx.Response(200, json={"rates": {"EUR": "0.9"}}),
        httpx.Response(200, json={"base": "EUR", "rates": {"USD": 1.09}}),
    ],
    ids=["5xx", "4xx", "not-json", "not-object", "no-rates", "bad-rate", "bool-rate", "string-rate", "wrong-base"],
)
async def test_bad_responses_raise_fetch_error(response):
    fetcher = api_fetcher(lambda request: response)

    with pytest.raises(FetchError) as exc_info:
        await fetcher.fetch_rates("USD")
    assert exc_info.value.base_currency == "USD"


@pytest.mark.asyncio
async def test_transport_failure_raises_fetch_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError):
        await api_fetcher(handler).fetch_rates("GBP")


@pytest.mark.asyncio
async def test_exchangerate_host_puts_base_in_query():
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, json={"base": "EUR", "rates": {"USD": 1.09}})

    fetcher = ExchangeRateHostFetcher(
        "https://api.frankfurter.app/latest/", transport=httpx.MockTransport(handler)
    )
    table = await fetcher.fetch_rates("EUR")

    assert seen[0].path == "/latest"
    assert seen[0].params["base"] == "EUR"
    assert table.rate_for("USD") == 1.09


def test_make_rate_fetcher():
    assert isinstance(make_rate_fetcher("exchangerate-api", BASE_URL), ExchangeRateApiFetcher)
    assert isinstance(make_rate_fetcher("exchangerate-host", BASE_URL), ExchangeRateHostFetcher)
    with pytest.raises(ValueError):
        make_rate_fetcher("static", BASE_URL)


@pytest.mark.asyncio
async def test_get_json_wraps_status_errors():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))

    with pytest.raises(HttpError, match="HTTP 503"):
        await get_json("https://example.test/rates", transport=transport)
