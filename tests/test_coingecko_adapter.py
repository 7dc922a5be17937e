"""
CoinGecko payload parsing and HTTP error mapping (no network).
"""

import asyncio

import aiohttp
import pytest

from coindash.schemas.market import Period
from coindash.services.base import ExternalAPIError, RateLimitError
from coindash.services.data_ingestion.coingecko_adapter import (
    CoinGeckoClient,
    parse_assets,
    parse_market_chart,
    parse_markets,
)


# =============================================================================
# PARSING
# =============================================================================


def test_parse_assets_skips_rows_without_id():
    payload = [
        {"id": "bitcoin", "symbol": "btc", "name": "Bitcoin"},
        {"id": "", "symbol": "x", "name": "Nameless"},
        {"symbol": "y", "name": "No id"},
        "garbage",
        {"id": "ethereum", "symbol": "eth", "name": "Ethereum"},
    ]

    assets = parse_assets(payload)

    assert [a.id for a in assets] == ["bitcoin", "ethereum"]
    assert assets[0].image is None


def test_parse_assets_non_list_payload():
    assert parse_assets({"error": "nope"}) == []


def test_parse_markets_coerces_numbers():
    payload = [
        {
            "id": "bitcoin",
            "symbol": "btc",
            "name": "Bitcoin",
            "image": "https://img/btc.png",
            "current_price": 64000,
            "market_cap": "1260000000000",
            "total_volume": None,
            "price_change_percentage_24h": "oops",
        }
    ]

    [row] = parse_markets(payload)

    assert row.current_price == 64000.0
    assert row.market_cap == 1.26e12
    assert row.total_volume is None
    assert row.price_change_percentage_24h is None
    assert row.image == "https://img/btc.png"


def test_parse_market_chart():
    payload = {
        "prices": [[1, 10.0], [2, 11.5], [3, None]],
        "total_volumes": [[1, 100], [2, 200]],
        "market_caps": [[1, 5]],
    }

    history = parse_market_chart(payload, "bitcoin", Period.D7)

    assert history.asset_id == "bitcoin"
    assert history.period == Period.D7
    assert [(p.timestamp, p.value) for p in history.prices] == [(1, 10.0), (2, 11.5)]
    assert len(history.total_volumes) == 2
    assert history.is_mock is False


def test_parse_market_chart_missing_fields():
    history = parse_market_chart(None, "bitcoin", Period.D1)

    assert history.prices == []
    assert history.total_volumes == []


# =============================================================================
# HTTP
# =============================================================================


class FakeResponse:
    def __init__(self, status: int, payload=None, invalid_json: bool = False):
        self.status = status
        self._payload = payload
        self._invalid_json = invalid_json

    async def json(self, content_type=None):
        if self._invalid_json:
            raise ValueError("not json")
        return self._payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    closed = False

    def __init__(self, response=None, error: Exception = None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None):
        self.calls.append((url, params))
        if self.error:
            raise self.error
        return self.response


def client_with(session: FakeSession) -> CoinGeckoClient:
    client = CoinGeckoClient(base_url="https://api.test/v3/", api_key="")
    client._session = session
    return client


async def test_market_chart_request_shape():
    session = FakeSession(FakeResponse(200, {"prices": [[1, 2.0]], "total_volumes": []}))
    client = client_with(session)

    history = await client.get_market_chart("bitcoin", Period.MAX)

    url, params = session.calls[0]
    assert url == "https://api.test/v3/coins/bitcoin/market_chart"
    assert params["days"] == "max"
    assert params["vs_currency"] == "usd"
    assert len(history.prices) == 1


async def test_markets_request_params():
    session = FakeSession(FakeResponse(200, []))

    await client_with(session).get_markets()

    _, params = session.calls[0]
    assert params["order"] == "market_cap_desc"
    assert params["per_page"] == "100"
    assert params["sparkline"] == "false"


async def test_rate_limit_maps_to_rate_limit_error():
    client = client_with(FakeSession(FakeResponse(429, {})))

    with pytest.raises(RateLimitError) as exc_info:
        await client.list_assets()

    assert exc_info.value.message == "API rate limit reached, try again shortly"


async def test_provider_error_message_is_used():
    client = client_with(FakeSession(FakeResponse(404, {"error": "coin not found"})))

    with pytest.raises(ExternalAPIError) as exc_info:
        await client.get_market_chart("nope", Period.D1)

    assert exc_info.value.message == "coin not found"
    assert not isinstance(exc_info.value, RateLimitError)


async def test_status_fallback_message():
    client = client_with(FakeSession(FakeResponse(500, invalid_json=True)))

    with pytest.raises(ExternalAPIError) as exc_info:
        await client.get_markets()

    assert exc_info.value.message == "API request failed with status 500"


async def test_network_error():
    client = client_with(FakeSession(error=aiohttp.ClientConnectionError("refused")))

    with pytest.raises(ExternalAPIError) as exc_info:
        await client.list_assets()

    assert exc_info.value.message.startswith("Network error:")


async def test_timeout_is_reported_as_network_error():
    client = client_with(FakeSession(error=asyncio.TimeoutError()))

    with pytest.raises(ExternalAPIError) as exc_info:
        await client.get_market_chart("bitcoin", Period.D7)

    assert exc_info.value.message.startswith("Network error")
    assert exc_info.value.http_status == 502


async def test_ping():
    assert await client_with(FakeSession(FakeResponse(200, {"gecko_says": "ok"}))).ping() is True
    assert await client_with(FakeSession(FakeResponse(503, {}))).ping() is False
