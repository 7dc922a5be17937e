"""
MarketDataService: caching and concurrent bootstrap.
"""

import pytest

from coindash.schemas.market import HistoricalData, Period
from coindash.services.base import ExternalAPIError, RateLimitError, ValidationError
from coindash.services.cache import ResponseCache
from coindash.services.data_ingestion import HistoryRequest, MarketDataService

from tests.conftest import ASSETS, MARKETS, make_points


class FakeClient:
    def __init__(self, assets_error=None, markets_error=None):
        self.assets_error = assets_error
        self.markets_error = markets_error
        self.calls = {"assets": 0, "markets": 0, "chart": 0}

    async def list_assets(self):
        self.calls["assets"] += 1
        if self.assets_error:
            raise self.assets_error
        return list(ASSETS)

    async def get_markets(self):
        self.calls["markets"] += 1
        if self.markets_error:
            raise self.markets_error
        return list(MARKETS)

    async def get_market_chart(self, asset_id, period):
        self.calls["chart"] += 1
        return HistoricalData(
            asset_id=asset_id,
            period=period,
            prices=make_points([1.0, 2.0, 3.0]),
            total_volumes=make_points([10.0, 20.0, 30.0]),
        )

    async def ping(self):
        return True

    async def close(self):
        pass


def make_service(client: FakeClient) -> MarketDataService:
    return MarketDataService(client=client, cache=ResponseCache())


async def test_history_is_cached_per_asset_and_period():
    client = FakeClient()
    service = make_service(client)

    first = await service.get_history("bitcoin", Period.D7)
    second = await service.get_history("bitcoin", Period.D7)
    await service.get_history("bitcoin", Period.D30)

    assert first == second
    assert client.calls["chart"] == 2


async def test_execute_takes_history_request():
    service = make_service(FakeClient())

    history = await service.execute(HistoryRequest("ethereum", Period.D1))

    assert history.asset_id == "ethereum"
    assert [p.value for p in history.prices] == [1.0, 2.0, 3.0]


async def test_markets_and_assets_are_cached():
    client = FakeClient()
    service = make_service(client)

    await service.get_markets()
    markets = await service.get_markets()
    await service.list_assets()
    await service.list_assets()

    assert markets == MARKETS
    assert client.calls == {"assets": 1, "markets": 1, "chart": 0}


async def test_bootstrap_success():
    result = await make_service(FakeClient()).bootstrap()

    assert result.assets == ASSETS
    assert result.markets == MARKETS
    assert result.errors == []


async def test_bootstrap_partial_failure_keeps_other_half():
    client = FakeClient(markets_error=RateLimitError("CoinGecko", "API rate limit reached, try again shortly"))

    result = await make_service(client).bootstrap()

    assert result.assets == ASSETS
    assert result.markets == []
    assert result.errors == ["API rate limit reached, try again shortly"]


async def test_bootstrap_both_fail():
    client = FakeClient(
        assets_error=ExternalAPIError("CoinGecko", "Network error: down"),
        markets_error=ExternalAPIError("CoinGecko", "Network error: down"),
    )

    result = await make_service(client).bootstrap()

    assert result.assets == []
    assert result.markets == []
    assert len(result.errors) == 2


async def test_get_market_stats():
    service = make_service(FakeClient())

    assert (await service.get_market_stats("ethereum")).symbol == "eth"
    assert await service.get_market_stats("unknown") is None
    assert await service.health_check() is True


async def test_blank_asset_id_rejected_before_fetch():
    client = FakeClient()

    with pytest.raises(ValidationError) as exc_info:
        await make_service(client).get_history("  ", Period.D1)

    assert exc_info.value.http_status == 422
    assert client.calls["chart"] == 0
