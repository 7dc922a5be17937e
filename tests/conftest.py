"""
Shared helpers and fakes for CoinDash tests.
"""

from typing import Optional, Sequence

from coindash.schemas.market import (
    Asset,
    AssetMarketStats,
    DashboardBootstrap,
    HistoricalData,
    Period,
    PricePoint,
)
from coindash.services.base import ServiceError

DAY_MS = 86_400_000
START_MS = 1_700_000_000_000


def make_points(values: Sequence[float], start: int = START_MS, step: int = DAY_MS) -> list[PricePoint]:
    return [PricePoint(timestamp=start + i * step, value=float(v)) for i, v in enumerate(values)]


def make_history(
    values: Sequence[float],
    asset_id: str = "bitcoin",
    period: Period = Period.Y1,
) -> HistoricalData:
    prices = make_points(values)
    volumes = [PricePoint(timestamp=p.timestamp, value=1000.0 + i) for i, p in enumerate(prices)]
    return HistoricalData(asset_id=asset_id, period=period, prices=prices, total_volumes=volumes)


MARKETS = [
    AssetMarketStats(
        id="bitcoin",
        name="Bitcoin",
        symbol="btc",
        image="https://img/btc.png",
        current_price=64000.0,
        market_cap=1.26e12,
        total_volume=3.1e10,
        price_change_percentage_24h=2.5,
    ),
    AssetMarketStats(
        id="ethereum",
        name="Ethereum",
        symbol="eth",
        image="https://img/eth.png",
        current_price=3100.0,
        market_cap=3.7e11,
        total_volume=1.5e10,
        price_change_percentage_24h=-1.2,
    ),
    AssetMarketStats(id="newcoin", name="New Coin", symbol="new"),
]

ASSETS = [
    Asset(id="bitcoin", name="Bitcoin", symbol="btc"),
    Asset(id="ethereum", name="Ethereum", symbol="eth"),
    Asset(id="dogecoin", name="Dogecoin", symbol="doge"),
]


class FakeMarketDataService:
    """Stands in for MarketDataService; no network."""

    def __init__(
        self,
        history: Optional[HistoricalData] = None,
        error: Optional[ServiceError] = None,
    ):
        self.history = history
        self.error = error
        self.history_calls: list[tuple[str, Period]] = []

    async def get_history(self, asset_id: str, period: Period) -> HistoricalData:
        self.history_calls.append((asset_id, period))
        if self.error:
            raise self.error
        if self.history is not None:
            return self.history
        return HistoricalData(asset_id=asset_id, period=period)

    async def list_assets(self) -> list[Asset]:
        if self.error:
            raise self.error
        return list(ASSETS)

    async def get_markets(self) -> list[AssetMarketStats]:
        if self.error:
            raise self.error
        return list(MARKETS)

    async def get_market_stats(self, asset_id: str) -> Optional[AssetMarketStats]:
        for stats in await self.get_markets():
            if stats.id == asset_id:
                return stats
        return None

    async def bootstrap(self) -> DashboardBootstrap:
        if self.error:
            return DashboardBootstrap(errors=[self.error.message])
        return DashboardBootstrap(assets=list(ASSETS), markets=list(MARKETS))
