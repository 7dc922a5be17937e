"""
Market Data Service Implementation

Fetches catalog, market snapshot and price history from CoinGecko,
caching responses to stay under the public API rate limit.
"""

import asyncio
import logging
from typing import Optional

from coindash.core.config import settings
from coindash.schemas.market import (
    Asset,
    AssetMarketStats,
    DashboardBootstrap,
    HistoricalData,
    Period,
)
from coindash.services.base import ServiceError, require_asset_id
from coindash.services.cache.redis_client import ResponseCache, get_response_cache
from coindash.services.data_ingestion.coingecko_adapter import CoinGeckoClient
from coindash.services.data_ingestion.interface import (
    HistoryRequest,
    MarketDataServiceInterface,
)

logger = logging.getLogger(__name__)


class MarketDataService(MarketDataServiceInterface):
    """
    Market Data Service.

    The catalog and market snapshot are independent and fetched together
    at startup; history is fetched on every (asset, period) selection.
    """

    def __init__(
        self,
        client: Optional[CoinGeckoClient] = None,
        cache: Optional[ResponseCache] = None,
    ):
        self._client = client or CoinGeckoClient()
        self._cache = cache or get_response_cache()

    @property
    def name(self) -> str:
        return "MarketDataService"

    async def execute(self, input_data: HistoryRequest) -> HistoricalData:
        return await self.get_history(input_data.asset_id, input_data.period)

    async def get_history(self, asset_id: str, period: Period) -> HistoricalData:
        """Price/volume history for one asset, served from cache when fresh."""
        asset_id = require_asset_id(self.name, asset_id)
        key = f"history:{asset_id}:{period.value}"
        cached = await self._cache.get_json(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return HistoricalData.model_validate(cached)

        history = await self._client.get_market_chart(asset_id, period)
        logger.info(
            f"Fetched {len(history.prices)} prices for {asset_id} ({period.value}d)"
        )
        await self._cache.set_json(key, history.model_dump(mode="json"), settings.history_cache_ttl)
        return history

    async def list_assets(self) -> list[Asset]:
        key = "assets:list"
        cached = await self._cache.get_json(key)
        if cached is not None:
            return [Asset.model_validate(row) for row in cached]

        assets = await self._client.list_assets()
        await self._cache.set_json(
            key, [a.model_dump(mode="json") for a in assets], settings.assets_cache_ttl
        )
        return assets

    async def get_markets(self) -> list[AssetMarketStats]:
        key = f"markets:{settings.vs_currency}"
        cached = await self._cache.get_json(key)
        if cached is not None:
            return [AssetMarketStats.model_validate(row) for row in cached]

        markets = await self._client.get_markets()
        await self._cache.set_json(
            key, [m.model_dump(mode="json") for m in markets], settings.markets_cache_ttl
        )
        return markets

    async def bootstrap(self) -> DashboardBootstrap:
        """
        Fetch catalog and market snapshot concurrently.

        Either may fail on its own; the other half is still returned and
        the failure is reported in `errors`.
        """
        assets_result, markets_result = await asyncio.gather(
            self.list_assets(),
            self.get_markets(),
            return_exceptions=True,
        )

        errors: list[str] = []
        assets: list[Asset] = []
        markets: list[AssetMarketStats] = []

        if isinstance(assets_result, ServiceError):
            logger.error(f"Asset catalog fetch failed: {assets_result}")
            errors.append(assets_result.message)
        elif isinstance(assets_result, BaseException):
            raise assets_result
        else:
            assets = assets_result

        if isinstance(markets_result, ServiceError):
            logger.error(f"Market snapshot fetch failed: {markets_result}")
            errors.append(markets_result.message)
        elif isinstance(markets_result, BaseException):
            raise markets_result
        else:
            markets = markets_result

        return DashboardBootstrap(assets=assets, markets=markets, errors=errors)

    async def get_market_stats(self, asset_id: str) -> Optional[AssetMarketStats]:
        """Snapshot row for one asset, or None if it is not in the top list."""
        for stats in await self.get_markets():
            if stats.id == asset_id:
                return stats
        return None

    async def health_check(self) -> bool:
        return await self._client.ping()

    async def close(self) -> None:
        await self._client.close()


# Singleton instance
_service_instance: Optional[MarketDataService] = None


def get_market_data_service() -> MarketDataService:
    """Get or create market data service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = MarketDataService()
    return _service_instance


async def close_market_data_service() -> None:
    global _service_instance
    if _service_instance is not None:
        await _service_instance.close()
        _service_instance = None
