"""
Market Data Service Interface

Defines the contract for the data ingestion layer.
"""

from abc import abstractmethod
from dataclasses import dataclass

from coindash.services.base import BaseService
from coindash.schemas.market import (
    AssetMarketStats,
    DashboardBootstrap,
    HistoricalData,
    Asset,
    Period,
)


@dataclass(frozen=True)
class HistoryRequest:
    """History fetch for one (asset, period) selection."""

    asset_id: str
    period: Period


class MarketDataServiceInterface(BaseService[HistoryRequest, HistoricalData]):
    """
    Market Data Service Contract.

    INPUT: HistoryRequest
        - asset_id: CoinGecko coin id (e.g. "bitcoin")
        - period: Period enum

    OUTPUT: HistoricalData
        - prices / total_volumes as ordered PricePoints

    Also exposes the catalog and market snapshot used on startup.
    """

    @property
    def name(self) -> str:
        return "MarketDataService"

    @abstractmethod
    async def execute(self, input_data: HistoryRequest) -> HistoricalData:
        """Fetch and normalize price history."""
        pass

    @abstractmethod
    async def list_assets(self) -> list[Asset]:
        pass

    @abstractmethod
    async def get_markets(self) -> list[AssetMarketStats]:
        pass

    @abstractmethod
    async def bootstrap(self) -> DashboardBootstrap:
        """Fetch catalog and market snapshot concurrently."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check connectivity to the provider."""
        pass
