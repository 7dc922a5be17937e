"""
CONTRACT 1: Market Data Layer

Input: asset id + Period
Output: Asset catalog, AssetMarketStats snapshot, HistoricalData

Provider payloads (CoinGecko) are untyped JSON. These schemas are the
boundary: everything past the data ingestion layer is typed.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class Period(str, Enum):
    """Historical window, in days, as accepted by /market_chart."""

    D1 = "1"
    D7 = "7"
    D30 = "30"
    D90 = "90"
    Y1 = "365"
    MAX = "max"


# =============================================================================
# ASSETS
# =============================================================================


class Asset(BaseModel):
    """Catalog entry. `image` is only present when sourced from /coins/markets."""

    id: str = Field(..., min_length=1)
    name: str
    symbol: str
    image: Optional[str] = None


class AssetMarketStats(BaseModel):
    """Per-asset market snapshot row."""

    id: str = Field(..., min_length=1)
    name: str
    symbol: str
    image: Optional[str] = None
    current_price: Optional[float] = None
    market_cap: Optional[float] = None
    total_volume: Optional[float] = None
    price_change_percentage_24h: Optional[float] = Field(
        default=None,
        description="24h % change; absent for freshly listed assets",
    )


# =============================================================================
# HISTORY
# =============================================================================


class PricePoint(BaseModel):
    """Single (timestamp, value) sample. Timestamp is epoch milliseconds."""

    model_config = {"frozen": True}

    timestamp: int
    value: float


class HistoricalData(BaseModel):
    """Price and traded-volume series for one asset over one period."""

    asset_id: str
    period: Period
    prices: list[PricePoint] = Field(default_factory=list)
    total_volumes: list[PricePoint] = Field(default_factory=list)
    is_mock: bool = False


class DashboardBootstrap(BaseModel):
    """Initial dashboard payload: catalog and market snapshot fetched together."""

    assets: list[Asset] = Field(default_factory=list)
    markets: list[AssetMarketStats] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
