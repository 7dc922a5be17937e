"""
CoinDash Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from coindash.schemas.market import (
    Period,
    Asset,
    AssetMarketStats,
    PricePoint,
    HistoricalData,
    DashboardBootstrap,
)
from coindash.schemas.indicators import (
    IndicatorPoint,
    TechnicalSnapshot,
    ChartDataset,
    ChartAnnotation,
    PriceChart,
    IndicatorResponse,
)
from coindash.schemas.risk import RiskReturnPoint
from coindash.schemas.insights import (
    RiskLevel,
    ReturnPotential,
    AIRiskAnalysis,
    InsightResponse,
)
from coindash.schemas.favorites import FavoritesResponse
from coindash.schemas.dashboard import DashboardView

__all__ = [
    # Market
    "Period",
    "Asset",
    "AssetMarketStats",
    "PricePoint",
    "HistoricalData",
    "DashboardBootstrap",
    # Indicators
    "IndicatorPoint",
    "TechnicalSnapshot",
    "ChartDataset",
    "ChartAnnotation",
    "PriceChart",
    "IndicatorResponse",
    # Risk
    "RiskReturnPoint",
    # Insights
    "RiskLevel",
    "ReturnPotential",
    "AIRiskAnalysis",
    "InsightResponse",
    # Favorites
    "FavoritesResponse",
    # Dashboard
    "DashboardView",
]
