"""
Market Data Service

CONTRACT:
    Input:  HistoryRequest (asset id + period)
    Output: HistoricalData

RESPONSIBILITIES:
    - Fetch asset catalog and market snapshot from CoinGecko
    - Fetch price/volume history per selection
    - Normalize all data to standard schemas
    - Cache responses in Redis
    - Generate mock history for the AI insight view

NO LLM INVOLVEMENT - Pure data fetching and transformation.
"""

from coindash.services.data_ingestion.interface import (
    MarketDataServiceInterface,
    HistoryRequest,
)
from coindash.services.data_ingestion.service import (
    MarketDataService,
    get_market_data_service,
    close_market_data_service,
)
from coindash.services.data_ingestion.mock_data import generate_mock_history

__all__ = [
    "MarketDataServiceInterface",
    "HistoryRequest",
    "MarketDataService",
    "get_market_data_service",
    "close_market_data_service",
    "generate_mock_history",
]
