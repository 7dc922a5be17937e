"""
Market Data API Endpoints

Asset catalog, market snapshot and price history.
"""

import logging

from fastapi import APIRouter, Depends

from coindash.schemas.market import (
    Asset,
    AssetMarketStats,
    DashboardBootstrap,
    HistoricalData,
    Period,
)
from coindash.services.base import ServiceError
from coindash.services.data_ingestion import MarketDataService, get_market_data_service
from coindash.api.v1.errors import to_http_error

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/assets", response_model=list[Asset])
async def list_assets(service: MarketDataService = Depends(get_market_data_service)):
    """Full asset catalog (id, name, symbol)."""
    try:
        return await service.list_assets()
    except ServiceError as e:
        raise to_http_error(e)


@router.get("/markets", response_model=list[AssetMarketStats])
async def get_markets(service: MarketDataService = Depends(get_market_data_service)):
    """Top assets by market cap with price, volume and 24h change."""
    try:
        return await service.get_markets()
    except ServiceError as e:
        raise to_http_error(e)


@router.get("/bootstrap", response_model=DashboardBootstrap)
async def bootstrap(service: MarketDataService = Depends(get_market_data_service)):
    """
    Initial dashboard load.

    Catalog and market snapshot are fetched concurrently; a failure in
    one is reported in `errors` without failing the other.
    """
    return await service.bootstrap()


@router.get("/{asset_id}/history", response_model=HistoricalData)
async def get_history(
    asset_id: str,
    period: Period = Period.Y1,
    service: MarketDataService = Depends(get_market_data_service),
):
    """Price and volume history for one asset."""
    try:
        return await service.get_history(asset_id, period)
    except ServiceError as e:
        raise to_http_error(e)
