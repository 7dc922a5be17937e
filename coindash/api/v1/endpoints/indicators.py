"""
Indicator API Endpoints

Endpoints for technical indicator calculations.
"""

import logging

from fastapi import APIRouter, Depends

from coindash.schemas.market import HistoricalData, Period
from coindash.schemas.indicators import IndicatorResponse, TechnicalSnapshot
from coindash.services.base import ServiceError
from coindash.services.charts import build_price_chart
from coindash.services.data_ingestion import MarketDataService, get_market_data_service
from coindash.services.indicators import IndicatorService, get_indicator_service
from coindash.api.v1.errors import to_http_error

logger = logging.getLogger(__name__)

router = APIRouter()


def indicator_response(
    asset_id: str, period: Period, history: HistoricalData, snapshot: TechnicalSnapshot
) -> IndicatorResponse:
    return IndicatorResponse(
        asset_id=asset_id,
        period=period.value,
        snapshot=snapshot,
        chart=build_price_chart(history, snapshot),
    )


@router.get("/{asset_id}", response_model=IndicatorResponse)
async def get_indicators(
    asset_id: str,
    period: Period = Period.Y1,
    data_service: MarketDataService = Depends(get_market_data_service),
    indicator_service: IndicatorService = Depends(get_indicator_service),
):
    """
    Indicator snapshot plus chart datasets for one asset.

    Returns:
        - SMA 20 / SMA 50 series
        - RSI (14) series
        - Support / resistance over the last 90 samples
        - Chart datasets and level annotations
    """
    try:
        history = await data_service.get_history(asset_id, period)
    except ServiceError as e:
        raise to_http_error(e)

    snapshot = await indicator_service.execute(history)
    return indicator_response(asset_id, period, history, snapshot)


@router.get("/{asset_id}/levels")
async def get_levels(
    asset_id: str,
    period: Period = Period.Y1,
    data_service: MarketDataService = Depends(get_market_data_service),
    indicator_service: IndicatorService = Depends(get_indicator_service),
):
    """
    Get support/resistance levels for an asset.
    """
    try:
        history = await data_service.get_history(asset_id, period)
    except ServiceError as e:
        raise to_http_error(e)

    snapshot: TechnicalSnapshot = await indicator_service.execute(history)
    return {
        "asset_id": asset_id,
        "support": snapshot.support,
        "resistance": snapshot.resistance,
        "current_price": history.prices[-1].value if history.prices else None,
    }
