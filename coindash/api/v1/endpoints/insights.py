"""
AI Insight API Endpoints

Qualitative risk/return narrative from the LLM, shown next to a mock
price chart. Errors here are scoped to the insight panel.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from coindash.schemas.market import Period
from coindash.schemas.insights import InsightResponse
from coindash.services.base import ServiceError
from coindash.services.charts import build_price_chart
from coindash.services.data_ingestion import (
    MarketDataService,
    generate_mock_history,
    get_market_data_service,
)
from coindash.services.indicators import IndicatorService, get_indicator_service
from coindash.services.llm import RiskAnalysisService, get_risk_analysis_service
from coindash.api.v1.errors import to_http_error

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{asset_id}", response_model=InsightResponse)
async def analyze_asset(
    asset_id: str,
    period: Period = Period.D30,
    data_service: MarketDataService = Depends(get_market_data_service),
    indicator_service: IndicatorService = Depends(get_indicator_service),
    analysis_service: RiskAnalysisService = Depends(get_risk_analysis_service),
):
    """
    Run the AI risk analysis for one asset.

    The asset must be in the current market snapshot (its name, symbol,
    price and market cap go into the prompt).
    """
    try:
        stats = await data_service.get_market_stats(asset_id)
    except ServiceError as e:
        raise to_http_error(e)
    if stats is None:
        raise HTTPException(status_code=404, detail=f"Asset not found: {asset_id}")

    try:
        analysis = await analysis_service.execute(stats)
    except ServiceError as e:
        raise to_http_error(e)

    history = generate_mock_history(asset_id, period, current_price=stats.current_price)
    snapshot = indicator_service.build_snapshot(history.prices)

    return InsightResponse(
        analysis=analysis,
        chart=build_price_chart(history, snapshot),
        is_mock_history=history.is_mock,
    )
