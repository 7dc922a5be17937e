"""
Risk/Return API Endpoints
"""

from fastapi import APIRouter, Depends

from coindash.schemas.risk import RiskReturnPoint
from coindash.services.base import ServiceError
from coindash.services.data_ingestion import MarketDataService, get_market_data_service
from coindash.services.risk import RiskService, get_risk_service
from coindash.api.v1.errors import to_http_error

router = APIRouter()


@router.get("/risk-return", response_model=list[RiskReturnPoint])
async def get_risk_return(
    data_service: MarketDataService = Depends(get_market_data_service),
    risk_service: RiskService = Depends(get_risk_service),
):
    """
    Annualized risk/return scatter for the top assets.

    Volatility is |24h return| * sqrt(365) and return compounds the 24h
    move over a year; a coarse projection, not a historical estimate.
    """
    try:
        markets = await data_service.get_markets()
    except ServiceError as e:
        raise to_http_error(e)
    return await risk_service.execute(markets)
