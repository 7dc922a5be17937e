"""
Risk/Return Projection

Turns each asset's 24h percentage change into an annualized
(volatility, return) scatter point.

KNOWN LIMITATION: volatility here is |24h return| * sqrt(365), not a
standard deviation of historical returns, and the return compounds a
single day 365 times. The risk/return chart's axis scaling depends on
this exact formula, so it is kept as-is on purpose.
"""

import logging
import math
from typing import Optional, Sequence

from coindash.schemas.market import AssetMarketStats
from coindash.schemas.risk import RiskReturnPoint
from coindash.services.risk.interface import RiskServiceInterface

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365


def daily_return(change_24h: Optional[float]) -> float:
    """Percentage change -> fraction. Missing or NaN counts as 0."""
    if change_24h is None or math.isnan(change_24h):
        return 0.0
    return change_24h / 100


def annualized_volatility(daily: float) -> float:
    return abs(daily) * math.sqrt(DAYS_PER_YEAR)


def annualized_return(daily: float) -> float:
    try:
        return (1 + daily) ** DAYS_PER_YEAR - 1
    except OverflowError:
        return math.inf


def project_risk_return(assets: Sequence[AssetMarketStats]) -> list[RiskReturnPoint]:
    """One point per asset, input order kept, no outlier filtering."""
    points = []
    for asset in assets:
        daily = daily_return(asset.price_change_percentage_24h)
        points.append(
            RiskReturnPoint(
                x=annualized_volatility(daily),
                y=annualized_return(daily),
                name=asset.name,
                image=asset.image,
            )
        )
    return points


class RiskService(RiskServiceInterface):
    """Deterministic risk/return projection over a market snapshot."""

    @property
    def name(self) -> str:
        return "RiskService"

    async def execute(
        self, input_data: Sequence[AssetMarketStats]
    ) -> list[RiskReturnPoint]:
        points = project_risk_return(input_data)
        logger.debug(f"Projected risk/return for {len(points)} assets")
        return points

    async def health_check(self) -> bool:
        return True


# Singleton instance
_service_instance: Optional[RiskService] = None


def get_risk_service() -> RiskService:
    """Get or create risk service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = RiskService()
    return _service_instance
