"""
Indicator Engine Service Implementation

Builds a TechnicalSnapshot from a price series.
NO LLM INVOLVEMENT - Pure Python/NumPy calculations.
"""

import logging
from functools import lru_cache
from typing import Optional, Sequence

from coindash.core.config import settings
from coindash.schemas.market import HistoricalData, PricePoint
from coindash.schemas.indicators import TechnicalSnapshot
from coindash.services.indicators.interface import IndicatorServiceInterface
from coindash.services.indicators.calculations import (
    sma,
    rsi,
    support_resistance,
)

logger = logging.getLogger(__name__)

SNAPSHOT_CACHE_SIZE = 64


@lru_cache(maxsize=SNAPSHOT_CACHE_SIZE)
def _compute_snapshot(
    prices: tuple[PricePoint, ...],
    fast_window: int,
    slow_window: int,
    rsi_window: int,
    lookback: int,
) -> TechnicalSnapshot:
    support, resistance = support_resistance(prices, lookback)
    return TechnicalSnapshot(
        sma20=sma(prices, fast_window),
        sma50=sma(prices, slow_window),
        rsi=rsi(prices, rsi_window),
        support=support,
        resistance=resistance,
    )


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Snapshots are memoized by the price series itself: the same series
    returns the same (immutable) snapshot without recomputation.
    """

    def __init__(
        self,
        fast_window: Optional[int] = None,
        slow_window: Optional[int] = None,
        rsi_window: Optional[int] = None,
        lookback: Optional[int] = None,
    ):
        self.fast_window = fast_window or settings.sma_fast_window
        self.slow_window = slow_window or settings.sma_slow_window
        self.rsi_window = rsi_window or settings.rsi_window
        self.lookback = lookback or settings.range_lookback

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def execute(self, input_data: HistoricalData) -> TechnicalSnapshot:
        """Calculate indicators for one asset's price history."""
        snapshot = self.build_snapshot(input_data.prices)
        logger.debug(
            f"Indicators for {input_data.asset_id}/{input_data.period.value}: "
            f"{len(input_data.prices)} prices, {len(snapshot.rsi)} RSI points"
        )
        return snapshot

    def build_snapshot(self, prices: Sequence[PricePoint]) -> TechnicalSnapshot:
        return _compute_snapshot(
            tuple(prices),
            self.fast_window,
            self.slow_window,
            self.rsi_window,
            self.lookback,
        )

    @staticmethod
    def cache_info():
        """Memoization stats (hits / misses)."""
        return _compute_snapshot.cache_info()

    @staticmethod
    def clear_cache() -> None:
        _compute_snapshot.cache_clear()

    async def health_check(self) -> bool:
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
