"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from typing import Sequence

from coindash.services.base import BaseService
from coindash.schemas.market import HistoricalData, PricePoint
from coindash.schemas.indicators import TechnicalSnapshot


class IndicatorServiceInterface(BaseService[HistoricalData, TechnicalSnapshot]):
    """
    Indicator Engine Service Contract.

    INPUT: HistoricalData
        - prices: ordered (timestamp, value) samples

    OUTPUT: TechnicalSnapshot
        - sma20 / sma50: moving average series
        - rsi: 14-period RSI series
        - support / resistance: trailing 90-sample min / max (None if empty)
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: HistoricalData) -> TechnicalSnapshot:
        """Calculate the snapshot for one price series."""
        pass

    @abstractmethod
    def build_snapshot(self, prices: Sequence[PricePoint]) -> TechnicalSnapshot:
        """Synchronous, memoized snapshot computation."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
