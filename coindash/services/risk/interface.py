"""
Risk/Return Service Interface
"""

from abc import abstractmethod
from typing import Sequence

from coindash.services.base import BaseService
from coindash.schemas.market import AssetMarketStats
from coindash.schemas.risk import RiskReturnPoint


class RiskServiceInterface(
    BaseService[Sequence[AssetMarketStats], list[RiskReturnPoint]]
):
    """
    Risk/Return Service Contract.

    INPUT: list of AssetMarketStats (each with a 24h % change)

    OUTPUT: list of RiskReturnPoint, same order as input
        - x: annualized volatility
        - y: annualized return

    RULES:
        - Pure function of the input, no filtering
        - Absent 24h change is treated as 0
    """

    @property
    def name(self) -> str:
        return "RiskService"

    @abstractmethod
    async def execute(
        self, input_data: Sequence[AssetMarketStats]
    ) -> list[RiskReturnPoint]:
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass
