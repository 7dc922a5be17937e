"""
LLM Service Interfaces

Defines the contract for the AI insight layer.
"""

from abc import abstractmethod

from coindash.services.base import BaseService
from coindash.schemas.market import AssetMarketStats
from coindash.schemas.insights import AIRiskAnalysis


class RiskAnalysisServiceInterface(BaseService[AssetMarketStats, AIRiskAnalysis]):
    """
    AI Risk Analysis Contract.

    INPUT: AssetMarketStats
        - name, symbol, current_price, market_cap are embedded in the prompt

    OUTPUT: AIRiskAnalysis
        - risk_level: Low / Medium / High / Very High
        - return_potential: Low / Medium / High / Very High
        - justification: free text

    RULES:
        - No retry, no caching
        - Failures raise ServiceError; the caller scopes the error to the
          insight panel
    """

    @property
    def name(self) -> str:
        return "RiskAnalysisService"

    @abstractmethod
    async def execute(self, input_data: AssetMarketStats) -> AIRiskAnalysis:
        """Generate the qualitative assessment."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """True when at least one provider is configured."""
        pass
