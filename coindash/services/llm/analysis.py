"""
AI Risk Analysis Service Implementation

Asks the LLM for a qualitative risk / return-potential assessment of
one asset. No retries and no caching: a failure is reported to the
caller, who retries by clicking "analyze" again.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from coindash.schemas.market import AssetMarketStats
from coindash.schemas.insights import AIRiskAnalysis
from coindash.services.base import ServiceError
from coindash.services.llm.interface import RiskAnalysisServiceInterface
from coindash.services.llm.client import LLMClient, get_llm_client
from coindash.services.llm.prompts import (
    RISK_ANALYSIS_SYSTEM_PROMPT,
    format_risk_analysis_prompt,
)

logger = logging.getLogger(__name__)


def parse_llm_json(content: str) -> dict:
    """Parse a JSON object, tolerating a surrounding markdown code block."""
    content = content.strip()
    if content.startswith("```"):
        lines = content.split("\n")
        content = "\n".join(line for line in lines[1:] if not line.startswith("```"))

    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    return data


class RiskAnalysisService(RiskAnalysisServiceInterface):
    """AI risk/return insight for a single asset."""

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self._llm_client = llm_client

    @property
    def llm_client(self) -> LLMClient:
        """Lazy initialization of LLM client."""
        if self._llm_client is None:
            self._llm_client = get_llm_client()
        return self._llm_client

    @property
    def name(self) -> str:
        return "RiskAnalysisService"

    async def execute(self, input_data: AssetMarketStats) -> AIRiskAnalysis:
        user_prompt = format_risk_analysis_prompt(input_data)

        try:
            response = await self.llm_client.generate(
                system_prompt=RISK_ANALYSIS_SYSTEM_PROMPT,
                user_prompt=user_prompt,
                response_format="json",
            )
        except Exception as e:
            logger.error(f"AI analysis request failed for {input_data.id}: {e}")
            raise ServiceError(
                self.name,
                "Failed to get AI analysis. Please try again.",
                {"asset_id": input_data.id},
            ) from e

        try:
            llm_output = parse_llm_json(response.content)
            return AIRiskAnalysis(
                asset_id=input_data.id,
                risk_level=llm_output.get("risk_level"),
                return_potential=llm_output.get("return_potential"),
                justification=(llm_output.get("justification") or "").strip(),
                model=response.model,
                generated_at=datetime.now(timezone.utc),
            )
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"Failed to parse LLM response: {e}")
            logger.error(f"Response content: {response.content[:500]}")
            raise ServiceError(
                self.name,
                "AI returned an unexpected response. Please try again.",
                {"asset_id": input_data.id},
            ) from e

    async def health_check(self) -> bool:
        return self.llm_client.is_configured


# Singleton instance
_service_instance: Optional[RiskAnalysisService] = None


def get_risk_analysis_service() -> RiskAnalysisService:
    """Get or create risk analysis service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = RiskAnalysisService()
    return _service_instance
