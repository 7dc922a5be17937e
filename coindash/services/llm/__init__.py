"""
LLM Insight Service

CONTRACT:
    Input:  AssetMarketStats
    Output: AIRiskAnalysis

RESPONSIBILITIES:
    - Build the risk/return prompt for one asset
    - Call Gemini (primary) or OpenAI (fallback)
    - Parse and validate the structured JSON answer

CRITICAL RULES:
    - LLM does NO math - indicator numbers never come from the LLM
    - Failures are surfaced, not retried
"""

from coindash.services.llm.interface import RiskAnalysisServiceInterface
from coindash.services.llm.client import (
    CompletionRequest,
    LLMClient,
    LLMConfig,
    LLMProvider,
    LLMResponse,
    get_llm_client,
)
from coindash.services.llm.analysis import (
    RiskAnalysisService,
    get_risk_analysis_service,
)

__all__ = [
    "RiskAnalysisServiceInterface",
    "CompletionRequest",
    "LLMClient",
    "LLMConfig",
    "LLMProvider",
    "LLMResponse",
    "get_llm_client",
    "RiskAnalysisService",
    "get_risk_analysis_service",
]
