"""
CONTRACT 4: AI Insight Layer

Input: AssetMarketStats
Output: AIRiskAnalysis

The LLM only classifies and explains; it never supplies numbers
that feed back into calculations.
"""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field

from coindash.schemas.indicators import PriceChart


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"


class ReturnPotential(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"


class AIRiskAnalysis(BaseModel):
    """Structured result returned by the generative-text provider."""

    asset_id: str
    risk_level: RiskLevel
    return_potential: ReturnPotential
    justification: str = Field(..., min_length=1)
    model: str
    generated_at: datetime


class InsightResponse(BaseModel):
    """AI analysis rendered next to a (mock) historical chart."""

    analysis: AIRiskAnalysis
    chart: PriceChart
    is_mock_history: bool = True
