"""
CONTRACT 3: Risk/Return Projection

Input: list[AssetMarketStats]
Output: list[RiskReturnPoint]

Deterministic, no LLM involvement.
"""

import math
from typing import Optional
from pydantic import BaseModel, Field, field_serializer


class RiskReturnPoint(BaseModel):
    """
    One scatter point per asset.

    x: annualized volatility (risk), >= 0
    y: annualized compounded return; may be +inf (serialized as null)
    """

    model_config = {"frozen": True}

    x: float = Field(..., ge=0, description="Risk (annualized volatility)")
    y: float = Field(..., description="Return (annualized)")
    name: str
    image: Optional[str] = None

    @field_serializer("y", when_used="json")
    def _finite_or_null(self, y: float) -> Optional[float]:
        return y if math.isfinite(y) else None
