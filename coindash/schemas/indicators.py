"""
CONTRACT 2: Indicator Engine

Input: HistoricalData (price series)
Output: TechnicalSnapshot

Pure Python/NumPy - NO LLM involvement.
"""

from typing import Optional
from pydantic import BaseModel, Field


class IndicatorPoint(BaseModel):
    """
    Derived sample, ready for plotting.

    `x` is the timestamp of the last input sample in the computation
    window, never a synthetic one.
    """

    model_config = {"frozen": True}

    x: int
    y: float


class TechnicalSnapshot(BaseModel):
    """Indicators computed from one price series. Recomputed, never updated."""

    model_config = {"frozen": True}

    sma20: list[IndicatorPoint] = Field(default_factory=list)
    sma50: list[IndicatorPoint] = Field(default_factory=list)
    rsi: list[IndicatorPoint] = Field(default_factory=list)
    support: Optional[float] = None
    resistance: Optional[float] = None


# =============================================================================
# CHART PAYLOADS (rendering target)
# =============================================================================


class ChartDataset(BaseModel):
    """One plotted series."""

    label: str
    kind: str = "line"  # line, bar, scatter
    axis: str = "y"
    data: list[IndicatorPoint] = Field(default_factory=list)


class ChartAnnotation(BaseModel):
    """Horizontal level line (support / resistance)."""

    name: str
    value: float
    label: str


class PriceChart(BaseModel):
    """Everything the frontend needs to draw the main price chart."""

    datasets: list[ChartDataset] = Field(default_factory=list)
    annotations: list[ChartAnnotation] = Field(default_factory=list)


class IndicatorResponse(BaseModel):
    """Response for GET /indicators/{asset_id}."""

    asset_id: str
    period: str
    snapshot: TechnicalSnapshot
    chart: PriceChart


__all__ = [
    "IndicatorPoint",
    "TechnicalSnapshot",
    "ChartDataset",
    "ChartAnnotation",
    "PriceChart",
    "IndicatorResponse",
]
