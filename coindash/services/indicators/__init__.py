"""
Indicator Engine Service

CONTRACT:
    Input:  HistoricalData (price series)
    Output: TechnicalSnapshot

RESPONSIBILITIES:
    - Normalize raw (timestamp, value) rows
    - Simple moving averages (20 / 50)
    - RSI (14) with an incremental sliding window
    - Support / resistance over the trailing 90 samples

PURE PYTHON - No LLM involvement.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from coindash.services.indicators.interface import IndicatorServiceInterface
from coindash.services.indicators.service import IndicatorService, get_indicator_service

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
]
