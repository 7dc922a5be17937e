"""
Technical Indicator Calculations

Pure Python/NumPy implementations of the dashboard indicators.
NO LLM INVOLVEMENT - All math is deterministic.

Every function here is total over empty and short inputs: it returns an
empty list (or None scalars) instead of raising.
"""

import logging
import math
from typing import Any, Iterable, Optional, Sequence

import numpy as np

from coindash.schemas.market import PricePoint
from coindash.schemas.indicators import IndicatorPoint

logger = logging.getLogger(__name__)


# =============================================================================
# SERIES NORMALIZATION
# =============================================================================


def normalize_series(pairs: Optional[Iterable[Any]]) -> list[PricePoint]:
    """
    Convert raw `[timestamp_ms, value]` rows into PricePoints.

    Input order is kept as-is (no sorting, dedup or gap filling). Rows that
    are not numeric pairs, or carry a non-finite value, are dropped.
    """
    if not pairs:
        return []

    points: list[PricePoint] = []
    for row in pairs:
        try:
            ts, value = row
            ts = int(ts)
            value = float(value)
        except (TypeError, ValueError):
            logger.debug(f"Dropping malformed series row: {row!r}")
            continue
        if not math.isfinite(value):
            logger.debug(f"Dropping non-finite series row: {row!r}")
            continue
        points.append(PricePoint(timestamp=ts, value=value))
    return points


def closing_values(points: Sequence[PricePoint]) -> np.ndarray:
    """Closing values as a float array."""
    return np.array([p.value for p in points], dtype=float)


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(points: Sequence[PricePoint], window: int) -> list[IndicatorPoint]:
    """
    Simple Moving Average.

    Output has `len(points) - window + 1` entries (empty if the window is
    longer than the series). Entry k is the mean of inputs k..k+window-1 and
    carries the timestamp of input k+window-1.
    """
    if window < 1:
        raise ValueError(f"SMA window must be positive, got {window}")

    closes = closing_values(points)
    result: list[IndicatorPoint] = []
    for i in range(window - 1, len(closes)):
        mean = float(np.mean(closes[i - window + 1 : i + 1]))
        result.append(IndicatorPoint(x=points[i].timestamp, y=mean))
    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def _rsi_value(gains: float, losses: float, rising: int, falling: int, window: int) -> float:
    # Saturated windows are decided by the counts, not the running sums.
    if falling == 0:
        return 100.0 if rising > 0 else 0.0
    if rising == 0:
        return 0.0

    avg_gain = max(0.0, gains) / window
    avg_loss = max(0.0, losses) / window
    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return min(100.0, max(0.0, 100.0 - (100.0 / (1.0 + rs))))


def rsi(points: Sequence[PricePoint], window: int = 14) -> list[IndicatorPoint]:
    """
    Relative Strength Index over a sliding window of `window` deltas.

    Gain and loss sums are updated incrementally: each step adds the delta
    entering the window and drops the delta `window` steps behind it.
    The number of rising and falling deltas in the window is tracked too;
    a window with no falling delta is 100 (or 0 when flat) and a window
    with no rising delta is 0, whatever the running sums have drifted to.
    The first value is emitted at input index `window`.
    """
    if window < 1:
        raise ValueError(f"RSI window must be positive, got {window}")

    closes = closing_values(points)
    if len(closes) < window + 1:
        return []

    deltas = np.diff(closes)
    gains = 0.0
    losses = 0.0
    rising = 0
    falling = 0
    result: list[IndicatorPoint] = []

    for i in range(1, len(closes)):
        change = float(deltas[i - 1])
        if change > 0:
            gains += change
            rising += 1
        elif change < 0:
            losses -= change
            falling += 1

        if i >= window:
            result.append(
                IndicatorPoint(
                    x=points[i].timestamp,
                    y=_rsi_value(gains, losses, rising, falling, window),
                )
            )

            # Delta at index i - window + 1 leaves before the next step
            leaving = float(deltas[i - window])
            if leaving > 0:
                gains = max(0.0, gains - leaving)
                rising -= 1
            elif leaving < 0:
                losses = max(0.0, losses + leaving)
                falling -= 1

    return result


# =============================================================================
# SUPPORT / RESISTANCE
# =============================================================================


def support_resistance(
    points: Sequence[PricePoint], lookback: int = 90
) -> tuple[Optional[float], Optional[float]]:
    """
    Min and max close over the trailing `lookback` samples.

    Returns (None, None) for an empty series.
    """
    if lookback < 1:
        raise ValueError(f"Lookback must be positive, got {lookback}")

    closes = closing_values(points)
    if len(closes) == 0:
        return None, None

    recent = closes[-lookback:]
    return float(np.min(recent)), float(np.max(recent))
