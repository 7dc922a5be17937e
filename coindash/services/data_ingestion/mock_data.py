"""
Mock Data Generator

Generates mock price history for the AI insight view, where a chart
is shown next to the narrative without spending CoinGecko quota.
Values are deterministic per (asset, period, anchor price).
"""

import random
import zlib
from datetime import datetime, timezone
from typing import Optional

from coindash.schemas.market import HistoricalData, Period, PricePoint


# Rough anchors so mock charts land in a believable range
ASSET_BASE_PRICES = {
    "bitcoin": 60000.0,
    "ethereum": 3000.0,
    "tether": 1.0,
    "binancecoin": 550.0,
    "solana": 150.0,
    "ripple": 0.55,
    "cardano": 0.45,
    "dogecoin": 0.12,
}

# Samples per period (CoinGecko granularity: 5-minute for 1 day,
# hourly up to 90 days, daily beyond)
PERIOD_SAMPLES = {
    Period.D1: 288,
    Period.D7: 168,
    Period.D30: 720,
    Period.D90: 2160,
    Period.Y1: 365,
    Period.MAX: 1000,
}

PERIOD_INTERVAL_MS = {
    Period.D1: 300_000,
    Period.D7: 3_600_000,
    Period.D30: 3_600_000,
    Period.D90: 3_600_000,
    Period.Y1: 86_400_000,
    Period.MAX: 86_400_000,
}

DAILY_VOLATILITY = 0.03


def get_base_price(asset_id: str, current_price: Optional[float] = None) -> float:
    """Anchor price: the live price if known, else a table lookup."""
    if current_price and current_price > 0:
        return current_price
    return ASSET_BASE_PRICES.get(asset_id, 10.0)


def _seed(asset_id: str, period: Period) -> int:
    return zlib.crc32(f"{asset_id}:{period.value}".encode("utf-8"))


def generate_mock_history(
    asset_id: str,
    period: Period = Period.D30,
    current_price: Optional[float] = None,
    end_time: Optional[datetime] = None,
) -> HistoricalData:
    """Random-walk price and volume history ending at `current_price`."""
    rng = random.Random(_seed(asset_id, period))
    if end_time is None:
        end_time = datetime.now(timezone.utc)

    samples = PERIOD_SAMPLES[period]
    interval_ms = PERIOD_INTERVAL_MS[period]
    step_vol = DAILY_VOLATILITY * (interval_ms / 86_400_000) ** 0.5
    end_ms = int(end_time.timestamp() * 1000)
    start_ms = end_ms - interval_ms * (samples - 1)

    # Walk backwards from the anchor so the last sample equals it
    anchor = get_base_price(asset_id, current_price)
    values = [anchor]
    for _ in range(samples - 1):
        values.append(max(values[-1] / (1 + rng.gauss(0, step_vol)), anchor * 1e-3))
    values.reverse()

    prices = []
    volumes = []
    for i, value in enumerate(values):
        ts = start_ms + i * interval_ms
        prices.append(PricePoint(timestamp=ts, value=round(value, 8)))
        volumes.append(
            PricePoint(timestamp=ts, value=round(value * rng.uniform(5e3, 5e4), 2))
        )

    return HistoricalData(
        asset_id=asset_id,
        period=period,
        prices=prices,
        total_volumes=volumes,
        is_mock=True,
    )
