"""
Chart Payload Builder

Turns HistoricalData + TechnicalSnapshot into `{x, y}` datasets for the
frontend's charting library. Knows nothing about the renderer itself.
"""

from coindash.core.formatting import format_currency
from coindash.schemas.market import HistoricalData, PricePoint
from coindash.schemas.indicators import (
    ChartAnnotation,
    ChartDataset,
    IndicatorPoint,
    PriceChart,
    TechnicalSnapshot,
)


def to_xy(points: list[PricePoint]) -> list[IndicatorPoint]:
    return [IndicatorPoint(x=p.timestamp, y=p.value) for p in points]


def build_price_chart(history: HistoricalData, snapshot: TechnicalSnapshot) -> PriceChart:
    """
    Price, SMA 20, SMA 50 and volume share the time axis; RSI plots on
    its own 0-100 axis (`y1`) and volume on a hidden one (`y2`).
    """
    datasets = [
        ChartDataset(label="Price", data=to_xy(history.prices)),
        ChartDataset(label="SMA 20", data=list(snapshot.sma20)),
        ChartDataset(label="SMA 50", data=list(snapshot.sma50)),
        ChartDataset(label="RSI", axis="y1", data=list(snapshot.rsi)),
        ChartDataset(label="Volume", kind="bar", axis="y2", data=to_xy(history.total_volumes)),
    ]

    annotations = []
    if snapshot.support is not None:
        annotations.append(
            ChartAnnotation(
                name="support",
                value=snapshot.support,
                label=f"Support: {format_currency(snapshot.support)}",
            )
        )
    if snapshot.resistance is not None:
        annotations.append(
            ChartAnnotation(
                name="resistance",
                value=snapshot.resistance,
                label=f"Resistance: {format_currency(snapshot.resistance)}",
            )
        )

    return PriceChart(datasets=datasets, annotations=annotations)
