"""
Display formatting for prices and market figures.

Mirrors the frontend's en-US currency and compact-number formats so
server-side labels (chart annotations, prompts) read the same.
"""

import math

COMPACT_UNITS = [
    (1, ""),
    (1e3, "K"),
    (1e6, "M"),
    (1e9, "B"),
    (1e12, "T"),
]


def format_currency(value: float) -> str:
    """USD with 2 decimals; up to 8 decimals for sub-dollar prices."""
    if not math.isfinite(value):
        return "-"
    sign = "-" if value < 0 else ""
    magnitude = abs(value)

    if magnitude < 1:
        text = f"{magnitude:,.8f}".rstrip("0")
        whole, _, frac = text.partition(".")
        text = f"{whole}.{frac.ljust(2, '0')}"
    else:
        text = f"{magnitude:,.2f}"
    return f"{sign}${text}"


def format_large_number(value: float) -> str:
    """Compact notation: 1234567 -> '1.23M', 999999 -> '1M'."""
    if not math.isfinite(value):
        return "-"
    sign = "-" if value < 0 else ""
    magnitude = abs(value)

    level = 0
    for i, (threshold, _) in enumerate(COMPACT_UNITS):
        if magnitude >= threshold:
            level = i
    scaled = round(magnitude / COMPACT_UNITS[level][0], 2)
    # Rounding can carry into the next unit (999.999K -> 1M)
    if scaled >= 1000 and level < len(COMPACT_UNITS) - 1:
        level += 1
        scaled = round(magnitude / COMPACT_UNITS[level][0], 2)

    text = f"{scaled:.2f}".rstrip("0").rstrip(".") or "0"
    return f"{sign}{text}{COMPACT_UNITS[level][1]}"
