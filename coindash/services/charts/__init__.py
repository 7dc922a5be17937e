"""
Chart payloads for the rendering target.
"""

from coindash.services.charts.builder import build_price_chart, to_xy

__all__ = ["build_price_chart", "to_xy"]
