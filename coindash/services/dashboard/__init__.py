"""
Dashboard state and selection handling.
"""

from coindash.services.dashboard.state import (
    DashboardState,
    SelectionKey,
    SelectionTracker,
    selection_key,
    toggle_theme,
    select_asset,
    select_period,
    toggle_favorite,
    remove_favorite,
    toggle_favorite_ids,
    remove_favorite_ids,
)
from coindash.services.dashboard.session import DashboardSession, get_dashboard_session

__all__ = [
    "DashboardState",
    "SelectionKey",
    "SelectionTracker",
    "selection_key",
    "toggle_theme",
    "select_asset",
    "select_period",
    "toggle_favorite",
    "remove_favorite",
    "toggle_favorite_ids",
    "remove_favorite_ids",
    "DashboardSession",
    "get_dashboard_session",
]
