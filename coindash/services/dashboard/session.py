"""
Dashboard Session

The server keeps one DashboardState for the local user. Every change goes
through `DashboardSession.apply`, which also moves the SelectionTracker
when the (asset, period) selection changes, so chart loads still in flight
for the old selection are discarded instead of answering for the new one.
"""

import logging
from typing import Any, Optional

from coindash.services.dashboard.state import DashboardState, SelectionTracker, selection_key

logger = logging.getLogger(__name__)


class DashboardSession:
    def __init__(self, state: Optional[DashboardState] = None):
        self.state = state or DashboardState()
        self.tracker: SelectionTracker[Any] = SelectionTracker(self.state)

    def apply(self, state: DashboardState) -> DashboardState:
        """Make `state` current; returns it."""
        if selection_key(state) != self.tracker.current:
            key = self.tracker.update(state)
            logger.info(f"Dashboard selection -> {key.asset_id} ({key.period})")
        self.state = state
        return state


# Singleton instance
_session: Optional[DashboardSession] = None


def get_dashboard_session() -> DashboardSession:
    """Get or create the dashboard session."""
    global _session
    if _session is None:
        _session = DashboardSession()
    return _session
