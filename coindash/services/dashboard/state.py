"""
Dashboard State

Explicit, immutable application state with pure update functions.
Every update returns a new DashboardState; nothing is mutated in place.

SelectionTracker guards against out-of-order history responses: each
fetch is tagged with the (asset, period) selection in effect when it was
issued, and a response is dropped if the selection has moved on.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from coindash.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SelectionKey:
    asset_id: str
    period: str


@dataclass(frozen=True)
class DashboardState:
    theme: str = field(default_factory=lambda: settings.default_theme)
    selected_asset: str = field(default_factory=lambda: settings.default_asset)
    period: str = field(default_factory=lambda: settings.default_period)
    favorites: tuple[str, ...] = ()

    @property
    def is_favorite(self) -> bool:
        return self.selected_asset in self.favorites


def selection_key(state: DashboardState) -> SelectionKey:
    return SelectionKey(asset_id=state.selected_asset, period=state.period)


# =============================================================================
# UPDATES
# =============================================================================


def toggle_theme(state: DashboardState) -> DashboardState:
    return replace(state, theme="light" if state.theme == "dark" else "dark")


def select_asset(state: DashboardState, asset_id: str) -> DashboardState:
    return replace(state, selected_asset=asset_id)


def select_period(state: DashboardState, period: str) -> DashboardState:
    return replace(state, period=period)


def toggle_favorite_ids(favorites: tuple[str, ...], asset_id: str) -> tuple[str, ...]:
    """Append when absent, remove when present. Order of the rest is kept."""
    if asset_id in favorites:
        return tuple(f for f in favorites if f != asset_id)
    return favorites + (asset_id,)


def remove_favorite_ids(favorites: tuple[str, ...], asset_id: str) -> tuple[str, ...]:
    return tuple(f for f in favorites if f != asset_id)


def toggle_favorite(state: DashboardState, asset_id: Optional[str] = None) -> DashboardState:
    """Toggle `asset_id` (default: the selected asset) in favorites."""
    target = asset_id or state.selected_asset
    return replace(state, favorites=toggle_favorite_ids(state.favorites, target))


def remove_favorite(state: DashboardState, asset_id: str) -> DashboardState:
    return replace(state, favorites=remove_favorite_ids(state.favorites, asset_id))


# =============================================================================
# STALE RESPONSE GUARD
# =============================================================================


class SelectionTracker(Generic[T]):
    """
    Tracks the current selection and filters responses by the selection
    they were requested for.
    """

    def __init__(self, state: Optional[DashboardState] = None):
        self._current = selection_key(state or DashboardState())

    @property
    def current(self) -> SelectionKey:
        return self._current

    def update(self, state: DashboardState) -> SelectionKey:
        """Record a new selection; returns the tag for requests issued now."""
        self._current = selection_key(state)
        return self._current

    def accept(self, tag: SelectionKey, response: T) -> Optional[T]:
        """Return the response if its tag is still current, else None."""
        if tag != self._current:
            logger.debug(f"Discarding stale response for {tag} (current: {self._current})")
            return None
        return response

    async def run(self, tag: SelectionKey, fetch: Callable[[], Awaitable[T]]) -> Optional[T]:
        """Await `fetch()` and apply `accept` to its result."""
        response = await fetch()
        return self.accept(tag, response)
