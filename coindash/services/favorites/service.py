"""
Favorites Service

Load-at-start / save-on-change contract against the key-value store.
The stored format is only ever a flat JSON array of asset ids.
"""

import logging
from dataclasses import replace
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from coindash.db.database import load_favorites, save_favorites
from coindash.services.base import require_asset_id
from coindash.schemas.market import Asset, AssetMarketStats
from coindash.services.dashboard.state import (
    DashboardState,
    remove_favorite_ids,
    toggle_favorite_ids,
)

logger = logging.getLogger(__name__)


class FavoritesService:
    """Favorites persisted through one database session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(self) -> list[str]:
        return await load_favorites(self.session)

    async def toggle(self, asset_id: str) -> list[str]:
        asset_id = require_asset_id("FavoritesService", asset_id)
        current = tuple(await load_favorites(self.session))
        updated = list(toggle_favorite_ids(current, asset_id))
        await save_favorites(self.session, updated)
        logger.info(
            f"{'Added' if asset_id in updated else 'Removed'} favorite {asset_id}"
        )
        return updated

    async def remove(self, asset_id: str) -> list[str]:
        current = tuple(await load_favorites(self.session))
        updated = list(remove_favorite_ids(current, asset_id))
        if len(updated) != len(current):
            await save_favorites(self.session, updated)
            logger.info(f"Removed favorite {asset_id}")
        return updated

    async def load_into(self, state: DashboardState) -> DashboardState:
        """`state` with its favorites read from the store."""
        return replace(state, favorites=tuple(await load_favorites(self.session)))

    async def save_from(self, state: DashboardState) -> DashboardState:
        await save_favorites(self.session, list(state.favorites))
        return state


def resolve_favorites(
    ids: Sequence[str],
    assets: Sequence[Asset],
    markets: Sequence[AssetMarketStats] = (),
) -> list[Asset]:
    """
    Favorite ids -> Asset details, in favorites order.

    Market rows win over catalog rows since only they carry an image.
    Ids found in neither are left out.
    """
    by_id: dict[str, Asset] = {a.id: a for a in assets}
    for m in markets:
        by_id[m.id] = Asset(id=m.id, name=m.name, symbol=m.symbol, image=m.image)
    return [by_id[i] for i in ids if i in by_id]
