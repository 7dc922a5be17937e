"""
Favorites API Endpoints

The favorites list is a flat array of asset ids, saved on every change.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from coindash.db.database import get_db
from coindash.schemas.favorites import FavoritesResponse
from coindash.services.data_ingestion import MarketDataService, get_market_data_service
from coindash.services.base import ServiceError
from coindash.services.favorites import FavoritesService, resolve_favorites
from coindash.api.v1.errors import to_http_error

logger = logging.getLogger(__name__)

router = APIRouter()


async def _with_details(ids: list[str], data_service: MarketDataService) -> FavoritesResponse:
    """Attach catalog details; ids are returned even if the catalog is down."""
    bootstrap = await data_service.bootstrap()
    for error in bootstrap.errors:
        logger.warning(f"Favorite details incomplete: {error}")
    return FavoritesResponse(
        ids=ids,
        details=resolve_favorites(ids, bootstrap.assets, bootstrap.markets),
    )


@router.get("/", response_model=FavoritesResponse)
async def list_favorites(
    session: AsyncSession = Depends(get_db),
    data_service: MarketDataService = Depends(get_market_data_service),
):
    ids = await FavoritesService(session).get_all()
    return await _with_details(ids, data_service)


@router.post("/{asset_id}/toggle", response_model=FavoritesResponse)
async def toggle_favorite(
    asset_id: str,
    session: AsyncSession = Depends(get_db),
    data_service: MarketDataService = Depends(get_market_data_service),
):
    """Add the asset if absent, remove it if present."""
    try:
        ids = await FavoritesService(session).toggle(asset_id)
    except ServiceError as e:
        raise to_http_error(e)
    return await _with_details(ids, data_service)


@router.delete("/{asset_id}", response_model=FavoritesResponse)
async def remove_favorite(
    asset_id: str,
    session: AsyncSession = Depends(get_db),
    data_service: MarketDataService = Depends(get_market_data_service),
):
    """Remove the asset; removing a non-favorite is a no-op."""
    ids = await FavoritesService(session).remove(asset_id)
    return await _with_details(ids, data_service)
