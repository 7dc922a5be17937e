"""
Dashboard API Endpoints

Theme, selection and favorites of the server-held dashboard state, plus
the indicator chart for the current selection.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from coindash.db.database import get_db
from coindash.schemas.dashboard import DashboardView
from coindash.schemas.indicators import IndicatorResponse
from coindash.schemas.market import Period
from coindash.services.base import ServiceError, require_asset_id
from coindash.services.dashboard import (
    DashboardSession,
    get_dashboard_session,
    remove_favorite,
    select_asset,
    select_period,
    toggle_favorite,
    toggle_theme,
)
from coindash.services.data_ingestion import MarketDataService, get_market_data_service
from coindash.services.favorites import FavoritesService
from coindash.services.indicators import IndicatorService, get_indicator_service
from coindash.api.v1.endpoints.indicators import indicator_response
from coindash.api.v1.errors import to_http_error

logger = logging.getLogger(__name__)

router = APIRouter()


async def _synced(dashboard: DashboardSession, session: AsyncSession) -> DashboardView:
    """Refresh favorites from the store and return the view."""
    state = await FavoritesService(session).load_into(dashboard.state)
    return DashboardView.from_state(dashboard.apply(state))


@router.get("/", response_model=DashboardView)
async def get_dashboard(
    dashboard: DashboardSession = Depends(get_dashboard_session),
    session: AsyncSession = Depends(get_db),
):
    return await _synced(dashboard, session)


@router.post("/theme/toggle", response_model=DashboardView)
async def switch_theme(
    dashboard: DashboardSession = Depends(get_dashboard_session),
    session: AsyncSession = Depends(get_db),
):
    dashboard.apply(toggle_theme(dashboard.state))
    return await _synced(dashboard, session)


@router.put("/selection", response_model=DashboardView)
async def change_selection(
    asset_id: Optional[str] = None,
    period: Optional[Period] = None,
    dashboard: DashboardSession = Depends(get_dashboard_session),
    session: AsyncSession = Depends(get_db),
):
    """
    Select an asset and/or period. Chart loads already running for the
    previous selection are answered with 409.
    """
    state = dashboard.state
    if asset_id is not None:
        try:
            state = select_asset(state, require_asset_id("DashboardSession", asset_id))
        except ServiceError as e:
            raise to_http_error(e)
    if period is not None:
        state = select_period(state, period.value)
    dashboard.apply(state)
    return await _synced(dashboard, session)


@router.post("/favorite/toggle", response_model=DashboardView)
async def toggle_selected_favorite(
    dashboard: DashboardSession = Depends(get_dashboard_session),
    session: AsyncSession = Depends(get_db),
):
    """Add or remove the selected asset from favorites."""
    favorites = FavoritesService(session)
    state = toggle_favorite(await favorites.load_into(dashboard.state))
    await favorites.save_from(state)
    return DashboardView.from_state(dashboard.apply(state))


@router.delete("/favorites/{asset_id}", response_model=DashboardView)
async def drop_favorite(
    asset_id: str,
    dashboard: DashboardSession = Depends(get_dashboard_session),
    session: AsyncSession = Depends(get_db),
):
    favorites = FavoritesService(session)
    current = await favorites.load_into(dashboard.state)
    state = remove_favorite(current, asset_id)
    if state != current:
        await favorites.save_from(state)
    return DashboardView.from_state(dashboard.apply(state))


@router.get("/chart", response_model=IndicatorResponse)
async def current_chart(
    dashboard: DashboardSession = Depends(get_dashboard_session),
    data_service: MarketDataService = Depends(get_market_data_service),
    indicator_service: IndicatorService = Depends(get_indicator_service),
):
    """
    Indicator chart for the current selection.

    The load is tagged with the selection in effect when it started. If the
    selection changes before it finishes, the result is discarded.
    """
    tag = dashboard.tracker.current
    period = Period(tag.period)

    async def load() -> IndicatorResponse:
        history = await data_service.get_history(tag.asset_id, period)
        snapshot = await indicator_service.execute(history)
        return indicator_response(tag.asset_id, period, history, snapshot)

    try:
        response = await dashboard.tracker.run(tag, load)
    except ServiceError as e:
        raise to_http_error(e)

    if response is None:
        current = dashboard.tracker.current
        raise HTTPException(
            status_code=409,
            detail=f"Selection changed to {current.asset_id} ({current.period}) while loading",
        )
    return response
