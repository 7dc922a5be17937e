"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from coindash.api.v1.endpoints import market, indicators, risk, favorites, insights, dashboard

router = APIRouter()

# Include all endpoint routers
router.include_router(market.router, prefix="/market", tags=["Market Data"])
router.include_router(indicators.router, prefix="/indicators", tags=["Indicators"])
router.include_router(risk.router, prefix="/risk", tags=["Risk/Return"])
router.include_router(favorites.router, prefix="/favorites", tags=["Favorites"])
router.include_router(insights.router, prefix="/insights", tags=["AI Insights"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
