"""
CoinDash Backend - FastAPI Application

Wires the CoinGecko data layer, indicator engine, favorites store and
AI insight service behind /api/v1.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coindash import __version__
from coindash.core.config import settings
from coindash.api.v1 import router as api_v1_router
from coindash.db.database import close_db, init_db
from coindash.services.cache import close_redis, init_redis
from coindash.services.cache.redis_client import get_redis
from coindash.services.data_ingestion import close_market_data_service
from coindash.services.llm import get_llm_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.app_name} v{settings.app_version} ({settings.environment})")

    await init_db()
    if await init_redis() is None:
        logger.info("Redis unavailable - caching CoinGecko responses in memory")

    yield

    logger.info("Shutting down...")
    await close_market_data_service()
    await close_redis()
    await close_db()


def cors_origins() -> list[str]:
    """Configured origins plus the frontend URL, without duplicates."""
    origins = list(settings.allowed_origins)
    if settings.frontend_url not in origins:
        origins.append(settings.frontend_url)
    return origins


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    CoinDash Crypto Analysis Dashboard API

    - **Market Data**: CoinGecko catalog, top-100 market snapshot, price history
    - **Indicators**: SMA 20/50, RSI 14, support/resistance (NumPy)
    - **Risk/Return**: annualized projection from the 24h change
    - **Favorites**: flat list of asset ids in SQLite
    - **AI Insights**: Gemini / OpenAI risk and return-potential narrative
    - **Dashboard**: theme, selection and favorites; chart for the current selection
    """,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Liveness plus which optional backends are active."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": __version__,
        "environment": settings.environment,
        "cache": "redis" if get_redis() is not None else "memory",
        "ai_insights": get_llm_client().is_configured,
    }


@app.get("/")
async def root():
    return {
        "message": "CoinDash Backend API",
        "docs": "/docs",
        "health": "/health",
    }
