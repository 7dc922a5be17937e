"""
Database connection and session management.

Uses SQLite with aiosqlite for async support.
"""

import json
import os
import logging
from typing import AsyncGenerator, Optional
from contextlib import asynccontextmanager

from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from coindash.db.models import Base, KeyValue
from coindash.core.config import settings

logger = logging.getLogger(__name__)

FAVORITES_KEY = "cryptoFavorites"

# Database path - data directory is created on init
DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "data")
SQLITE_PATH = settings.sqlite_path or os.path.join(DATA_DIR, "coindash.db")
DATABASE_URL = f"sqlite+aiosqlite:///{SQLITE_PATH}"

# Create async engine
# Note: SQLite requires check_same_thread=False for async
engine = create_async_engine(
    DATABASE_URL,
    echo=False,  # Set to True for SQL debugging
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,  # Recommended for SQLite
)

# Session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def init_db() -> None:
    """
    Initialize the database - create all tables.
    Called on application startup.
    """
    directory = os.path.dirname(SQLITE_PATH)
    if directory:
        os.makedirs(directory, exist_ok=True)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Database initialized at: {SQLITE_PATH}")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


async def close_db() -> None:
    """
    Close database connections.
    Called on application shutdown.
    """
    await engine.dispose()
    logger.info("Database connections closed")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.
    Use with FastAPI Depends().
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for database sessions.
    Use when not in a FastAPI route.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# Key-value helpers

async def get_value(session: AsyncSession, key: str) -> Optional[str]:
    result = await session.execute(select(KeyValue).where(KeyValue.key == key))
    row = result.scalar_one_or_none()
    return row.value if row else None


async def set_value(session: AsyncSession, key: str, value: str) -> None:
    result = await session.execute(select(KeyValue).where(KeyValue.key == key))
    row = result.scalar_one_or_none()
    if row is None:
        session.add(KeyValue(key=key, value=value))
    else:
        row.value = value
    await session.flush()


async def load_favorites(session: AsyncSession) -> list[str]:
    """
    Read the favorites list. Missing or corrupt data reads as empty;
    non-string entries are dropped.
    """
    raw = await get_value(session, FAVORITES_KEY)
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored favorites are not valid JSON, starting empty")
        return []
    if not isinstance(data, list):
        return []

    favorites: list[str] = []
    for item in data:
        if isinstance(item, str) and item not in favorites:
            favorites.append(item)
    return favorites


async def save_favorites(session: AsyncSession, favorites: list[str]) -> None:
    """Overwrite the favorites list."""
    await set_value(session, FAVORITES_KEY, json.dumps(list(favorites)))
