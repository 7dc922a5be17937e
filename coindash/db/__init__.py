"""
Database module for CoinDash.

Provides SQLite database connection, models and the favorites store.
"""

from coindash.db.database import (
    get_db,
    init_db,
    close_db,
    AsyncSessionLocal,
    load_favorites,
    save_favorites,
)
from coindash.db.models import Base, KeyValue

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "AsyncSessionLocal",
    "load_favorites",
    "save_favorites",
    "Base",
    "KeyValue",
]
