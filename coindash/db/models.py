"""
SQLAlchemy models for CoinDash database.

A single key-value table backs the dashboard's small persisted state
(the favorites list). Values are JSON text.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class KeyValue(Base):
    """Flat key -> JSON value store."""
    __tablename__ = "key_values"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)
