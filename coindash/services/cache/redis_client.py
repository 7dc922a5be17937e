"""
Redis cache client for market data responses.

CoinGecko's public API is heavily rate limited, so catalog, market
snapshot and chart responses are cached for a short TTL. Falls back to
an in-process dict when Redis is unavailable.
"""

import json
import logging
import time
from typing import Optional, Dict, Any, Tuple

import redis.asyncio as redis

from coindash.core.config import settings

logger = logging.getLogger(__name__)

# Global Redis connection pool
_redis_pool: Optional[redis.Redis] = None


async def init_redis() -> Optional[redis.Redis]:
    """
    Initialize Redis connection pool.
    Called on application startup.
    """
    global _redis_pool

    if _redis_pool is not None:
        return _redis_pool

    try:
        _redis_pool = redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
        # Test connection
        await _redis_pool.ping()
        logger.info(f"Redis connected: {settings.redis_url}")
        return _redis_pool
    except Exception as e:
        logger.warning(f"Redis connection failed: {e}. Using in-memory fallback.")
        _redis_pool = None
        return None


async def close_redis() -> None:
    """Close Redis connection pool."""
    global _redis_pool
    if _redis_pool:
        await _redis_pool.aclose()
        _redis_pool = None
        logger.info("Redis connection closed")


def get_redis() -> Optional[redis.Redis]:
    """Get the Redis connection pool."""
    return _redis_pool


class ResponseCache:
    """
    JSON response cache.

    Keys:
    - assets:list → catalog rows
    - markets:{vs_currency} → market snapshot rows
    - history:{asset_id}:{period} → {prices, total_volumes}
    """

    def __init__(
        self,
        redis_client: Optional[redis.Redis] = None,
        max_entries: Optional[int] = None,
    ):
        self._redis = redis_client
        self._max_entries = max(1, max_entries or settings.memory_cache_max_entries)
        self._memory_cache: Dict[str, Tuple[float, str]] = {}

    @property
    def redis(self) -> Optional[redis.Redis]:
        return self._redis or _redis_pool

    def _memory_get(self, key: str) -> Optional[str]:
        """Fallback to memory cache, honoring expiry."""
        entry = self._memory_cache.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if expires_at <= time.monotonic():
            del self._memory_cache[key]
            return None
        return value

    def _memory_set(self, key: str, value: str, ex: int):
        """Fallback to memory cache. Expired entries are purged on every write."""
        now = time.monotonic()
        expired = [k for k, (expires_at, _) in self._memory_cache.items() if expires_at <= now]
        for k in expired:
            del self._memory_cache[k]

        self._memory_cache.pop(key, None)
        # Oldest writes go first once the cap is reached
        while len(self._memory_cache) >= self._max_entries:
            del self._memory_cache[next(iter(self._memory_cache))]
        self._memory_cache[key] = (now + ex, value)

    async def get_json(self, key: str) -> Optional[Any]:
        """Return the cached JSON value, or None on miss."""
        if self.redis:
            try:
                value = await self.redis.get(key)
                return json.loads(value) if value else None
            except Exception as e:
                logger.debug(f"Redis get failed for {key}: {e}")

        value = self._memory_get(key)
        return json.loads(value) if value else None

    async def set_json(self, key: str, value: Any, ttl: int) -> bool:
        """Store a JSON-serializable value for `ttl` seconds."""
        payload = json.dumps(value)

        if self.redis:
            try:
                await self.redis.set(key, payload, ex=ttl)
                return True
            except Exception as e:
                logger.debug(f"Redis set failed for {key}: {e}")

        self._memory_set(key, payload, ttl)
        return True

    async def delete(self, key: str) -> None:
        if self.redis:
            try:
                await self.redis.delete(key)
            except Exception as e:
                logger.debug(f"Redis delete failed for {key}: {e}")
        self._memory_cache.pop(key, None)


# Singleton instance
_response_cache: Optional[ResponseCache] = None


def get_response_cache() -> ResponseCache:
    """Get the response cache singleton."""
    global _response_cache
    if _response_cache is None:
        _response_cache = ResponseCache()
    return _response_cache
