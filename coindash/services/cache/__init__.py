"""
Cache module for CoinDash.

Provides Redis caching for market data responses.
"""

from coindash.services.cache.redis_client import (
    ResponseCache,
    get_response_cache,
    init_redis,
    close_redis,
)

__all__ = [
    "ResponseCache",
    "get_response_cache",
    "init_redis",
    "close_redis",
]
