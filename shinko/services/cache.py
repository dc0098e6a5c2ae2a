"""
Cache Service Singleton - Shinko OS
shinko/services/cache.py

Provides a singleton Redis cache instance with TTL constants.
Gracefully handles Redis unavailability.
"""
import redis
import structlog
from typing import Optional
from shinko.services.redis_cache import RedisCache
from shinko.config import settings

logger = structlog.get_logger(__name__)

TTL_OPPORTUNITY = settings.CACHE_TTL_OPPORTUNITY
TTL_LEGEND = settings.CACHE_TTL_LEGEND

# Singleton instance
_cache: Optional[RedisCache] = None


def get_cache() -> Optional[RedisCache]:
    """
    Get or create Redis cache instance.

    Returns:
        RedisCache instance if caching is enabled and Redis answers a ping,
        None otherwise. Callers skip caching on None.
    """
    global _cache
    if not settings.CACHE_ENABLED:
        return None
    if _cache is None:
        try:
            _cache = RedisCache()
            _cache.ping()
        except (redis.RedisError, ConnectionError) as e:
            logger.warning("redis_unavailable", url=settings.REDIS_URL, error=str(e))
            _cache = None
    return _cache


def reset_cache() -> None:
    """Drop the singleton so the next get_cache() reconnects."""
    global _cache
    _cache = None
