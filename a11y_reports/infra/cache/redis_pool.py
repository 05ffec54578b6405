"""
Shared Redis connection pool for the score snapshot cache.

Redis is a soft dependency: when the pool cannot be created the getters
return None and callers fall back to computing on demand.
"""
import logging
from typing import Optional

from redis import ConnectionPool, Redis
from redis.exceptions import RedisError

from ...config import settings

logger = logging.getLogger(__name__)

# Module-level pool instance (singleton)
_pool: Optional[ConnectionPool] = None


def get_redis_pool() -> Optional[ConnectionPool]:
    """
    Get the shared Redis connection pool (singleton).

    Creates the pool on first call with settings from config.
    Returns None if Redis connection fails.
    """
    global _pool

    if _pool is not None:
        return _pool

    try:
        _pool = ConnectionPool(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.cache_redis_db,
            max_connections=10,
            socket_connect_timeout=2,
            socket_timeout=2,
            decode_responses=True,  # snapshots are JSON text
        )

        # Verify pool works by getting a test connection
        Redis(connection_pool=_pool).ping()

        logger.info(
            "Redis connection pool initialized: %s:%s/db%s",
            settings.redis_host,
            settings.redis_port,
            settings.cache_redis_db,
        )
        return _pool

    except RedisError as e:
        logger.warning("Failed to create Redis connection pool: %s", e)
        _pool = None
        return None


def get_redis_client() -> Optional[Redis]:
    """
    Get a Redis client using the shared connection pool.

    Returns:
        Redis client if pool is available, None otherwise
    """
    pool = get_redis_pool()

    if pool is None:
        return None

    return Redis(connection_pool=pool)
