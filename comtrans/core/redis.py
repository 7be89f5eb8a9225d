"""
Redis caching utilities.
Holds cached translation statistics; the importer only ever invalidates keys.
"""
import redis
import logging
from typing import Optional

from comtrans.core.config import settings

logger = logging.getLogger(__name__)


class RedisCache:
    """Redis cache manager with connection pooling."""

    def __init__(self, url: Optional[str] = None):
        """Initialize Redis connection pool."""
        self._url = url or settings.REDIS_URL
        self._pool: Optional[redis.ConnectionPool] = None
        self._client: Optional[redis.Redis] = None
        self._connected = False

    def connect(self):
        """
        Connect to Redis server.
        Safe to call multiple times - will reuse existing connection.
        """
        if self._connected and self._client:
            return

        try:
            self._pool = redis.ConnectionPool.from_url(
                self._url,
                max_connections=20,
                decode_responses=True,
                socket_timeout=5,
                socket_connect_timeout=5,
            )
            self._client = redis.Redis(connection_pool=self._pool)

            # Test connection
            self._client.ping()
            self._connected = True
            logger.info("Redis cache connected")
        except redis.RedisError as e:
            logger.warning(f"Redis connection failed: {e}. Caching disabled.")
            self._connected = False
            self._client = None

    def disconnect(self):
        """Disconnect from Redis."""
        if self._pool:
            self._pool.disconnect()
        self._connected = False
        self._client = None
        logger.info("Redis cache disconnected")

    @property
    def is_connected(self) -> bool:
        """Check if Redis is connected."""
        return self._connected and self._client is not None

    def ping(self) -> bool:
        """Round-trip to the server. Raises redis.RedisError when it is gone."""
        return self._client.ping()

    def delete(self, *keys: str) -> int:
        """
        Delete keys from cache.

        Returns:
            Number of keys deleted (0 when caching is disabled)
        """
        if not self.is_connected or not keys:
            return 0

        try:
            return self._client.delete(*keys)
        except redis.RedisError as e:
            logger.warning(f"Redis DELETE error for {len(keys)} keys: {e}")
            return 0

    def delete_pattern(self, pattern: str) -> int:
        """
        Delete all keys matching pattern.

        Args:
            pattern: Pattern to match (e.g., "stats:it_IT:*")

        Returns:
            Number of keys deleted
        """
        if not self.is_connected:
            return 0

        try:
            keys = list(self._client.scan_iter(match=pattern))
            if keys:
                return self._client.delete(*keys)
            return 0
        except redis.RedisError as e:
            logger.warning(f"Redis DELETE_PATTERN error for pattern '{pattern}': {e}")
            return 0


# Global cache instance, connected on application startup
cache = RedisCache()
