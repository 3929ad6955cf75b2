"""Redis key-value backend for short links."""

import logging
from typing import Optional

import redis.asyncio as redis

from .base import KeyValueStore


class RedisKeyValueStore(KeyValueStore):
    """Redis store for short-link records; Redis handles the expiry."""

    def __init__(
        self,
        redis_url: str,
        key_prefix: str = "madlib:link:",
        logger: Optional[logging.Logger] = None,
        client: Optional[redis.Redis] = None,
    ):
        """Initialize Redis store.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            key_prefix: Prefix prepended to every short code
            logger: Optional logger instance
            client: Pre-built client (skips ``connect``)
        """
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self.logger = logger or logging.getLogger(__name__)
        self.client: Optional[redis.Redis] = client

    async def connect(self) -> None:
        """Connect to Redis."""
        if self.client is not None:
            return

        self.client = redis.from_url(
            self.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
        await self.client.ping()
        self.logger.info("Connected to Redis")

    def get_key(self, short_code: str) -> str:
        """Generate the Redis key for a short code."""
        return f"{self.key_prefix}{short_code}"

    def _require_client(self) -> redis.Redis:
        if self.client is None:
            raise RuntimeError("Redis store is not connected")
        return self.client

    async def get(self, key: str) -> Optional[str]:
        return await self._require_client().get(self.get_key(key))

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._require_client().setex(self.get_key(key), ttl_seconds, value)

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")

    async def health_check(self) -> bool:
        if self.client is None:
            return False
        try:
            await self.client.ping()
            return True
        except redis.RedisError as e:
            self.logger.error(f"Redis health check failed: {e}")
            return False
