"""
Storage Module - Black Box Interface

Purpose: Own the Redis connection backing the code store
Interface: connect(), disconnect(), ping()
Hidden: Redis specifics, connection pooling, timeouts

Can be replaced with any storage backend without affecting other modules.
"""

import logging
import os
from typing import Optional

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class StorageModule:
    """Black box storage abstraction."""

    def __init__(
        self,
        connection_url: str = None,
        password: Optional[str] = None,
        socket_timeout: Optional[float] = None,
    ):
        """Initialize storage with connection URL."""
        self.url = connection_url or os.getenv("REDIS_URL", "redis://localhost:6379/0")
        self.password = password
        self.socket_timeout = socket_timeout
        self._client = None

    async def connect(self) -> redis.Redis:
        """
        Get storage connection.

        Pings the server on first connect so an unreachable store stops the
        service from becoming ready.

        Raises:
            redis.RedisError: Server unreachable
        """
        if not self._client:
            client = redis.from_url(
                self.url,
                password=self.password,  # Passed separately to avoid URL encoding issues
                socket_timeout=self.socket_timeout,
                socket_connect_timeout=self.socket_timeout,
                encoding="utf-8",
                decode_responses=True,
            )
            try:
                await client.ping()
            except redis.RedisError as e:
                logger.error(f"Redis connection error: {e}")
                await client.aclose()
                raise
            logger.info("Redis connected successfully")
            self._client = client
        return self._client

    async def ping(self) -> bool:
        """Check the connection is alive."""
        if not self._client:
            return False
        try:
            return bool(await self._client.ping())
        except redis.RedisError as e:
            logger.error(f"Redis ping failed: {e}")
            return False

    async def disconnect(self):
        """Close storage connection."""
        if self._client:
            await self._client.aclose()
            self._client = None


__all__ = ["StorageModule"]
