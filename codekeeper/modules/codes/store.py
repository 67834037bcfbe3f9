from typing import Optional

import redis.asyncio as redis

from codekeeper.exceptions import StoreUnavailable


class CodeStore:
    def __init__(self, redis_client):
        """
        Initialize code store.

        Args:
            redis_client: Async Redis client (decode_responses=True)
        """
        self.redis = redis_client

    @staticmethod
    def key(event_id: str, session_id: str) -> str:
        """Composite key for a session's current code."""
        return f"event:{event_id}:session:{session_id}"

    async def set(self, event_id: str, session_id: str, code: str, ttl_seconds: int) -> None:
        """
        Store a code, replacing any existing value.

        SET with EX applies the value and the TTL in one command, so the key
        never exists without an expiry.

        Args:
            event_id: Owning event
            session_id: Registry session id
            code: Access code
            ttl_seconds: Seconds until the key expires

        Raises:
            StoreUnavailable: Redis call failed
        """
        try:
            await self.redis.set(self.key(event_id, session_id), code, ex=ttl_seconds)
        except redis.RedisError as e:
            raise StoreUnavailable(f"Failed to store code: {e}") from e

    async def get(self, event_id: str, session_id: str) -> Optional[str]:
        """
        Look up the live code for a session.

        Returns:
            The code, or None if the key never existed or has expired
        """
        try:
            return await self.redis.get(self.key(event_id, session_id))
        except redis.RedisError as e:
            raise StoreUnavailable(f"Failed to read code: {e}") from e

    async def delete(self, event_id: str, session_id: str) -> None:
        """Remove a session's code. Missing keys are not an error."""
        try:
            await self.redis.delete(self.key(event_id, session_id))
        except redis.RedisError as e:
            raise StoreUnavailable(f"Failed to delete code: {e}") from e
