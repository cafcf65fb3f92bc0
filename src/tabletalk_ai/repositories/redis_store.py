"""Redis implementation of KeyValueStore.

Redis stands in for the device key-value store: one string value per key,
prefix scans for bulk clears. Expiry is not delegated to Redis; the cache
enforces its TTL on read.
"""

import re

import redis.asyncio as redis
from loguru import logger
from redis.exceptions import RedisError

from tabletalk_ai.config import get_redis_client
from tabletalk_ai.errors import CachePersistenceError

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def _escape_glob(text: str) -> str:
    """Escape Redis MATCH glob metacharacters in ``text``."""
    return _GLOB_SPECIAL.sub(r"\\\1", text)


class RedisKeyValueStore:
    """Redis implementation of the KeyValueStore protocol.

    This class satisfies the KeyValueStore protocol through structural
    typing - no explicit inheritance needed.

    Every redis.RedisError is re-raised as CachePersistenceError so that
    callers only deal with the package's own error taxonomy.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize the Redis key-value store.

        Args:
            redis_client: asyncio Redis client instance. If None, creates default.
        """
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(cls, redis_client: redis.Redis | None = None) -> "RedisKeyValueStore":
        """Factory method to create RedisKeyValueStore with defaults.

        Args:
            redis_client: Redis client. If None, one is built from settings.

        Returns:
            Configured RedisKeyValueStore
        """
        return cls(redis_client=redis_client)

    async def get(self, key: str) -> bytes | None:
        try:
            value = await self._client.get(key)
        except RedisError as e:
            raise CachePersistenceError(f"Failed to read {key}: {e}") from e
        if isinstance(value, str):
            return value.encode("utf-8")
        return value

    async def set(self, key: str, value: bytes) -> None:
        try:
            await self._client.set(key, value)
        except RedisError as e:
            raise CachePersistenceError(f"Failed to write {key}: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except RedisError as e:
            raise CachePersistenceError(f"Failed to delete {key}: {e}") from e

    async def list_keys(self, prefix: str) -> list[str]:
        keys: list[str] = []
        try:
            async for key in self._client.scan_iter(match=f"{_escape_glob(prefix)}*"):
                keys.append(key.decode("utf-8") if isinstance(key, bytes) else key)
        except RedisError as e:
            raise CachePersistenceError(f"Failed to list keys under {prefix}: {e}") from e
        logger.debug(f"Listed {len(keys)} keys under {prefix}")
        return keys

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
