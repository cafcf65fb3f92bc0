"""TTL-keyed cache of AI responses.

Entries are keyed by (restaurant id, query kind) and expire a fixed time
after they were produced. Expiry is enforced on read: an expired entry is
deleted and reported as absent. There is no background sweep and no size
limit.
"""

import time
from collections.abc import Callable

from loguru import logger
from pydantic import ValidationError

from tabletalk_ai.config import settings
from tabletalk_ai.dto import CachedResponseRecord
from tabletalk_ai.entities import CacheEntryEntity, QueryKind
from tabletalk_ai.errors import CachePersistenceError
from tabletalk_ai.protocols import KeyValueStore


class ResponseCache:
    """Per-restaurant, per-feature response cache.

    Storage failures never propagate: reads degrade to a miss and writes are
    logged and dropped, so a feature always returns its freshly computed
    value.

    Example:
        ```python
        cache = ResponseCache.create(store=RedisKeyValueStore.create())
        await cache.put("r1", QueryKind.WHY_THIS_TABLE, "Queued because lively")
        await cache.get("r1", QueryKind.WHY_THIS_TABLE)
        ```
    """

    def __init__(
        self,
        store: KeyValueStore,
        ttl: float | None = None,
        prefix: str | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the response cache.

        Args:
            store: Key-value storage backend (required).
            ttl: Time-to-live for entries in seconds. Defaults to settings.
            prefix: Key namespace. Defaults to settings.cache_prefix.
            clock: Source of the current Unix time.
        """
        self._store = store
        self._ttl = ttl or settings.cache_ttl
        self._prefix = prefix or settings.cache_prefix
        self._clock = clock

    @classmethod
    def create(cls, store: KeyValueStore, ttl: float | None = None) -> "ResponseCache":
        """Factory method to create ResponseCache with defaults."""
        return cls(store=store, ttl=ttl)

    def key_for(self, entity_id: str, kind: QueryKind) -> str:
        """Storage key of the entry for (entity_id, kind)."""
        return f"{self._prefix}{entity_id}:{QueryKind(kind).value}"

    async def get_entry(self, entity_id: str, kind: QueryKind) -> CacheEntryEntity | None:
        """Return the live entry for (entity_id, kind), purging it if expired.

        Returns:
            The entry, or None if absent, expired or unreadable
        """
        key = self.key_for(entity_id, kind)
        try:
            raw = await self._store.get(key)
            if raw is None:
                logger.debug(f"cache miss {key}")
                return None
            record = CachedResponseRecord.model_validate_json(raw)
        except (CachePersistenceError, ValidationError) as e:
            logger.warning(f"Error reading cached AI response {key}: {e}")
            return None

        entry = CacheEntryEntity(
            entity_id=entity_id,
            kind=QueryKind(kind),
            value=record.value,
            produced_at=record.timestamp,
        )
        if entry.is_expired(self._clock(), self._ttl):
            logger.debug(f"cache entry expired, purging {key}")
            try:
                await self._store.delete(key)
            except CachePersistenceError as e:
                logger.warning(f"Error purging expired AI response {key}: {e}")
            return None

        logger.debug(f"cache hit {key}")
        return entry

    async def get(self, entity_id: str, kind: QueryKind) -> str | None:
        """Return the cached value for (entity_id, kind), or None."""
        entry = await self.get_entry(entity_id, kind)
        return entry.value if entry else None

    async def put(self, entity_id: str, kind: QueryKind, value: str) -> None:
        """Store ``value``, replacing any previous entry for the key.

        A storage failure is logged and swallowed.
        """
        key = self.key_for(entity_id, kind)
        record = CachedResponseRecord(value=value, timestamp=self._clock())
        try:
            await self._store.set(key, record.model_dump_json().encode("utf-8"))
        except CachePersistenceError as e:
            logger.warning(f"Error caching AI response {key}: {e}")

    async def clear_all(self) -> int:
        """Delete every cached response.

        Returns:
            Number of entries deleted
        """
        return await self._clear_prefix(self._prefix)

    async def clear_entity(self, entity_id: str) -> int:
        """Delete every cached response of one restaurant.

        Returns:
            Number of entries deleted
        """
        return await self._clear_prefix(f"{self._prefix}{entity_id}:", exact_kind=True)

    async def _clear_prefix(self, prefix: str, exact_kind: bool = False) -> int:
        kinds = {kind.value for kind in QueryKind}
        count = 0
        try:
            for key in await self._store.list_keys(prefix):
                # "r1:" also prefixes the keys of an entity id such as "r1:b"
                if exact_kind and key[len(prefix) :] not in kinds:
                    continue
                await self._store.delete(key)
                count += 1
        except CachePersistenceError as e:
            logger.warning(f"Error clearing AI cache under {prefix}: {e}")
        return count

    @property
    def ttl(self) -> float:
        """Get the entry time-to-live in seconds."""
        return self._ttl
