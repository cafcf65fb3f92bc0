"""
Tests for the Redis key-value store adapter.
"""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from tabletalk_ai.errors import CachePersistenceError
from tabletalk_ai.repositories import RedisKeyValueStore


class FakeRedis:
    """Subset of redis.asyncio.Redis used by the store."""

    def __init__(self, fail=False):
        self.data = {}
        self.fail = fail
        self.patterns = []

    def _check(self):
        if self.fail:
            raise RedisConnectionError("Connection refused")

    async def get(self, key):
        self._check()
        return self.data.get(key)

    async def set(self, key, value):
        self._check()
        self.data[key] = value

    async def delete(self, key):
        self._check()
        self.data.pop(key, None)

    async def scan_iter(self, match=None):
        self._check()
        self.patterns.append(match)
        prefix = match.rstrip("*").replace("\\", "")
        for key in list(self.data):
            if key.startswith(prefix):
                yield key.encode("utf-8")

    async def ping(self):
        self._check()
        return True

    async def aclose(self):
        pass


@pytest.mark.asyncio
async def test_set_get_delete():
    """Test basic read, write and delete."""
    store = RedisKeyValueStore(FakeRedis())

    await store.set("@tabletalk:ai_cache:r1:why_this_table", b"{}")
    assert await store.get("@tabletalk:ai_cache:r1:why_this_table") == b"{}"

    await store.delete("@tabletalk:ai_cache:r1:why_this_table")
    assert await store.get("@tabletalk:ai_cache:r1:why_this_table") is None


@pytest.mark.asyncio
async def test_list_keys_decodes_and_escapes_prefix():
    client = FakeRedis()
    store = RedisKeyValueStore(client)
    await store.set("@tabletalk:ai_cache:[r1]:why_this_table", b"{}")
    await store.set("@tabletalk:restaurant_chat:r1", b"{}")

    keys = await store.list_keys("@tabletalk:ai_cache:[r1]")

    assert keys == ["@tabletalk:ai_cache:[r1]:why_this_table"]
    assert client.patterns == ["@tabletalk:ai_cache:\\[r1\\]*"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "call",
    [
        lambda s: s.get("k"),
        lambda s: s.set("k", b"v"),
        lambda s: s.delete("k"),
        lambda s: s.list_keys("k"),
    ],
)
async def test_redis_errors_become_persistence_errors(call):
    """Test that every Redis failure surfaces as CachePersistenceError."""
    store = RedisKeyValueStore(FakeRedis(fail=True))

    with pytest.raises(CachePersistenceError):
        await call(store)


@pytest.mark.asyncio
async def test_health_check():
    """Test health check against a reachable and an unreachable server."""
    assert await RedisKeyValueStore(FakeRedis()).health_check() is True
    assert await RedisKeyValueStore(FakeRedis(fail=True)).health_check() is False
