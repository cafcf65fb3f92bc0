"""
Tests for the TTL response cache.
"""

import json

import pytest
from conftest import FailingWriteStore

from tabletalk_ai.entities import QueryKind
from tabletalk_ai.services import ResponseCache

TTL = 24 * 60 * 60


@pytest.fixture
def cache(store, clock):
    return ResponseCache(store, ttl=TTL, prefix="@tabletalk:ai_cache:", clock=clock)


@pytest.mark.asyncio
async def test_put_then_get(cache, store):
    await cache.put("r1", QueryKind.WHY_THIS_TABLE, "Queued because lively")

    assert await cache.get("r1", QueryKind.WHY_THIS_TABLE) == "Queued because lively"
    assert "@tabletalk:ai_cache:r1:why_this_table" in store.data


@pytest.mark.asyncio
async def test_stored_record_format(cache, store, clock):
    await cache.put("r1", QueryKind.TABLE_STARTER_INVITE, "Join me!")

    raw = store.data["@tabletalk:ai_cache:r1:table_starter_invite"]
    assert json.loads(raw) == {"value": "Join me!", "timestamp": clock.now}


@pytest.mark.asyncio
async def test_missing_entry_is_absent(cache):
    assert await cache.get("r1", QueryKind.WHY_THIS_TABLE) is None


@pytest.mark.asyncio
async def test_entry_alive_just_before_ttl(cache, clock):
    await cache.put("r1", QueryKind.WHY_THIS_TABLE, "value")
    clock.advance(TTL - 1)

    assert await cache.get("r1", QueryKind.WHY_THIS_TABLE) == "value"


@pytest.mark.asyncio
async def test_expired_entry_is_purged_on_read(cache, store, clock):
    await cache.put("r1", QueryKind.WHY_THIS_TABLE, "value")
    clock.advance(TTL + 1)

    assert await cache.get("r1", QueryKind.WHY_THIS_TABLE) is None
    assert "@tabletalk:ai_cache:r1:why_this_table" not in store.data


@pytest.mark.asyncio
async def test_put_overwrites_and_refreshes_timestamp(cache, clock):
    await cache.put("r1", QueryKind.WHY_THIS_TABLE, "old")
    clock.advance(TTL - 10)
    await cache.put("r1", QueryKind.WHY_THIS_TABLE, "new")
    clock.advance(20)

    entry = await cache.get_entry("r1", QueryKind.WHY_THIS_TABLE)
    assert entry is not None
    assert entry.value == "new"
    assert entry.produced_at == clock.now - 20


@pytest.mark.asyncio
async def test_kinds_are_separate_namespaces(cache):
    await cache.put("r1", QueryKind.PLAN_COPILOT_SUGGEST_TIMES, "tonight")

    assert await cache.get("r1", QueryKind.PLAN_COPILOT_DRAFT_INVITE) is None
    assert await cache.get("r1", QueryKind.PLAN_COPILOT_SUGGEST_TIMES) == "tonight"


@pytest.mark.asyncio
async def test_clear_entity_only_touches_that_restaurant(cache, store):
    await cache.put("r1", QueryKind.WHY_THIS_TABLE, "a")
    await cache.put("r1", QueryKind.TABLE_STARTER_INVITE, "b")
    await cache.put("r10", QueryKind.WHY_THIS_TABLE, "c")
    store.data["@tabletalk:restaurant_chat:r1"] = b"{}"

    deleted = await cache.clear_entity("r1")

    assert deleted == 2
    assert await cache.get("r10", QueryKind.WHY_THIS_TABLE) == "c"
    assert "@tabletalk:restaurant_chat:r1" in store.data


@pytest.mark.asyncio
async def test_clear_all_leaves_other_namespaces(cache, store):
    await cache.put("r1", QueryKind.WHY_THIS_TABLE, "a")
    await cache.put("r2", QueryKind.WHY_THIS_TABLE, "b")
    store.data["@tabletalk:restaurant_chat:r1"] = b"{}"

    assert await cache.clear_all() == 2
    assert list(store.data) == ["@tabletalk:restaurant_chat:r1"]


@pytest.mark.asyncio
async def test_write_failure_is_swallowed(clock):
    cache = ResponseCache(FailingWriteStore(), ttl=TTL, clock=clock)

    await cache.put("r1", QueryKind.WHY_THIS_TABLE, "value")

    assert await cache.get("r1", QueryKind.WHY_THIS_TABLE) is None


@pytest.mark.asyncio
async def test_expired_entry_absent_even_if_purge_fails(clock):
    store = FailingWriteStore()
    cache = ResponseCache(store, ttl=TTL, prefix="p:", clock=clock)
    store.data["p:r1:why_this_table"] = json.dumps({"value": "v", "timestamp": clock.now}).encode()
    clock.advance(TTL + 1)

    assert await cache.get("r1", QueryKind.WHY_THIS_TABLE) is None


@pytest.mark.asyncio
async def test_corrupt_record_reads_as_miss(cache, store):
    store.data["@tabletalk:ai_cache:r1:why_this_table"] = b"not json"

    assert await cache.get("r1", QueryKind.WHY_THIS_TABLE) is None


@pytest.mark.asyncio
async def test_clear_entity_spares_ids_sharing_a_colon_prefix(cache):
    await cache.put("a", QueryKind.WHY_THIS_TABLE, "mine")
    await cache.put("a:b", QueryKind.WHY_THIS_TABLE, "theirs")

    assert await cache.clear_entity("a") == 1
    assert await cache.get("a", QueryKind.WHY_THIS_TABLE) is None
    assert await cache.get("a:b", QueryKind.WHY_THIS_TABLE) == "theirs"
