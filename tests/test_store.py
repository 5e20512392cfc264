"""
Tests for the Redis-backed key-value store
"""
import pytest
from movieapp.services.store import KeyValueStore


@pytest.mark.asyncio
async def test_set_and_get_round_trips_json(store):
    """Stored documents come back as equal Python values"""
    assert await store.set("movieapp_doc", {"ids": [1, 2], "name": "x"}) is True
    assert await store.get("movieapp_doc") == {"ids": [1, 2], "name": "x"}


@pytest.mark.asyncio
async def test_get_missing_key_returns_none(store):
    assert await store.get("movieapp_missing") is None


@pytest.mark.asyncio
async def test_get_unparseable_value_returns_none(store, fake_redis):
    """Garbage written by someone else reads as absent"""
    await fake_redis.set("movieapp_broken", "{not json")

    assert await store.get("movieapp_broken") is None


@pytest.mark.asyncio
async def test_set_unserializable_value_fails_quietly(store):
    assert await store.set("movieapp_bad", {"value": object()}) is False
    assert await store.get("movieapp_bad") is None


@pytest.mark.asyncio
async def test_remove(store):
    await store.set("movieapp_gone", [1])
    assert await store.remove("movieapp_gone") is True
    assert await store.get("movieapp_gone") is None


@pytest.mark.asyncio
async def test_clear_only_touches_prefix(store, fake_redis):
    await store.set("movieapp_a", 1)
    await store.set("movieapp_b", 2)
    await fake_redis.set("other_c", "3")

    removed = await store.clear()

    assert removed == 2
    assert await store.get("movieapp_a") is None
    assert await fake_redis.get("other_c") == "3"


@pytest.mark.asyncio
async def test_backend_failure_is_absorbed():
    """An unreachable Redis degrades to misses and failed writes"""
    store = KeyValueStore(url="redis://127.0.0.1:1/0")
    try:
        assert await store.get("movieapp_x") is None
        assert await store.set("movieapp_x", 1) is False
        assert await store.remove("movieapp_x") is False
    finally:
        await store.close()


@pytest.mark.asyncio
async def test_close_leaves_injected_client_open(fake_redis):
    store = KeyValueStore(client=fake_redis)
    await store.close()

    await fake_redis.set("still", "open")
    assert await fake_redis.get("still") == "open"
