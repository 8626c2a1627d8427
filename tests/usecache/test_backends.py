from __future__ import annotations

import asyncio

import pytest

from usecache import (
    ConfigurationError,
    InMemoryStoreBackend,
    RedisStoreBackend,
    StoreBackend,
    UpstashStoreBackend,
    create_backend_from_env,
    init,
    resolve_backend,
)
from usecache.backends.base import expiry_seconds, flatten_scored_rows


def run_async(coro):
    return asyncio.run(coro)


def test_init_without_any_store_fails_fast():
    with pytest.raises(ConfigurationError, match="Missing redis instance"):
        init(max_paginated_items=10)


def test_resolve_backend_selects_by_handle(fake_redis, fake_upstash):
    assert isinstance(resolve_backend(redis=fake_redis), RedisStoreBackend)
    assert isinstance(resolve_backend(upstash_redis=fake_upstash), UpstashStoreBackend)

    custom = InMemoryStoreBackend()
    assert resolve_backend(backend=custom) is custom


def test_resolve_backend_prefers_direct_client(fake_redis, fake_upstash):
    backend = resolve_backend(redis=fake_redis, upstash_redis=fake_upstash)
    assert isinstance(backend, RedisStoreBackend)
    assert backend.client is fake_redis


def test_backends_satisfy_protocol(fake_redis, fake_upstash):
    for backend in (
        RedisStoreBackend(fake_redis),
        UpstashStoreBackend(fake_upstash),
        InMemoryStoreBackend(),
    ):
        assert isinstance(backend, StoreBackend)


def test_max_paginated_items_falls_back_to_default(fake_redis):
    assert init(redis=fake_redis).max_paginated_items == 100
    assert init(redis=fake_redis, max_paginated_items=0).max_paginated_items == 100
    assert init(redis=fake_redis, max_paginated_items=-4).max_paginated_items == 100
    assert init(redis=fake_redis, max_paginated_items=7).max_paginated_items == 7


def test_redis_backend_uses_reverse_range_command(fake_redis):
    backend = RedisStoreBackend(fake_redis)

    async def scenario():
        await backend.zadd("l", "a", 1)
        await backend.zadd("l", "b", 2)
        desc = await backend.zrange("l", 0, -1, desc=True)
        asc = await backend.zrange("l", 0, -1)
        return desc, asc

    desc, asc = run_async(scenario())
    assert desc == ["b", 2.0, "a", 1.0]
    assert asc == ["a", 1.0, "b", 2.0]
    assert "ZREVRANGE" in fake_redis.commands


def test_upstash_backend_uses_structured_range_options(fake_upstash):
    backend = UpstashStoreBackend(fake_upstash)

    async def scenario():
        await backend.zadd("l", "a", 1)
        return await backend.zrange("l", 0, 0, desc=True)

    assert run_async(scenario()) == ["a", "1.0"]
    assert fake_upstash.zrange_calls == [{"rev": True, "withscores": True}]


def test_redis_backend_decodes_bytes(fake_redis):
    backend = RedisStoreBackend(fake_redis)

    async def scenario():
        await backend.set("k", "value")
        return await backend.get("k"), await backend.zpopmin("missing")

    assert run_async(scenario()) == ("value", [])


def test_inmemory_backend_honors_expiry():
    now = [1000.0]
    backend = InMemoryStoreBackend()
    backend._now = lambda: now[0]  # noqa: SLF001

    async def scenario():
        await backend.set("k", "v", expiry=10)
        first = await backend.get("k")
        now[0] += 11
        return first, await backend.get("k")

    assert run_async(scenario()) == ("v", None)


def test_inmemory_range_matches_redis_index_rules():
    backend = InMemoryStoreBackend()

    async def scenario():
        for score, member in enumerate("abcd", start=1):
            await backend.zadd("l", member, score)
        return (
            await backend.zrange("l", -2, -1),
            await backend.zrange("l", 3, 10),
            await backend.zrange("l", 5, 8),
        )

    tail, clamp, empty = run_async(scenario())
    assert tail == ["c", 3.0, "d", 4.0]
    assert clamp == ["d", 4.0]
    assert empty == []


def test_expiry_and_row_helpers():
    assert expiry_seconds(30) == 30
    assert expiry_seconds(0) is None
    assert expiry_seconds(True) is None
    assert expiry_seconds("10") is None
    assert flatten_scored_rows([(b"a", 1.0), ("b", 2.0)]) == ["a", 1.0, "b", 2.0]
    assert flatten_scored_rows(["a", "1", "b", "2"]) == ["a", "1", "b", "2"]
    assert flatten_scored_rows(None) == []


def test_factory_inmemory_backend(monkeypatch):
    monkeypatch.setenv("USECACHE_BACKEND", "inmemory")
    assert isinstance(create_backend_from_env(), InMemoryStoreBackend)


def test_factory_redis_with_injected_client(monkeypatch):
    monkeypatch.delenv("USECACHE_BACKEND", raising=False)
    injected = object()

    backend = create_backend_from_env(redis_client=injected)

    assert isinstance(backend, RedisStoreBackend)
    assert backend.client is injected


def test_factory_upstash_with_injected_client(monkeypatch):
    monkeypatch.setenv("USECACHE_BACKEND", "upstash")
    injected = object()

    backend = create_backend_from_env(upstash_client=injected)

    assert isinstance(backend, UpstashStoreBackend)
    assert backend.client is injected


def test_factory_upstash_requires_credentials(monkeypatch):
    for name in (
        "USECACHE_UPSTASH_URL",
        "USECACHE_UPSTASH_TOKEN",
        "UPSTASH_REDIS_REST_URL",
        "UPSTASH_REDIS_REST_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)
    with pytest.raises(ConfigurationError):
        create_backend_from_env(backend="upstash")


def test_factory_invalid_backend_raises(monkeypatch):
    monkeypatch.setenv("USECACHE_BACKEND", "bad-backend")
    with pytest.raises(ValueError, match="Unknown USECACHE_BACKEND"):
        create_backend_from_env()
