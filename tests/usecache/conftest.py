from __future__ import annotations

import pytest

from usecache import InMemoryStoreBackend, init


class _SortedSetModel:
    def __init__(self) -> None:
        self.strings: dict[str, object] = {}
        self.zsets: dict[str, dict[str, float]] = {}
        self.set_calls: list[tuple[str, object, int | None]] = []
        self.commands: list[str] = []

    def _add(self, key: str, mapping: dict[str, float], ch: bool) -> int:
        zset = self.zsets.setdefault(key, {})
        added = 0
        changed = 0
        for member, score in mapping.items():
            if member not in zset:
                added += 1
            elif zset[member] != float(score):
                changed += 1
            zset[member] = float(score)
        return added + changed if ch else added

    def _window(self, key: str, start: int, stop: int, rev: bool) -> list[tuple[str, float]]:
        rows = sorted(self.zsets.get(key, {}).items(), key=lambda item: (item[1], item[0]))
        if rev:
            rows.reverse()
        size = len(rows)
        if start < 0:
            start += size
        if stop < 0:
            stop += size
        start = max(start, 0)
        stop = min(stop, size - 1)
        if start > stop:
            return []
        return rows[start : stop + 1]

    def _popmin(self, key: str) -> list[tuple[str, float]]:
        rows = self._window(key, 0, 0, rev=False)
        for member, _ in rows:
            del self.zsets[key][member]
        return rows


class FakeAsyncRedis(_SortedSetModel):
    """Mirrors ``redis.asyncio.Redis`` reply shapes without decode_responses."""

    async def get(self, key: str):
        self.commands.append("GET")
        value = self.strings.get(key)
        if isinstance(value, str):
            return value.encode("utf-8")
        return value

    async def set(self, key: str, value, ex: int | None = None):
        self.commands.append("SET")
        self.set_calls.append((key, value, ex))
        self.strings[key] = value
        return True

    async def zadd(self, key: str, mapping: dict[str, float], ch: bool = False) -> int:
        self.commands.append("ZADD")
        return self._add(key, mapping, ch)

    async def zrem(self, key: str, *members: str) -> int:
        self.commands.append("ZREM")
        zset = self.zsets.get(key, {})
        return sum(1 for m in members if zset.pop(m, None) is not None)

    async def zcard(self, key: str) -> int:
        self.commands.append("ZCARD")
        return len(self.zsets.get(key, {}))

    async def zrange(self, key: str, start: int, end: int, withscores: bool = False):
        self.commands.append("ZRANGE")
        return [(m.encode("utf-8"), s) for m, s in self._window(key, start, end, rev=False)]

    async def zrevrange(self, key: str, start: int, end: int, withscores: bool = False):
        self.commands.append("ZREVRANGE")
        return [(m.encode("utf-8"), s) for m, s in self._window(key, start, end, rev=True)]

    async def zpopmin(self, key: str, count: int | None = None):
        self.commands.append("ZPOPMIN")
        return [(m.encode("utf-8"), s) for m, s in self._popmin(key)]

    async def delete(self, *names: str) -> int:
        self.commands.append("DEL")
        removed = 0
        for name in names:
            if self.strings.pop(name, None) is not None:
                removed += 1
            if self.zsets.pop(name, None) is not None:
                removed += 1
        return removed


class FakeUpstashRedis(_SortedSetModel):
    """Mirrors ``upstash_redis.asyncio.Redis`` option and reply shapes."""

    def __init__(self) -> None:
        super().__init__()
        self.zrange_calls: list[dict[str, object]] = []

    async def get(self, key: str):
        self.commands.append("GET")
        return self.strings.get(key)

    async def set(self, key: str, value, ex: int | None = None):
        self.commands.append("SET")
        self.set_calls.append((key, value, ex))
        self.strings[key] = value
        return True

    async def zadd(self, key: str, scores: dict[str, float], ch: bool = False) -> int:
        self.commands.append("ZADD")
        return self._add(key, scores, ch)

    async def zrem(self, key: str, *members: str) -> int:
        self.commands.append("ZREM")
        zset = self.zsets.get(key, {})
        return sum(1 for m in members if zset.pop(m, None) is not None)

    async def zcard(self, key: str) -> int:
        self.commands.append("ZCARD")
        return len(self.zsets.get(key, {}))

    async def zrange(
        self, key: str, start: int, stop: int, rev: bool = False, withscores: bool = False
    ):
        self.commands.append("ZRANGE")
        self.zrange_calls.append({"rev": rev, "withscores": withscores})
        flat: list[object] = []
        for member, score in self._window(key, start, stop, rev=rev):
            flat.extend((member, str(score)))
        return flat

    async def zpopmin(self, key: str, count: int | None = None):
        self.commands.append("ZPOPMIN")
        return self._popmin(key)

    async def delete(self, *keys: str) -> int:
        self.commands.append("DEL")
        removed = 0
        for key in keys:
            if self.strings.pop(key, None) is not None:
                removed += 1
            if self.zsets.pop(key, None) is not None:
                removed += 1
        return removed


class RecordingMetrics:
    def __init__(self) -> None:
        self.counts: dict[str, int] = {}

    def incr(self, name: str, value: int = 1, *, tags=None) -> None:
        _ = tags
        self.counts[name] = self.counts.get(name, 0) + value


@pytest.fixture
def fake_redis() -> FakeAsyncRedis:
    return FakeAsyncRedis()


@pytest.fixture
def fake_upstash() -> FakeUpstashRedis:
    return FakeUpstashRedis()


@pytest.fixture
def metrics() -> RecordingMetrics:
    return RecordingMetrics()


@pytest.fixture(params=["redis", "upstash", "inmemory"])
def cache(request, metrics):
    """One client per backend shape; engine behavior must not depend on it."""
    if request.param == "redis":
        return init(redis=FakeAsyncRedis(), max_paginated_items=3, metrics=metrics)
    if request.param == "upstash":
        return init(upstash_redis=FakeUpstashRedis(), max_paginated_items=3, metrics=metrics)
    return init(backend=InMemoryStoreBackend(), max_paginated_items=3, metrics=metrics)
