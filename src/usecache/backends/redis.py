"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Store backend over a direct-protocol ``redis.asyncio`` client.
"""

from __future__ import annotations

from typing import Any

from ..utils import decode_text
from .base import StoreBackend, expiry_seconds, flatten_scored_rows


class RedisStoreBackend(StoreBackend):
    """
    Backend for ``redis.asyncio.Redis`` clients.

    Requires ``redis.asyncio`` (``pip install redis``). Works with clients
    created with or without ``decode_responses``.

    Args:
        redis: An ``redis.asyncio.Redis`` client instance.
    """

    backend_id = "redis"

    def __init__(self, redis: Any) -> None:
        self._redis = redis

    @property
    def client(self) -> Any:
        return self._redis

    async def get(self, key: str) -> str | None:
        return decode_text(await self._redis.get(key))

    async def set(self, key: str, value: str | bytes, *, expiry: int | None = None) -> bool:
        ex = expiry_seconds(expiry)
        if ex is None:
            res = await self._redis.set(key, value)
        else:
            res = await self._redis.set(key, value, ex=ex)
        return bool(res)

    async def zadd(self, key: str, member: str, score: float) -> int:
        return int(await self._redis.zadd(key, {member: score}, ch=True))

    async def zrem(self, key: str, member: str) -> int:
        return int(await self._redis.zrem(key, member))

    async def zcard(self, key: str) -> int:
        return int(await self._redis.zcard(key))

    async def zrange(
        self, key: str, start: int, stop: int, *, desc: bool = False
    ) -> list[Any]:
        if desc:
            rows = await self._redis.zrevrange(key, start, stop, withscores=True)
        else:
            rows = await self._redis.zrange(key, start, stop, withscores=True)
        return flatten_scored_rows(rows)

    async def zpopmin(self, key: str) -> list[Any]:
        return flatten_scored_rows(await self._redis.zpopmin(key))

    async def delete(self, key: str) -> int:
        return int(await self._redis.delete(key))
