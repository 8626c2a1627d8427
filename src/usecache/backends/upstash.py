"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Store backend over a REST ``upstash_redis.asyncio`` client.
"""

from __future__ import annotations

from typing import Any

from ..utils import decode_text
from .base import StoreBackend, expiry_seconds, flatten_scored_rows


class UpstashStoreBackend(StoreBackend):
    """
    Backend for Upstash REST clients.

    Requires ``upstash_redis.asyncio`` (``pip install upstash-redis``). The
    REST client takes structured options (``rev=``, ``withscores=``) instead
    of dedicated reverse-range commands; replies are normalized to the same
    shapes as :class:`~usecache.backends.redis.RedisStoreBackend`.

    Args:
        upstash_redis: An ``upstash_redis.asyncio.Redis`` client instance.
    """

    backend_id = "upstash"

    def __init__(self, upstash_redis: Any) -> None:
        self._redis = upstash_redis

    @property
    def client(self) -> Any:
        return self._redis

    async def get(self, key: str) -> str | None:
        return decode_text(await self._redis.get(key))

    async def set(self, key: str, value: str | bytes, *, expiry: int | None = None) -> bool:
        ex = expiry_seconds(expiry)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        if ex is None:
            res = await self._redis.set(key, value)
        else:
            res = await self._redis.set(key, value, ex=ex)
        return res is True or res == "OK"

    async def zadd(self, key: str, member: str, score: float) -> int:
        return int(await self._redis.zadd(key, {member: score}, ch=True) or 0)

    async def zrem(self, key: str, member: str) -> int:
        return int(await self._redis.zrem(key, member) or 0)

    async def zcard(self, key: str) -> int:
        return int(await self._redis.zcard(key) or 0)

    async def zrange(
        self, key: str, start: int, stop: int, *, desc: bool = False
    ) -> list[Any]:
        rows = await self._redis.zrange(key, start, stop, rev=desc, withscores=True)
        return flatten_scored_rows(rows)

    async def zpopmin(self, key: str) -> list[Any]:
        return flatten_scored_rows(await self._redis.zpopmin(key))

    async def delete(self, key: str) -> int:
        return int(await self._redis.delete(key) or 0)
