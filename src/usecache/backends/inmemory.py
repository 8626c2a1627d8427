"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

In-process store backend for development and tests.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

from .base import StoreBackend, expiry_seconds


@dataclass(frozen=True, slots=True)
class _StringRow:
    value: str | bytes
    expires_at_s: float | None = None


class InMemoryStoreBackend(StoreBackend):
    """
    Process-local backend suitable for development/test workloads.

    Mirrors Redis semantics for the command subset in use: inclusive
    range windows with negative index support, ``(score, member)`` ordering,
    and lazy expiry of string keys. Data is lost on process restart.
    """

    backend_id = "inmemory"

    def __init__(self) -> None:
        self._strings: dict[str, _StringRow] = {}
        self._zsets: dict[str, dict[str, float]] = {}

    def _now(self) -> float:
        """Return wall-clock timestamp used for expiry checks."""
        return time.time()

    def _live_row(self, key: str) -> _StringRow | None:
        row = self._strings.get(key)
        if row is None:
            return None
        if row.expires_at_s is not None and row.expires_at_s <= self._now():
            self._strings.pop(key, None)
            return None
        return row

    async def get(self, key: str) -> str | None:
        row = self._live_row(key)
        if row is None:
            return None
        if isinstance(row.value, bytes):
            return row.value.decode("utf-8")
        return row.value

    async def set(self, key: str, value: str | bytes, *, expiry: int | None = None) -> bool:
        ex = expiry_seconds(expiry)
        expires_at = None if ex is None else self._now() + ex
        self._strings[key] = _StringRow(value=value, expires_at_s=expires_at)
        return True

    async def zadd(self, key: str, member: str, score: float) -> int:
        zset = self._zsets.setdefault(key, {})
        previous = zset.get(member)
        zset[member] = float(score)
        return 1 if previous is None or previous != float(score) else 0

    async def zrem(self, key: str, member: str) -> int:
        zset = self._zsets.get(key)
        if not zset or member not in zset:
            return 0
        del zset[member]
        if not zset:
            self._zsets.pop(key, None)
        return 1

    async def zcard(self, key: str) -> int:
        return len(self._zsets.get(key, {}))

    async def zrange(
        self, key: str, start: int, stop: int, *, desc: bool = False
    ) -> list[Any]:
        ordered = self._ordered(key, desc=desc)
        size = len(ordered)
        if start < 0:
            start += size
        if stop < 0:
            stop += size
        start = max(start, 0)
        stop = min(stop, size - 1)
        if size == 0 or start > stop:
            return []
        flat: list[Any] = []
        for member, score in ordered[start : stop + 1]:
            flat.extend((member, score))
        return flat

    async def zpopmin(self, key: str) -> list[Any]:
        ordered = self._ordered(key, desc=False)
        if not ordered:
            return []
        member, score = ordered[0]
        await self.zrem(key, member)
        return [member, score]

    async def delete(self, key: str) -> int:
        removed = 0
        if self._live_row(key) is not None:
            del self._strings[key]
            removed += 1
        if self._zsets.pop(key, None) is not None:
            removed += 1
        return removed

    def _ordered(self, key: str, *, desc: bool) -> list[tuple[str, float]]:
        rows = sorted(
            self._zsets.get(key, {}).items(), key=lambda item: (item[1], item[0])
        )
        if desc:
            rows.reverse()
        return rows
