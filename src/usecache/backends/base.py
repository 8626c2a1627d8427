"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Store backend protocol shared by every cache helper.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StoreBackend(Protocol):
    """
    Minimal command surface consumed by the cache and list helpers.

    Every backend returns the same shapes regardless of the client it wraps:
    decoded strings, integer acknowledgments, and flat alternating
    ``[member, score, ...]`` sequences for sorted-set windows.
    """

    backend_id: str

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str | bytes, *, expiry: int | None = None) -> bool: ...

    async def zadd(self, key: str, member: str, score: float) -> int: ...

    async def zrem(self, key: str, member: str) -> int: ...

    async def zcard(self, key: str) -> int: ...

    async def zrange(
        self, key: str, start: int, stop: int, *, desc: bool = False
    ) -> list[Any]: ...

    async def zpopmin(self, key: str) -> list[Any]: ...

    async def delete(self, key: str) -> int: ...


def expiry_seconds(expiry: Any) -> int | None:
    """Return a positive integer expiry, or None when no expiry applies."""
    if isinstance(expiry, bool) or not isinstance(expiry, (int, float)):
        return None
    if expiry <= 0:
        return None
    return int(expiry)


def flatten_scored_rows(rows: Any) -> list[Any]:
    """
    Normalize sorted-set WITHSCORES replies into a flat alternating list.

    Clients reply either with ``(member, score)`` pairs or already flat lists.
    """
    if not rows:
        return []
    flat: list[Any] = []
    for row in rows:
        if isinstance(row, (tuple, list)) and len(row) == 2:
            member, score = row
            flat.append(member.decode("utf-8") if isinstance(member, bytes) else member)
            flat.append(score)
        else:
            flat.append(row.decode("utf-8") if isinstance(row, bytes) else row)
    return flat
