"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Shared value types for cache and paginated list helpers.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

JsonPrimitive: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonPrimitive | list["JsonValue"] | dict[str, "JsonValue"]

MutationStatus = Literal["OK", "Error"]

RefreshHandler: TypeAlias = Callable[[], Awaitable[Any] | Any]

OK: MutationStatus = "OK"
ERROR: MutationStatus = "Error"


@dataclass(frozen=True, slots=True)
class Member:
    """One (id, score) pair of a paginated list."""

    id: str
    score: float


@dataclass(frozen=True, slots=True)
class ListRecord:
    """
    One record accepted by batch insertion.

    Attributes:
        id: Member id inside the list.
        score: Ordering score, must be >= 1.
        payload: Optional full record cached next to the list entry.
    """

    id: str
    score: float
    payload: dict[str, Any] | None = None

    def as_payload(self) -> dict[str, Any]:
        if self.payload is not None:
            return self.payload
        return {"id": self.id, "score": self.score}
