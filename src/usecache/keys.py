"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache key formatting helpers.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def default_item_key(list_key: str, item_id: str) -> str:
    """Default cache key of an item that belongs to a paginated list."""
    return f"{list_key}:id:{item_id}"


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def generate_key_from_filters(filters: Mapping[str, Any] | None) -> str:
    """
    Build a cache key fragment from the filters of a database query.

    Entries are visited in mapping order; each contributes its capitalized
    name followed by its capitalized value. Falsy values contribute the name
    only. Values are formatted with ``str()``, so a whole-number float such
    as ``1.0`` contributes ``"1.0"`` rather than ``"1"``.

    Example::

        generate_key_from_filters({"limit": 1, "team": "team-id"})
        # "Limit1TeamTeam-id"
    """
    if not isinstance(filters, Mapping):
        return ""

    parts: list[str] = []
    for name, value in filters.items():
        parts.append(_capitalize_first(str(name)))
        if value:
            parts.append(_capitalize_first(str(value)))
    return "".join(parts)
