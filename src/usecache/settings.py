"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache helper settings and explicit config loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MAX_PAGINATED_ITEMS = 100


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True, slots=True)
class CacheSettings:
    """Explicit settings used when building a cache client."""

    backend: str = "redis"
    max_paginated_items: int = DEFAULT_MAX_PAGINATED_ITEMS
    verbose: bool = False
    metrics: str = "none"
    metrics_namespace: str = "usecache"

    @staticmethod
    def from_env() -> "CacheSettings":
        """Load settings from environment variables."""
        return CacheSettings(
            backend=os.getenv("USECACHE_BACKEND", "redis").strip().lower(),
            max_paginated_items=resolve_max_paginated_items(
                int(
                    os.getenv(
                        "USECACHE_MAX_PAGINATED_ITEMS",
                        str(DEFAULT_MAX_PAGINATED_ITEMS),
                    )
                )
            ),
            verbose=_env_flag("USECACHE_VERBOSE"),
            metrics=os.getenv("USECACHE_METRICS", "none").strip().lower(),
            metrics_namespace=os.getenv("USECACHE_METRICS_NAMESPACE", "usecache"),
        )


def resolve_max_paginated_items(value: int | None) -> int:
    """Fall back to the library default for omitted or non-positive bounds."""
    if value is None or isinstance(value, bool) or value <= 0:
        return DEFAULT_MAX_PAGINATED_ITEMS
    return int(value)
