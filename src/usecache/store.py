"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Immutable store reference shared by every cache component.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .backends import StoreBackend, resolve_backend
from .metrics import CacheMetrics, NoOpCacheMetrics
from .settings import resolve_max_paginated_items


@dataclass(frozen=True, slots=True)
class StoreRef:
    """
    Configuration record built once at startup and read by every operation.

    Attributes:
        backend: Selected store backend.
        max_paginated_items: Upper bound on members per paginated list.
        verbose: Promote operation traces from DEBUG to INFO.
        metrics: Counter sink for hits, misses, refreshes and evictions.
    """

    backend: StoreBackend
    max_paginated_items: int
    verbose: bool = False
    metrics: CacheMetrics = field(default_factory=NoOpCacheMetrics)

    @property
    def trace_level(self) -> int:
        return logging.INFO if self.verbose else logging.DEBUG


def create_store(
    *,
    redis: Any | None = None,
    upstash_redis: Any | None = None,
    backend: StoreBackend | None = None,
    max_paginated_items: int | None = None,
    verbose: bool = False,
    metrics: CacheMetrics | None = None,
) -> StoreRef:
    """
    Build the store reference, failing fast when no store handle is given.

    Raises:
        ConfigurationError: If neither client handle nor backend is present.
    """
    return StoreRef(
        backend=resolve_backend(redis=redis, upstash_redis=upstash_redis, backend=backend),
        max_paginated_items=resolve_max_paginated_items(max_paginated_items),
        verbose=verbose,
        metrics=metrics if metrics is not None else NoOpCacheMetrics(),
    )
