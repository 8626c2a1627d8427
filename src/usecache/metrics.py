"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Metrics adapters for cache observability.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any, Protocol

logger = logging.getLogger("usecache.metrics")

CACHE_HIT = "cache_hit"
CACHE_MISS = "cache_miss"
CACHE_REFRESH = "cache_refresh"
CACHE_SET_FAILED = "cache_set_failed"
LIST_EVICTION = "list_eviction"

# (registry, namespace, name, label names) -> Counter
_COUNTERS: dict[tuple[Any, str, str, tuple[str, ...]], Any] = {}
_COUNTERS_LOCK = threading.Lock()


class CacheMetrics(Protocol):
    """Counter sink used by cache and list operations."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None: ...


class NoOpCacheMetrics:
    """Metrics sink that drops every counter."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        _ = name
        _ = value
        _ = tags


class PrometheusCacheMetrics:
    """
    Prometheus-backed cache metrics adapter.

    Requires `prometheus_client` package. Counters are shared per registry, so
    several clients in one process count into the same series. Recording
    errors are logged and never abort the cache operation.
    """

    def __init__(self, *, namespace: str = "usecache", registry=None) -> None:
        try:
            from prometheus_client import REGISTRY, Counter
        except ModuleNotFoundError as exc:  # pragma: no cover
            raise RuntimeError(
                "PrometheusCacheMetrics requires `prometheus_client` to be installed."
            ) from exc

        self._Counter = Counter
        self._namespace = namespace
        self._registry = registry if registry is not None else REGISTRY

    @property
    def namespace(self) -> str:
        return self._namespace

    def _counter(self, name: str, label_names: tuple[str, ...]) -> Any:
        key = (self._registry, self._namespace, name, label_names)
        with _COUNTERS_LOCK:
            counter = _COUNTERS.get(key)
            if counter is None:
                counter = self._Counter(
                    name=name,
                    documentation=f"usecache metric {name}",
                    namespace=self._namespace,
                    labelnames=label_names,
                    registry=self._registry,
                )
                _COUNTERS[key] = counter
        return counter

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        label_names = tuple(sorted((tags or {}).keys()))
        try:
            counter = self._counter(name, label_names)
            if label_names:
                label_values = [str((tags or {})[label]) for label in label_names]
                counter.labels(*label_values).inc(value)
            else:
                counter.inc(value)
        except ValueError as exc:
            logger.warning("Dropping metric %s_%s: %s", self._namespace, name, exc)
