"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache client facade binding one store reference to every operation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .backends import StoreBackend, create_backend_from_env
from .composite import get_or_refresh_in_list
from .keys import default_item_key, generate_key_from_filters
from .metrics import CacheMetrics, PrometheusCacheMetrics
from .paginated import PaginatedList
from .scalar import ScalarCache
from .settings import CacheSettings
from .store import StoreRef, create_store
from .types import ListRecord, Member, MutationStatus, RefreshHandler


class UseCache:
    """
    Read-through cache and paginated list helpers over one backing store.

    Quick start::

        from redis.asyncio import Redis
        from usecache import init

        cache = init(redis=Redis.from_url("redis://localhost:6379/0"), max_paginated_items=100)
        profile = await cache.get_or_refresh("user:1", refresh_handler=load_profile)
        await cache.insert("users", "1")
        ids = await cache.get_page("users", 1, 20)
    """

    def __init__(self, store: StoreRef) -> None:
        self._store = store
        self._scalar = ScalarCache(store)
        self._paginated = PaginatedList(store, self._scalar)

    @classmethod
    def from_env(
        cls,
        *,
        redis_client: Any | None = None,
        upstash_client: Any | None = None,
        metrics: CacheMetrics | None = None,
    ) -> "UseCache":
        """
        Build a client from `USECACHE_*` environment variables.

        ``USECACHE_METRICS=prometheus`` attaches Prometheus counters under
        ``USECACHE_METRICS_NAMESPACE`` unless `metrics` is given.
        """
        settings = CacheSettings.from_env()
        if settings.metrics not in ("none", "prometheus"):
            raise ValueError(f"Unknown USECACHE_METRICS: {settings.metrics}")
        if metrics is None and settings.metrics == "prometheus":
            metrics = PrometheusCacheMetrics(namespace=settings.metrics_namespace)
        backend = create_backend_from_env(
            redis_client=redis_client,
            upstash_client=upstash_client,
            backend=settings.backend,
        )
        return cls(
            create_store(
                backend=backend,
                max_paginated_items=settings.max_paginated_items,
                verbose=settings.verbose,
                metrics=metrics,
            )
        )

    @property
    def store(self) -> StoreRef:
        return self._store

    @property
    def backend(self) -> StoreBackend:
        return self._store.backend

    @property
    def max_paginated_items(self) -> int:
        return self._store.max_paginated_items

    # Scalar cache

    async def get_or_refresh(
        self,
        key: str,
        *,
        expiry: int | None = None,
        force_refresh: bool = False,
        parse_result: bool = False,
        refresh_handler: RefreshHandler | None = None,
    ) -> Any:
        return await self._scalar.get_or_refresh(
            key,
            expiry=expiry,
            force_refresh=force_refresh,
            parse_result=parse_result,
            refresh_handler=refresh_handler,
        )

    async def set(self, key: str, value: Any, *, expiry: int | None = None) -> str:
        return await self._scalar.set(key, value, expiry=expiry)

    # Paginated lists

    async def get_total_items(self, list_key: str) -> int:
        return await self._paginated.get_total_items(list_key)

    async def insert(
        self, list_key: str, item_id: str, score: float | None = None
    ) -> MutationStatus:
        return await self._paginated.insert(list_key, item_id, score)

    async def insert_many(
        self,
        list_key: str,
        records: Iterable[ListRecord | Mapping[str, Any]],
        *,
        cache_payload: bool = False,
        cache_prefix: str | None = None,
        payload_expiry: int | None = None,
    ) -> MutationStatus:
        return await self._paginated.insert_many(
            list_key,
            records,
            cache_payload=cache_payload,
            cache_prefix=cache_prefix,
            payload_expiry=payload_expiry,
        )

    async def get_page(
        self, list_key: str, page: int, size_per_page: int, *, ascending: bool = False
    ) -> list[str]:
        return await self._paginated.get_page(
            list_key, page, size_per_page, ascending=ascending
        )

    async def get_page_with_scores(
        self, list_key: str, page: int, size_per_page: int, *, ascending: bool = False
    ) -> list[Member]:
        return await self._paginated.get_page_with_scores(
            list_key, page, size_per_page, ascending=ascending
        )

    async def remove(self, list_key: str, item_id: str) -> MutationStatus:
        return await self._paginated.remove(list_key, item_id)

    async def update_score(
        self, list_key: str, item_id: str, score: float
    ) -> MutationStatus:
        return await self._paginated.update_score(list_key, item_id, score)

    async def delete_list(self, list_key: str) -> int:
        return await self._paginated.delete_list(list_key)

    # Composite

    async def get_or_refresh_in_list(
        self,
        list_key: str,
        *,
        item_id: str | None = None,
        key: str | None = None,
        score: float | None = None,
        update_score_in_list: bool = False,
        expiry: int | None = None,
        force_refresh: bool = False,
        parse_result: bool = False,
        refresh_handler: RefreshHandler | None = None,
    ) -> Any:
        return await get_or_refresh_in_list(
            self._scalar,
            self._paginated,
            list_key,
            item_id=item_id,
            key=key,
            score=score,
            update_score_in_list=update_score_in_list,
            expiry=expiry,
            force_refresh=force_refresh,
            parse_result=parse_result,
            refresh_handler=refresh_handler,
        )

    @staticmethod
    def default_item_key(list_key: str, item_id: str) -> str:
        return default_item_key(list_key, item_id)

    @staticmethod
    def generate_key_from_filters(filters: Mapping[str, Any] | None) -> str:
        return generate_key_from_filters(filters)


def init(
    *,
    redis: Any | None = None,
    upstash_redis: Any | None = None,
    backend: StoreBackend | None = None,
    max_paginated_items: int | None = None,
    verbose: bool = False,
    metrics: CacheMetrics | None = None,
    prometheus: bool = False,
) -> UseCache:
    """
    Required initial call from the start of your app.

    Args:
        redis: (optional) Your ``redis.asyncio`` client.
        upstash_redis: (optional) Your ``upstash_redis.asyncio`` client.
        backend: (optional) A ready :class:`StoreBackend`.
        max_paginated_items: Maximum items per list before eviction starts.
            Omitted or non-positive values use the library default.
        verbose: Log operation traces at INFO instead of DEBUG.
        metrics: Counter sink; ``prometheus=True`` builds a Prometheus one.

    Raises:
        ConfigurationError: If no store handle is given.
    """
    if metrics is None and prometheus:
        metrics = PrometheusCacheMetrics()
    return UseCache(
        create_store(
            redis=redis,
            upstash_redis=upstash_redis,
            backend=backend,
            max_paginated_items=max_paginated_items,
            verbose=verbose,
            metrics=metrics,
        )
    )
