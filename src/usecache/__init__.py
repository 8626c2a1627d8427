"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Read-through caching and bounded paginated lists over Redis-compatible stores.

Quick start::

    from redis.asyncio import Redis
    from usecache import init

    cache = init(redis=Redis.from_url("redis://localhost:6379/0"))
    await cache.insert_many(
        "users",
        [{"id": "u1", "score": 10, "name": "Ada"}],
        cache_payload=True,
    )
    user = await cache.get_or_refresh_in_list(
        "users", item_id="u1", parse_result=True, score=11, update_score_in_list=True
    )
"""

from .backends import (
    InMemoryStoreBackend,
    RedisStoreBackend,
    StoreBackend,
    UpstashStoreBackend,
    create_backend_from_env,
    resolve_backend,
)
from .client import UseCache, init
from .composite import get_or_refresh_in_list
from .errors import ConfigurationError, ParseError, UsageError, UseCacheError
from .keys import default_item_key, generate_key_from_filters
from .metrics import CacheMetrics, NoOpCacheMetrics, PrometheusCacheMetrics
from .paginated import PaginatedList
from .scalar import ScalarCache
from .settings import DEFAULT_MAX_PAGINATED_ITEMS, CacheSettings
from .store import StoreRef, create_store
from .types import ERROR, OK, ListRecord, Member, MutationStatus
from .utils import now_ms

__all__ = [
    "init",
    "UseCache",
    "StoreRef",
    "create_store",
    "CacheSettings",
    "DEFAULT_MAX_PAGINATED_ITEMS",
    "ScalarCache",
    "PaginatedList",
    "get_or_refresh_in_list",
    "default_item_key",
    "generate_key_from_filters",
    "StoreBackend",
    "RedisStoreBackend",
    "UpstashStoreBackend",
    "InMemoryStoreBackend",
    "resolve_backend",
    "create_backend_from_env",
    "CacheMetrics",
    "NoOpCacheMetrics",
    "PrometheusCacheMetrics",
    "UseCacheError",
    "ConfigurationError",
    "UsageError",
    "ParseError",
    "Member",
    "ListRecord",
    "MutationStatus",
    "OK",
    "ERROR",
    "now_ms",
]
