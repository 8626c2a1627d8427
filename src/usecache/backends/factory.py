"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Backend selection and environment-driven construction helpers.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from ..errors import ConfigurationError
from .base import StoreBackend
from .inmemory import InMemoryStoreBackend
from .redis import RedisStoreBackend
from .upstash import UpstashStoreBackend

logger = logging.getLogger("usecache.backends.factory")


def _env_first(*names: str, default: str | None = None) -> str | None:
    """
    Return the first non-empty environment variable in `names`.

    Args:
        *names: Environment variable names to check in order.
        default: Value returned if no non-empty variable is found.
    """
    for name in names:
        raw = os.getenv(name)
        if raw is None:
            continue
        value = raw.strip()
        if value:
            return value
    return default


def resolve_backend(
    *,
    redis: Any | None = None,
    upstash_redis: Any | None = None,
    backend: StoreBackend | None = None,
) -> StoreBackend:
    """
    Select the store backend from the configured client handles.

    Precedence is an explicit ``backend``, then the ``redis`` client, then the
    ``upstash_redis`` client.

    Raises:
        ConfigurationError: If no handle is present.
    """
    supplied = [h for h in (backend, redis, upstash_redis) if h is not None]
    if not supplied:
        raise ConfigurationError("Missing redis instance")
    if len(supplied) > 1:
        logger.warning(
            "Multiple store handles configured; using %s",
            "backend" if backend is not None else "redis",
        )
    if backend is not None:
        return backend
    if redis is not None:
        return RedisStoreBackend(redis)
    return UpstashStoreBackend(upstash_redis)


def _redis_url_from_env() -> str:
    url = _env_first("USECACHE_REDIS_URL", "REDIS_URL")
    if url:
        return url
    host = _env_first("USECACHE_REDIS_HOST", default="localhost") or "localhost"
    port = _env_first("USECACHE_REDIS_PORT", default="6379") or "6379"
    db = _env_first("USECACHE_REDIS_DB", default="0") or "0"
    password = _env_first("USECACHE_REDIS_PASSWORD", default="") or ""
    if password:
        return f"redis://:{password}@{host}:{port}/{db}"
    return f"redis://{host}:{port}/{db}"


def create_backend_from_env(
    *,
    redis_client: Any | None = None,
    upstash_client: Any | None = None,
    backend: str | None = None,
) -> StoreBackend:
    """
    Create a store backend from `USECACHE_*` environment variables.

    Backends:
    - `redis` (default)
    - `upstash`
    - `inmemory`

    Injected clients are used when supplied; otherwise a client is built from
    `USECACHE_REDIS_URL` (or host/port/db/password variables) for Redis, and
    from `USECACHE_UPSTASH_URL`/`USECACHE_UPSTASH_TOKEN` (or the standard
    `UPSTASH_REDIS_REST_*` variables) for Upstash.
    """
    name = (backend or os.getenv("USECACHE_BACKEND", "redis")).strip().lower()

    if name in ("mem", "memory", "inmemory", "in_memory"):
        return InMemoryStoreBackend()

    if name in ("redis", "ioredis"):
        client = redis_client
        if client is None:
            try:
                import redis.asyncio as redis
            except ModuleNotFoundError as exc:  # pragma: no cover
                raise RuntimeError(
                    "Redis backend requires `redis` to be installed."
                ) from exc
            client = redis.Redis.from_url(_redis_url_from_env())
        return RedisStoreBackend(client)

    if name in ("upstash", "rest"):
        client = upstash_client
        if client is None:
            url = _env_first("USECACHE_UPSTASH_URL", "UPSTASH_REDIS_REST_URL")
            token = _env_first("USECACHE_UPSTASH_TOKEN", "UPSTASH_REDIS_REST_TOKEN")
            if not url or not token:
                raise ConfigurationError(
                    "Upstash backend requires USECACHE_UPSTASH_URL and USECACHE_UPSTASH_TOKEN"
                )
            try:
                from upstash_redis.asyncio import Redis as UpstashRedis
            except ModuleNotFoundError as exc:  # pragma: no cover
                raise RuntimeError(
                    "Upstash backend requires `upstash-redis` to be installed."
                ) from exc
            client = UpstashRedis(url=url, token=token)
        return UpstashStoreBackend(client)

    raise ValueError(f"Unknown USECACHE_BACKEND: {name}")
