"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Read-through scalar cache over single string keys.
"""

from __future__ import annotations

import inspect
import json
import logging
from typing import Any

from .errors import ParseError, UsageError
from .metrics import CACHE_HIT, CACHE_MISS, CACHE_REFRESH, CACHE_SET_FAILED
from .store import StoreRef
from .types import ERROR, OK, RefreshHandler
from .utils import serialize_value

logger = logging.getLogger("usecache.scalar")


class ScalarCache:
    """Get-or-refresh and set operations keyed by a single string key."""

    def __init__(self, store: StoreRef) -> None:
        self._store = store

    async def get_or_refresh(
        self,
        key: str,
        *,
        expiry: int | None = None,
        force_refresh: bool = False,
        parse_result: bool = False,
        refresh_handler: RefreshHandler | None = None,
    ) -> Any:
        """
        Return the cached value of `key`, refreshing it on miss or on demand.

        When the stored value is empty (or `force_refresh` is set) and a
        `refresh_handler` is supplied, the handler result is written back and
        returned as produced, never as the re-parsed stored form.

        Args:
            key: Data cache key.
            expiry: Expiry in seconds applied on refresh; ignored unless > 0.
            force_refresh: Refresh even when a value is cached.
            parse_result: Decode a stored string as JSON before returning.
            refresh_handler: Async (or plain) producer of a fresh value.

        Returns:
            The value, or ``None`` when nothing is cached and no refresh ran.

        Raises:
            ParseError: If `parse_result` is set and the value is not JSON.
        """
        store = self._store
        res = await store.backend.get(key)

        if (not res or force_refresh) and callable(refresh_handler):
            value = refresh_handler()
            if inspect.isawaitable(value):
                value = await value
            await store.backend.set(key, serialize_value(value), expiry=expiry)
            store.metrics.incr(CACHE_REFRESH)
            logger.log(
                store.trace_level,
                "Refreshed cache key %s (forced=%s)",
                key,
                force_refresh,
            )
            return value

        if res is None:
            store.metrics.incr(CACHE_MISS)
            return None

        store.metrics.incr(CACHE_HIT)
        if parse_result and isinstance(res, str):
            try:
                return json.loads(res)
            except json.JSONDecodeError as exc:
                raise ParseError(f"get_or_refresh(): cannot parse value of '{key}'") from exc
        return res

    async def set(self, key: str, value: Any, *, expiry: int | None = None) -> str:
        """
        Write `value` under `key`; structured values are JSON encoded.

        Store failures are returned as the error message instead of raised,
        so callers compare the result against ``"OK"``.

        Raises:
            UsageError: If `value` is None.
        """
        if value is None:
            raise UsageError("set(): value should not be None.")

        store = self._store
        try:
            acknowledged = await store.backend.set(
                key, serialize_value(value), expiry=expiry
            )
        except Exception as exc:
            store.metrics.incr(CACHE_SET_FAILED)
            logger.warning("Cache set failed for key %s: %s", key, exc)
            return str(exc)

        if not acknowledged:
            store.metrics.incr(CACHE_SET_FAILED)
            return ERROR
        return OK
