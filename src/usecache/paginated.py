"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Score-ordered paginated lists backed by sorted sets.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from .errors import UsageError
from .keys import default_item_key
from .metrics import LIST_EVICTION
from .scalar import ScalarCache
from .store import StoreRef
from .types import ERROR, OK, ListRecord, Member, MutationStatus
from .utils import is_number, now_ms

logger = logging.getLogger("usecache.paginated")


def _parse_window(flat: list[Any]) -> list[Member]:
    """Parse alternating id/score rows, dropping empty ids and bad scores."""
    members: list[Member] = []
    for i in range(0, len(flat) - 1, 2):
        raw_id, raw_score = flat[i], flat[i + 1]
        item_id = raw_id.decode("utf-8") if isinstance(raw_id, bytes) else f"{raw_id or ''}"
        try:
            score = float(raw_score)
        except (TypeError, ValueError):
            continue
        if not item_id or math.isnan(score):
            continue
        members.append(Member(id=item_id, score=score))
    return members


def _record_fields(record: ListRecord | Mapping[str, Any]) -> tuple[Any, Any, Any]:
    """Return (id, score, payload) for a batch record."""
    if isinstance(record, ListRecord):
        return record.id, record.score, record.as_payload()
    if isinstance(record, Mapping):
        return record.get("id"), record.get("score"), dict(record)
    raise UsageError("insert_many(): records must be mappings or ListRecord values")


class PaginatedList:
    """
    Sorted-set backed ordered collection with a bounded size.

    Higher scores sort first by default. Insertions at capacity evict the
    lowest-scored member before writing. Each operation is a sequence of
    independent round trips, so concurrent writers to the same list can
    briefly overshoot the bound.
    """

    def __init__(self, store: StoreRef, scalar: ScalarCache | None = None) -> None:
        self._store = store
        self._scalar = scalar or ScalarCache(store)

    async def get_total_items(self, list_key: str) -> int:
        """Fetch total items in a list."""
        return int(await self._store.backend.zcard(list_key))

    async def insert(
        self, list_key: str, item_id: str, score: float | None = None
    ) -> MutationStatus:
        """
        Insert or re-score one item, evicting the lowest score at capacity.

        The capacity check counts current members only, so re-inserting an id
        that is already in a full list still evicts the lowest member and the
        list ends one short of the bound.

        Args:
            list_key: Your list's cache key.
            item_id: Member id.
            score: Ordering score; defaults to the current epoch milliseconds.

        Returns:
            ``"OK"`` when the store acknowledges the write, ``"Error"`` otherwise.

        Raises:
            UsageError: If `score` is negative or not a number.
        """
        if score is not None and (not is_number(score) or score < 0):
            raise UsageError("insert(): Invalid score.")

        store = self._store
        total = await self.get_total_items(list_key)
        score_to_use = now_ms() if score is None else score

        # if number of items limit reached
        # evict least recently used data
        if total >= store.max_paginated_items:
            evicted = await store.backend.zpopmin(list_key)
            store.metrics.incr(LIST_EVICTION)
            logger.log(
                store.trace_level,
                "Evicted %s from %s (total=%d, max=%d)",
                evicted[0] if evicted else None,
                list_key,
                total,
                store.max_paginated_items,
            )

        response = await store.backend.zadd(list_key, item_id, score_to_use)
        if response > 0:
            return OK
        return ERROR

    async def insert_many(
        self,
        list_key: str,
        records: Iterable[ListRecord | Mapping[str, Any]],
        *,
        cache_payload: bool = False,
        cache_prefix: str | None = None,
        payload_expiry: int | None = None,
    ) -> MutationStatus:
        """
        Insert a batch of records, optionally caching each full payload.

        Every id and score is validated before the first write. Payloads are
        cached under ``<cache_prefix><id>`` or the default item key of the list.

        Returns:
            ``"Error"`` for an empty batch, ``"OK"`` otherwise.

        Raises:
            UsageError: If any record has a missing or empty id, or a missing,
                non-numeric or < 1 score.
        """
        rows = [_record_fields(record) for record in records]
        if not rows:
            return ERROR

        for item_id, score, _ in rows:
            if not isinstance(item_id, str) or not item_id:
                raise UsageError(f"insert_many(): invalid id '{item_id}'")
            if not is_number(score) or score < 1:
                raise UsageError(f"insert_many(): invalid score for id '{item_id}'")

        for item_id, score, payload in rows:
            await self.insert(list_key, item_id, score)

            if cache_payload:
                key = (
                    f"{cache_prefix}{item_id}"
                    if isinstance(cache_prefix, str) and cache_prefix
                    else default_item_key(list_key, item_id)
                )
                status = await self._scalar.set(key, payload, expiry=payload_expiry)
                if status != OK:
                    logger.warning("Payload cache write failed for %s: %s", key, status)

        return OK

    async def get_page_with_scores(
        self,
        list_key: str,
        page: int,
        size_per_page: int,
        *,
        ascending: bool = False,
    ) -> list[Member]:
        """
        Return one page of members with their scores.

        Pages are 1-indexed. The window is sorted by score in the requested
        direction, highest first by default.

        Raises:
            UsageError: If `page` is lower than 1.
        """
        if page < 1:
            raise UsageError("get_page(): page starts at 1.")
        if size_per_page <= 0:
            return []

        start = (page - 1) * size_per_page
        end = start + size_per_page - 1
        flat = await self._store.backend.zrange(list_key, start, end, desc=not ascending)
        if not flat:
            return []

        return sorted(_parse_window(flat), key=lambda m: m.score, reverse=not ascending)

    async def get_page(
        self,
        list_key: str,
        page: int,
        size_per_page: int,
        *,
        ascending: bool = False,
    ) -> list[str]:
        """Get the ids of one page of the list."""
        members = await self.get_page_with_scores(
            list_key, page, size_per_page, ascending=ascending
        )
        return [member.id for member in members]

    async def remove(self, list_key: str, item_id: str) -> MutationStatus:
        """Remove item from the list."""
        if not item_id:
            raise UsageError("remove(): Invalid id.")

        response = await self._store.backend.zrem(list_key, item_id)
        if response > 0:
            return OK
        return ERROR

    async def update_score(
        self, list_key: str, item_id: str, score: float
    ) -> MutationStatus:
        """
        Update the score of an item to move it up or down in the order.

        Unlike :meth:`insert`, no eviction is performed.
        """
        if not item_id:
            raise UsageError("update_score(): Invalid id.")
        if not is_number(score) or score < 0:
            raise UsageError("update_score(): Invalid score.")

        response = await self._store.backend.zadd(list_key, item_id, score)
        if response > 0:
            return OK
        return ERROR

    async def delete_list(self, list_key: str) -> int:
        """Hard delete the list and all its members."""
        deleted = await self._store.backend.delete(list_key)
        logger.log(self._store.trace_level, "Deleted paginated list %s", list_key)
        return deleted
