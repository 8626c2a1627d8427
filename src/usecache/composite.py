"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Operations coupling the scalar cache with paginated lists.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .errors import UsageError
from .keys import default_item_key
from .paginated import PaginatedList
from .scalar import ScalarCache
from .types import OK, RefreshHandler
from .utils import is_number

logger = logging.getLogger("usecache.composite")


async def get_or_refresh_in_list(
    scalar: ScalarCache,
    paginated: PaginatedList,
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
    """
    Read-through access to an item that is also a member of a paginated list.

    The item is read with :meth:`ScalarCache.get_or_refresh` under `key`, or
    the default item key of the list. When a value is found, the resolved id
    is non-empty, `score` is positive and `update_score_in_list` is set, the
    member is re-scored so recently used items stay clear of eviction.
    Re-scoring is best effort: its failures are logged and the value is still
    returned.

    The id is `item_id`, or the ``"id"`` field of a mapping value.

    Raises:
        UsageError: If neither `key` nor `item_id` is given.
    """
    if not key and not item_id:
        raise UsageError("get_or_refresh_in_list(): key or item_id is required.")

    cache_key = key or default_item_key(list_key, item_id or "")
    value = await scalar.get_or_refresh(
        cache_key,
        expiry=expiry,
        force_refresh=force_refresh,
        parse_result=parse_result,
        refresh_handler=refresh_handler,
    )

    resolved_id = item_id
    if not resolved_id and isinstance(value, Mapping):
        resolved_id = value.get("id")

    if (
        value is not None
        and value
        and is_number(score)
        and score > 0
        and isinstance(resolved_id, str)
        and resolved_id
        and update_score_in_list
    ):
        try:
            status = await paginated.update_score(list_key, resolved_id, score)
        except Exception:
            logger.warning(
                "Score refresh failed for %s in %s", resolved_id, list_key, exc_info=True
            )
        else:
            if status != OK:
                logger.debug("Score refresh for %s in %s left list unchanged", resolved_id, list_key)

    return value
