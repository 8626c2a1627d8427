"""
recent_users.py: Bounded "recently viewed" list with cached profiles.

Demonstrates batch insertion with payload caching, page reads, and
read-through access that refreshes a member's recency score.

Usage:
    export USECACHE_REDIS_URL=redis://localhost:6379/0
    python examples/recent_users.py
"""

from usecache import UseCache, generate_key_from_filters, now_ms

LIST_KEY = "recent-users" + generate_key_from_filters({"team": "core", "limit": 50})


async def load_profile(user_id: str) -> dict:
    return {"id": user_id, "name": f"User {user_id}"}


async def main() -> None:
    cache = UseCache.from_env()

    await cache.insert_many(
        LIST_KEY,
        [{"id": f"u{i}", "score": i, "name": f"User u{i}"} for i in range(1, 6)],
        cache_payload=True,
        payload_expiry=3600,
    )

    profile = await cache.get_or_refresh_in_list(
        LIST_KEY,
        item_id="u1",
        parse_result=True,
        score=now_ms(),
        update_score_in_list=True,
        refresh_handler=lambda: load_profile("u1"),
    )
    print(profile)
    print(await cache.get_page(LIST_KEY, 1, 3))


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
