#!/usr/bin/env python3
"""
Paginated list benchmark utility for insert/page latency characterization.

Usage examples:
  PYTHONPATH=src python scripts/list_benchmark.py --backend inmemory
  PYTHONPATH=src python scripts/list_benchmark.py --backend redis --redis-url redis://localhost:6379/0
"""

from __future__ import annotations

import argparse
import asyncio
import statistics
import time
import uuid

from usecache import InMemoryStoreBackend, init


def _percentile(samples: list[float], pct: float) -> float:
    if not samples:
        return 0.0
    return sorted(samples)[int(pct * (len(samples) - 1))]


async def run_benchmark(
    *,
    backend: str,
    num_items: int,
    max_items: int,
    page_size: int,
    redis_url: str | None,
) -> None:
    client = None
    if backend == "inmemory":
        cache = init(backend=InMemoryStoreBackend(), max_paginated_items=max_items)
    elif backend == "redis":
        if not redis_url:
            raise ValueError("--redis-url is required for redis backend")
        import redis.asyncio as redis

        client = redis.Redis.from_url(redis_url)
        cache = init(redis=client, max_paginated_items=max_items)
    else:
        raise ValueError(f"Unsupported backend: {backend}")

    list_key = f"bench:list:{uuid.uuid4().hex}"
    insert_latencies: list[float] = []
    page_latencies: list[float] = []

    started = time.time()
    for i in range(num_items):
        t0 = time.perf_counter()
        await cache.insert(list_key, f"item-{i}", i + 1)
        insert_latencies.append(time.perf_counter() - t0)

    pages = max(1, min(num_items, max_items) // max(page_size, 1))
    for page in range(1, pages + 1):
        t0 = time.perf_counter()
        await cache.get_page(list_key, page, page_size)
        page_latencies.append(time.perf_counter() - t0)
    elapsed = time.time() - started

    total = await cache.get_total_items(list_key)
    await cache.delete_list(list_key)
    if client is not None:
        await client.aclose()

    print(f"backend={backend}")
    print(f"items={num_items}")
    print(f"max_items={max_items}")
    print(f"final_total={total}")
    print(f"elapsed_s={elapsed:.3f}")
    print(f"insert_p50_ms={statistics.median(insert_latencies) * 1000:.3f}")
    print(f"insert_p95_ms={_percentile(insert_latencies, 0.95) * 1000:.3f}")
    print(f"page_p50_ms={statistics.median(page_latencies) * 1000:.3f}")
    print(f"page_p95_ms={_percentile(page_latencies, 0.95) * 1000:.3f}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Paginated list benchmark utility")
    parser.add_argument("--backend", choices=("inmemory", "redis"), default="inmemory")
    parser.add_argument("--num-items", type=int, default=2000)
    parser.add_argument("--max-items", type=int, default=500)
    parser.add_argument("--page-size", type=int, default=20)
    parser.add_argument("--redis-url", type=str, default=None)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    asyncio.run(
        run_benchmark(
            backend=args.backend,
            num_items=args.num_items,
            max_items=args.max_items,
            page_size=args.page_size,
            redis_url=args.redis_url,
        )
    )


if __name__ == "__main__":
    main()
