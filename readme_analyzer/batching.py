from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Sequence, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

BatchCallback = Callable[[int, int, int], None]


async def process_in_batches(
    items: Sequence[T],
    batch_size: int,
    worker: Callable[[T], Awaitable[R]],
    on_batch_start: BatchCallback | None = None,
) -> list[R | None]:
    """Run ``worker`` over ``items`` in fixed-size concurrent batches.

    Batches run one after another; items inside a batch run concurrently.
    A worker that raises yields ``None`` for its item and does not affect the
    rest. Results come back in input order.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")

    async def _run_one(item: T) -> R | None:
        try:
            return await worker(item)
        except Exception as e:
            log.warning("Batch worker failed for %s: %s", item, str(e) or type(e).__name__)
            return None

    results: list[R | None] = []
    total = len(items)
    for start in range(0, total, batch_size):
        batch = items[start:start + batch_size]
        if on_batch_start:
            on_batch_start(start + 1, start + len(batch), total)
        results.extend(await asyncio.gather(*(_run_one(item) for item in batch)))
    return results
