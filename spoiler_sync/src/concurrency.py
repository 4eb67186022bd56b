"""
Bounded async fan-out over an ordered sequence.
"""

import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def bounded_map(
    items: Iterable[T],
    worker: Callable[[T], Awaitable[R]],
    limit: Optional[int] = None
) -> List[R]:
    """
    Run worker over items with at most `limit` calls in flight.

    Results line up with the input order regardless of completion order.
    The first failure cancels all outstanding calls and is re-raised.

    Args:
        items: Inputs, processed in order of submission
        worker: Async function applied to each input
        limit: Maximum simultaneous calls (None = unbounded)

    Returns:
        One result per input, in input order

    Raises:
        ValueError: If limit is less than 1
    """
    if limit is not None and limit < 1:
        raise ValueError(f"Concurrency limit must be at least 1 (got {limit})")

    items = list(items)
    if not items:
        return []

    semaphore = asyncio.Semaphore(limit or len(items))

    async def run(item: T) -> R:
        async with semaphore:
            return await worker(item)

    tasks = [asyncio.ensure_future(run(item)) for item in items]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        # Let cancelled tasks unwind before the failure propagates
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
