"""Bounded fan-out for provider calls.

The search service resolves up to three picks and then fetches up to three
event pools.  Those calls run concurrently but behind a semaphore so a
burst of searches does not trip the provider's per-second quota.

``throttled_gather`` is a drop-in replacement for ``asyncio.gather`` that
wraps each awaitable in a semaphore acquire/release.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

_T = TypeVar("_T")

# Ticketmaster's Discovery API allows 5 requests/second per key.
_PROVIDER_CONCURRENCY = 5


def provider_semaphore(limit: int = _PROVIDER_CONCURRENCY) -> asyncio.Semaphore:
    """Build the semaphore shared by one service instance's provider calls."""
    return asyncio.Semaphore(limit)


async def throttled_gather(
    coros: list[Awaitable[_T]],
    semaphore: asyncio.Semaphore,
    return_exceptions: bool = False,
) -> list[_T | BaseException]:
    """Run awaitables concurrently with semaphore throttling.

    Parameters
    ----------
    coros:
        Awaitable objects to execute concurrently.
    semaphore:
        Semaphore bounding how many run at once.
    return_exceptions:
        Mirrors ``asyncio.gather`` semantics.

    Returns
    -------
    list
        Results in the same order as the input coroutines.
    """

    async def _wrapped(coro: Awaitable[_T]) -> _T:
        async with semaphore:
            return await coro

    tasks = [_wrapped(c) for c in coros]
    return await asyncio.gather(*tasks, return_exceptions=return_exceptions)
