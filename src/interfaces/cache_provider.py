"""Abstract base class for cache service providers.

Used for the options catalog and for read-through caching of event pools.
Besides plain get/set, a cache must offer :meth:`get_or_load`, which
coalesces concurrent misses for one key into a single loader call
(single-flight), so a cold catalog is fetched once even when many
requests arrive together.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    All operations are async to allow for network-backed stores (e.g. Redis)
    without blocking the event loop.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value under *key*, or ``None`` if missing or expired."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* for the cache's configured TTL."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove *key*; a no-op if absent."""

    @abstractmethod
    async def get_or_load(
        self,
        key: str,
        loader: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Return the cached value, loading it once on a miss.

        Parameters
        ----------
        key:
            The cache key.
        loader:
            Zero-argument coroutine factory producing the value.  If it
            raises, nothing is cached and every waiter sees the exception.
        """
