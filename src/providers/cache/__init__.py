"""Cache providers.

In-memory TTL cache used for the options catalog (rebuilt at most once per
TTL window, with concurrent misses coalesced into one load) and, when
enabled, for raw event pools keyed by query parameters.

MemoryCacheProvider is per-process. For multi-worker deployments, swap in
a shared adapter implementing ICacheProvider without changing any
business logic.
"""

from src.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
