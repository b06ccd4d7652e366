"""Public interface definitions for all external collaborators.

The matching engine never talks to the network.  Everything outside it --
event fetching, name resolution, caching -- is reached through the
abstract base classes defined here, with concrete adapters injected at
startup in ``src/main.py``.

CONCRETE PROVIDER MAP:
    Interface         →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────
    IEventProvider    →  TicketmasterEventProvider
    IPickResolver     →  TicketmasterPickResolver
    IAttractionDirectory → TicketmasterPickResolver
    ICacheProvider    →  MemoryCacheProvider
"""

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.event_provider import FetchErr, FetchOk, FetchResult, IEventProvider
from src.interfaces.pick_resolver import IAttractionDirectory, IPickResolver, ResolvedEntity

__all__ = [
    "FetchErr",
    "FetchOk",
    "FetchResult",
    "IAttractionDirectory",
    "ICacheProvider",
    "IEventProvider",
    "IPickResolver",
    "ResolvedEntity",
]
