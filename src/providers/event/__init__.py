"""Event provider adapters.

One concrete implementation of IEventProvider (src/interfaces/event_provider.py):
    - TicketmasterEventProvider - Discovery API ``events.json``, one page per pick

Failures come back as FetchErr values rather than exceptions, so a pick
whose fetch failed simply contributes an empty pool to matching.
"""

from src.providers.event.ticketmaster_provider import TicketmasterEventProvider

__all__ = ["TicketmasterEventProvider"]
