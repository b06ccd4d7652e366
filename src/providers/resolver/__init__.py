"""Pick resolver adapters.

One concrete implementation of IPickResolver (src/interfaces/pick_resolver.py):
    - TicketmasterPickResolver - keyword search over Discovery API attractions
"""

from src.providers.resolver.ticketmaster_resolver import TicketmasterPickResolver

__all__ = ["TicketmasterPickResolver"]
