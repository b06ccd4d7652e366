"""Event identity keys and order-preserving deduplication.

The same show reaches the engine several times: paged fetches overlap,
a co-billed concert appears in both artists' pools, a team's home game is
listed under both teams.  Every event gets a stable identity key and
:func:`dedupe` keeps the first event per key.

Key derivation:

1. Provider id present  -> ``id:<providerId>``
2. Otherwise            -> ``evt:<title>|<date>|<time>|<venue identity>``
   where the venue identity is the venue id, or the venue name plus city.

In slot-sensitive mode the key gets a ``#<slot>`` suffix so that two slots
holding the same pick keep separate copies of each event.
"""

from __future__ import annotations

from datetime import date, time
from typing import Iterable

from src.models.event import Event, Venue
from src.models.pick import Slot
from src.utils.text_normalizer import normalize_label, normalize_title


def identity_key(
    provider_id: str | None,
    name: str,
    local_date: date,
    local_time: time | None,
    venue: Venue,
    slot: Slot | None = None,
) -> str:
    """Derive the dedup identity for one event.

    Parameters
    ----------
    provider_id:
        Provider-assigned event id; preferred whenever present.
    name, local_date, local_time, venue:
        Composite fallback when the provider gave no id.
    slot:
        When given, the key is suffixed with the slot (slot-sensitive dedup).
    """
    if provider_id:
        key = f"id:{provider_id}"
    else:
        if venue.id:
            venue_part = f"v:{venue.id}"
        else:
            venue_part = f"{normalize_label(venue.name)}|{normalize_label(venue.city)}"
        time_part = local_time.isoformat() if local_time is not None else ""
        key = f"evt:{normalize_title(name)}|{local_date.isoformat()}|{time_part}|{venue_part}"

    if slot is not None:
        key = f"{key}#{slot.value}"
    return key


def dedupe(events: Iterable[Event]) -> list[Event]:
    """Collapse events sharing an identity key, first occurrence wins.

    When a dropped duplicate was produced by a different pick than the
    survivor, the survivor is replaced by a copy crediting that pick too, so
    coverage counts a co-billed show for both picks while listing it once.

    Order is preserved and the function is idempotent.
    """
    kept: dict[str, Event] = {}
    for event in events:
        survivor = kept.get(event.identity_key)
        if survivor is None:
            kept[event.identity_key] = event
            continue
        for pick in event.origin_picks:
            survivor = survivor.with_origin(pick)
        kept[event.identity_key] = survivor
    return list(kept.values())
