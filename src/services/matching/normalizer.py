"""Raw provider event records -> canonical :class:`Event`.

Reads the Ticketmaster Discovery ``events`` shape.  Only the local date is
mandatory: a record without a parseable ``dates.start.localDate`` is
dropped.  Everything else degrades to empty values, and venue coordinates
that are missing or non-numeric become ``None`` so the clustering engine
can tell "no coordinates" apart from a real position.
"""

from __future__ import annotations

import math
import re
from datetime import date, time
from typing import Any, Iterable

from src.models.event import Attraction, Event, Venue
from src.models.pick import Pick, Slot
from src.services.matching.identity import identity_key
from src.utils.logging import get_logger

_logger = get_logger(__name__)

_YMD_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_HM_RE = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?")


def _dig(obj: Any, *path: str | int) -> Any:
    """Walk nested dicts/lists, returning None on any missing step."""
    cur = obj
    for step in path:
        if isinstance(step, int):
            if not isinstance(cur, list) or len(cur) <= step:
                return None
            cur = cur[step]
        else:
            if not isinstance(cur, dict):
                return None
            cur = cur.get(step)
        if cur is None:
            return None
    return cur


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def parse_local_date(value: Any) -> date | None:
    """Parse a strict ``YYYY-MM-DD`` string; anything else is None."""
    text = _text(value)
    if not _YMD_RE.match(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def parse_local_time(value: Any) -> time | None:
    """Parse ``HH:MM`` or ``HH:MM:SS``; anything else is None."""
    match = _HM_RE.match(_text(value))
    if not match:
        return None
    hour, minute, second = int(match.group(1)), int(match.group(2)), int(match.group(3) or 0)
    if hour > 23 or minute > 59 or second > 59:
        return None
    return time(hour, minute, second)


def safe_coordinate(value: Any) -> float | None:
    """Float coordinate or None; NaN, infinities and junk all become None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _venue(raw: dict[str, Any]) -> Venue:
    v = _dig(raw, "_embedded", "venues", 0)
    if not isinstance(v, dict):
        v = {}
    lat = safe_coordinate(_dig(v, "location", "latitude"))
    lon = safe_coordinate(_dig(v, "location", "longitude"))
    if lat is None or lon is None or not (-90.0 <= lat <= 90.0) or not (-180.0 <= lon <= 180.0):
        lat = lon = None
    return Venue(
        id=_text(v.get("id")),
        name=_text(v.get("name")),
        city=_text(_dig(v, "city", "name")),
        region_code=_text(_dig(v, "state", "stateCode") or _dig(v, "state", "name")),
        country_code=_text(_dig(v, "country", "countryCode")),
        lat=lat,
        lon=lon,
    )


def _genres(raw: dict[str, Any]) -> tuple[str, ...]:
    names: list[str] = []
    for classification in _list(raw.get("classifications")):
        for field in ("genre", "subGenre"):
            name = _text(_dig(classification, field, "name"))
            if name and name.lower() != "undefined" and name not in names:
                names.append(name)
    return tuple(names)


def _attractions(raw: dict[str, Any]) -> tuple[Attraction, ...]:
    out = []
    for item in _list(_dig(raw, "_embedded", "attractions")):
        if isinstance(item, dict) and (item.get("id") or item.get("name")):
            out.append(Attraction(id=_text(item.get("id")), name=_text(item.get("name"))))
    return tuple(out)


def _image_url(raw: dict[str, Any]) -> str | None:
    images = [i for i in _list(raw.get("images")) if isinstance(i, dict) and i.get("url")]
    if not images:
        return None
    preferred = next((i for i in images if i.get("ratio") == "16_9"), images[0])
    return preferred["url"]


def normalize_event(
    raw: dict[str, Any],
    pick: Pick,
    slot_sensitive: bool = False,
) -> Event | None:
    """Convert one raw provider record into an :class:`Event`.

    Parameters
    ----------
    raw:
        One element of the provider's ``_embedded.events`` list.
    pick:
        The pick whose fetch returned this record.
    slot_sensitive:
        Suffix the identity key with the pick's slot.

    Returns
    -------
    Event or None
        None when the record has no valid local date.
    """
    if not isinstance(raw, dict):
        return None
    local_date = parse_local_date(_dig(raw, "dates", "start", "localDate"))
    if local_date is None:
        return None

    local_time = parse_local_time(_dig(raw, "dates", "start", "localTime"))
    venue = _venue(raw)
    provider_id = _text(raw.get("id")) or None
    name = _text(raw.get("name"))
    slot: Slot | None = pick.slot if slot_sensitive else None

    return Event(
        identity_key=identity_key(provider_id, name, local_date, local_time, venue, slot),
        provider_id=provider_id,
        name=name,
        local_date=local_date,
        local_time=local_time,
        venue=venue,
        ticket_url=_text(raw.get("url")) or None,
        image_url=_image_url(raw),
        genres=_genres(raw),
        attractions=_attractions(raw),
        origin_picks=(pick,),
    )


def normalize_events(
    raws: Iterable[dict[str, Any]],
    pick: Pick,
    slot_sensitive: bool = False,
) -> list[Event]:
    """Normalize a whole pool, silently dropping undated records."""
    events: list[Event] = []
    dropped = 0
    for raw in raws:
        event = normalize_event(raw, pick, slot_sensitive=slot_sensitive)
        if event is None:
            dropped += 1
        else:
            events.append(event)
    if dropped:
        _logger.debug("events_dropped_undated", slot=pick.slot.value, dropped=dropped)
    return events
