"""Pick parsing and resolution.

The pick inputs send tagged text built from catalog option ids:

    team:NHL:Edmonton Oilers   team with league hint
    team:Edmonton Oilers       team without league
    artist:K8vZ9171ob7         artist known only by attraction id
    artist:K8vZ9171ob7:Name    artist id plus display name
    genre:Rock                 genre bucket
    K8vZ9171ob7                bare attraction id (treated as an artist)
    anything else              raw keyword text

``parse_pick`` turns that text into a :class:`Pick`; nothing downstream
splits strings.  ``resolve_picks`` asks an :class:`IPickResolver` for
canonical ids and returns new picks -- inputs are never modified.
"""

from __future__ import annotations

import asyncio
import re
from typing import Iterable

from src.config.domain_knowledge import league_for_team
from src.interfaces.pick_resolver import IPickResolver
from src.models.pick import Pick, PickKind, Slot
from src.services.matching.genre_matcher import canonical_bucket
from src.utils.errors import PickParseError, RendezvousError
from src.utils.logging import get_logger

_logger = get_logger(__name__)

_ATTRACTION_ID_RE = re.compile(r"^K[0-9A-Za-z]{8,}$")
_TAGS = {kind.value: kind for kind in (PickKind.TEAM, PickKind.ARTIST, PickKind.GENRE)}


def looks_like_attraction_id(text: str) -> bool:
    return bool(_ATTRACTION_ID_RE.match(text.strip()))


def parse_pick(text: str | None, slot: Slot) -> Pick | None:
    """Parse one pick input.

    Parameters
    ----------
    text:
        Raw input for the slot; ``+`` is accepted as an encoded space.
    slot:
        Which input position the text came from.

    Returns
    -------
    Pick or None
        None when the input is blank.

    Raises
    ------
    PickParseError
        When a ``team:``/``artist:``/``genre:`` tag has nothing after it.
    """
    cleaned = (text or "").replace("+", " ").strip()
    if not cleaned:
        return None

    head, sep, rest = cleaned.partition(":")
    kind = _TAGS.get(head.strip().lower()) if sep else None

    if kind is None:
        if looks_like_attraction_id(cleaned):
            return Pick(kind=PickKind.ARTIST, slot=slot, canonical_id=cleaned)
        return Pick(kind=PickKind.RAW, slot=slot, display_name=cleaned)

    parts = [p.strip() for p in rest.split(":")]
    parts = [p for p in parts if p]
    if not parts:
        raise PickParseError(f"{head.strip().lower()}: pick for {slot.value} has no value")

    if kind == PickKind.GENRE:
        return Pick(kind=kind, slot=slot, genre_bucket=canonical_bucket(":".join(parts)))

    if kind == PickKind.TEAM:
        if len(parts) >= 2:
            return Pick(kind=kind, slot=slot, league=parts[0].upper(), display_name=":".join(parts[1:]))
        return Pick(
            kind=kind,
            slot=slot,
            league=league_for_team(parts[0]) or "",
            display_name=parts[0],
        )

    # artist
    first, remainder = parts[0], parts[1:]
    if looks_like_attraction_id(first):
        return Pick(kind=kind, slot=slot, canonical_id=first, display_name=":".join(remainder))
    return Pick(kind=kind, slot=slot, display_name=":".join(parts))


def parse_picks(p1: str | None, p2: str | None, p3: str | None = None) -> list[Pick]:
    """Parse up to three slot inputs, skipping blanks, in slot order."""
    picks: list[Pick] = []
    for slot, text in ((Slot.P1, p1), (Slot.P2, p2), (Slot.P3, p3)):
        pick = parse_pick(text, slot)
        if pick is not None:
            picks.append(pick)
    return picks


async def resolve_pick(pick: Pick, resolver: IPickResolver) -> Pick:
    """Return *pick* with a canonical id when the resolver finds one.

    Genre, raw and already-resolved picks pass through untouched.  A
    resolver failure leaves the pick unresolved; its events are then
    fetched by keyword.
    """
    if not pick.is_entity or pick.is_resolved:
        return pick
    try:
        entity = await resolver.resolve(pick)
    except RendezvousError as exc:
        _logger.warning(
            "pick_resolution_failed",
            slot=pick.slot.value,
            name=pick.display_name,
            error=str(exc),
        )
        return pick
    if entity is None:
        _logger.info("pick_unresolved", slot=pick.slot.value, name=pick.display_name)
        return pick
    return pick.resolved(entity.id, entity.name)


async def resolve_picks(picks: Iterable[Pick], resolver: IPickResolver) -> list[Pick]:
    """Resolve every pick concurrently, preserving order."""
    return list(await asyncio.gather(*(resolve_pick(p, resolver) for p in picks)))
