"""Choose the matching strategy from the first two picks.

Decision order, first match wins:

1. ENTITY_ONLY -- p1 and p2 are both teams/artists and are the same entity.
2. SINGLE_PICK -- only one of p1/p2 was given, or both were given as the
   same genre/raw text.
3. OVERLAP     -- two distinct picks.

The third slot never changes the decision; it only adds a pool to overlap
clustering.
"""

from __future__ import annotations

from src.models.occurrence import MatchMode
from src.models.pick import Pick, pick_key, same_entity


def select_mode(p1: Pick | None, p2: Pick | None) -> MatchMode | None:
    """Return the mode for this pick pair, or None when both are blank."""
    if p1 is None and p2 is None:
        return None
    if p1 is None or p2 is None:
        return MatchMode.SINGLE_PICK
    if same_entity(p1, p2):
        return MatchMode.ENTITY_ONLY
    if not (p1.is_entity and p2.is_entity) and pick_key(p1) == pick_key(p2):
        return MatchMode.SINGLE_PICK
    return MatchMode.OVERLAP


def single_pick_source(p1: Pick | None, p2: Pick | None) -> Pick | None:
    """The pick whose events feed single-pick runs (p1 unless blank)."""
    return p1 if p1 is not None else p2


def needs_slot_sensitivity(picks: list[Pick], forced: bool | None) -> bool:
    """Whether overlap identity and pick keys must carry the slot.

    ``forced`` wins when set.  Otherwise slot sensitivity is switched on
    only when two active picks would share a pick key, which is the only
    case where collapsing them would undercount coverage.
    """
    if forced is not None:
        return forced
    keys = [pick_key(p) for p in picks]
    return len(keys) != len(set(keys))
