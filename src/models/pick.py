"""Pydantic v2 models for user picks (the interests being matched).

A pick is one of four kinds -- a sports team, a music artist, a genre
bucket, or raw keyword text -- tagged with the input slot (``p1``/``p2``/
``p3``) that produced it.  Picks are immutable: resolving a pick to a
provider identifier returns a new instance via :meth:`Pick.resolved`.

``pick_key`` is the identity used to count coverage: two events belong to
the same pick when their origin picks share a key.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.utils.errors import InvalidPickError
from src.utils.text_normalizer import normalize_label


class PickKind(str, Enum):  # noqa: UP042 (StrEnum requires Python 3.11+)
    """What a pick refers to."""

    TEAM = "team"
    ARTIST = "artist"
    GENRE = "genre"
    RAW = "raw"


class Slot(str, Enum):  # noqa: UP042 (StrEnum requires Python 3.11+)
    """Input position that produced a pick."""

    P1 = "p1"
    P2 = "p2"
    P3 = "p3"


_ENTITY_KINDS = frozenset({PickKind.TEAM, PickKind.ARTIST})


class Pick(BaseModel):
    """One user interest, optionally resolved to a provider identifier."""

    model_config = ConfigDict(frozen=True)

    kind: PickKind = Field(description="Tag selecting which fields are meaningful.")
    slot: Slot = Field(description="Input slot (p1/p2/p3) this pick came from.")
    display_name: str = Field(
        default="", description="Human label; may be empty for id-only artist picks."
    )
    canonical_id: str = Field(
        default="", description="Provider attraction id; empty until resolved."
    )
    genre_bucket: str = Field(
        default="", description="Keyword-expansion bucket name (genre picks only)."
    )
    league: str = Field(
        default="", description="League hint for team picks (e.g. 'NHL')."
    )

    @model_validator(mode="after")
    def _check_kind_fields(self) -> Pick:
        if self.kind == PickKind.GENRE and not self.genre_bucket.strip():
            raise ValueError("genre picks require a genre_bucket")
        if self.kind != PickKind.GENRE and self.genre_bucket:
            raise ValueError("genre_bucket is only valid on genre picks")
        if self.kind == PickKind.RAW and not self.display_name.strip():
            raise ValueError("raw picks require display_name text")
        if self.kind in _ENTITY_KINDS and not (self.display_name.strip() or self.canonical_id):
            raise ValueError(f"{self.kind.value} picks need a display_name or canonical_id")
        return self

    @property
    def is_entity(self) -> bool:
        """Teams and artists are entities; genres and raw keywords are not."""
        return self.kind in _ENTITY_KINDS

    @property
    def is_resolved(self) -> bool:
        return bool(self.canonical_id)

    @property
    def label(self) -> str:
        """Best human-readable label available without provider data."""
        if self.kind == PickKind.GENRE:
            return self.genre_bucket
        return self.display_name or self.canonical_id

    def resolved(self, canonical_id: str, display_name: str | None = None) -> Pick:
        """Return a copy carrying *canonical_id*.

        Resolving again to the same id is a no-op.  Resolving an already
        resolved pick to a different id means two resolution steps disagree,
        which is a wiring bug rather than a data problem.

        Raises
        ------
        InvalidPickError
            If the pick is a genre/raw pick or already carries another id.
        """
        if not self.is_entity:
            raise InvalidPickError(f"{self.kind.value} picks cannot be resolved to an id")
        if self.canonical_id and self.canonical_id != canonical_id:
            raise InvalidPickError(
                f"pick {self.slot.value} already resolved to {self.canonical_id!r}, "
                f"refusing {canonical_id!r}"
            )
        if self.canonical_id == canonical_id and (display_name is None or self.display_name):
            return self
        return self.model_copy(
            update={
                "canonical_id": canonical_id,
                "display_name": self.display_name or (display_name or ""),
            }
        )


def pick_key(pick: Pick, slot_sensitive: bool = False) -> str:
    """Deterministic coverage identity for *pick*.

    The kind prefix keeps a team and an artist with equal text apart.
    Entities prefer the resolved id over the display name so "Oilers" and
    "Edmonton Oilers" count once after resolution.
    """
    if pick.kind == PickKind.GENRE:
        ident = normalize_label(pick.genre_bucket)
    elif pick.is_entity:
        ident = pick.canonical_id or normalize_label(pick.display_name)
    else:
        ident = normalize_label(pick.display_name)

    key = f"{pick.kind.value}:{ident}"
    if slot_sensitive:
        key = f"{key}@{pick.slot.value}"
    return key


def same_entity(a: Pick, b: Pick) -> bool:
    """True when two entity picks refer to the same team/artist.

    Canonical ids decide when both picks are resolved; otherwise the kind
    plus normalized display name does.  Genre and raw picks are never
    entities.
    """
    if not (a.is_entity and b.is_entity):
        return False
    if a.canonical_id and b.canonical_id:
        return a.canonical_id == b.canonical_id
    name_a = normalize_label(a.display_name)
    return bool(name_a) and a.kind == b.kind and name_a == normalize_label(b.display_name)
