"""Pydantic v2 model for selectable interests shown in the pick inputs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from src.models.pick import PickKind


class CatalogOption(BaseModel):
    """One selectable interest.

    ``id`` is the tagged pick text the client sends back as ``p1``/``p2``
    (``team:NHL:Edmonton Oilers``, ``artist:K8vZ9171ob7``, ``genre:Rock``).
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Tagged pick text accepted by parse_pick.")
    label: str
    group: str = Field(description="League, 'Artists', or 'Genres'.")
    kind: PickKind
    league: str | None = Field(default=None)
