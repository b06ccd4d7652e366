"""Abstract base class for pick resolvers.

A resolver turns a team/artist pick known only by name into the
provider's canonical attraction id, so event fetches can filter by id
instead of keyword and two spellings of one team compare equal.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from src.models.pick import Pick


@dataclass(frozen=True)
class ResolvedEntity:
    """The attraction a pick was matched to.

    Attributes
    ----------
    id:
        Provider attraction id.
    name:
        The attraction's canonical name.
    score:
        Heuristic match score; only meaningful relative to other candidates.
    """

    id: str
    name: str
    score: float = 0.0


class IPickResolver(ABC):
    """Contract for name -> canonical id resolution."""

    @abstractmethod
    async def resolve(self, pick: Pick) -> ResolvedEntity | None:
        """Find the best matching attraction for an entity pick.

        Parameters
        ----------
        pick:
            A team or artist pick with a display name.

        Returns
        -------
        ResolvedEntity or None
            None when nothing plausible was found.

        Raises
        ------
        RendezvousError
            Subclasses such as ``ProviderUnavailableError`` when the lookup
            itself failed.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this resolver."""


class IAttractionDirectory(ABC):
    """Contract for paging through a provider's attraction listings.

    Used by the options catalog to offer artists without a search term.
    """

    @abstractmethod
    async def list_attractions(
        self,
        classification: str,
        page: int,
        size: int,
    ) -> list[ResolvedEntity]:
        """Return one page of attractions in *classification*.

        Parameters
        ----------
        classification:
            Provider classification name, e.g. ``"music"``.
        page:
            0-indexed page number.
        size:
            Page size.

        Raises
        ------
        RendezvousError
            When the page could not be fetched.
        """
