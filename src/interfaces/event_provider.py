"""Abstract base class for event providers and their typed fetch result.

A provider returns either ``FetchOk`` with the raw event records for a
pick, or ``FetchErr`` with a reason.  The matching engine only ever sees
the ``FetchOk`` events (a failed fetch becomes an empty pool), while the
search service can still tell "no events" apart from "fetch failed" when
it reports back to the user.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Union

from src.models.matching import DateRange
from src.models.pick import Pick


@dataclass(frozen=True)
class FetchOk:
    """A successful fetch; ``events`` may legitimately be empty."""

    events: list[dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FetchErr:
    """A failed fetch.

    Attributes
    ----------
    reason:
        Short machine-friendly cause (``"rate_limited"``, ``"http_503"``...).
    detail:
        Optional human-readable detail for logs.
    """

    reason: str
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False

    @property
    def events(self) -> list[dict[str, Any]]:
        return []


FetchResult = Union[FetchOk, FetchErr]


class IEventProvider(ABC):
    """Contract for services that return raw event records per pick."""

    @abstractmethod
    async def fetch_events(
        self,
        pick: Pick,
        date_range: DateRange | None = None,
    ) -> FetchResult:
        """Fetch raw events for *pick*.

        Implementations must not raise for network or API failures; those
        are reported as :class:`FetchErr`.

        Parameters
        ----------
        pick:
            The (ideally resolved) pick to fetch for.
        date_range:
            Optional inclusive local-date bounds to push down to the API.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
