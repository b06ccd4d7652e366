"""Resolve team/artist picks to Ticketmaster attraction ids.

Searches ``/discovery/v2/attractions.json`` by keyword within the Sports
or Music segment and scores each candidate with simple name heuristics:

    Teams                                   Artists
    ─────────────────────────────────────   ─────────────────────────────
    exact name            +120              exact name        +100
    name contains query    +50              name contains      +40
    subgenre == league     +40              shared words        +5 each
    subgenre has league    +20
    genre fits league      +20 (CFL +10)

A rapidfuzz token-set ratio (0..1) is added as a tiebreak so near-equal
candidates order by closeness of spelling.  Candidates under the minimum
score are rejected.
"""

from __future__ import annotations

from typing import Any

import httpx

from src.interfaces.pick_resolver import IAttractionDirectory, IPickResolver, ResolvedEntity
from src.models.pick import Pick, PickKind
from src.utils.errors import ProviderUnavailableError, RateLimitError
from src.utils.logging import get_logger
from src.utils.text_normalizer import similarity, word_overlap

_DEFAULT_BASE_URL = "https://app.ticketmaster.com/discovery/v2"
_CANDIDATE_COUNT = 20
_MIN_TEAM_SCORE = 60.0
_MIN_ARTIST_SCORE = 40.0

# Sport keyword expected in the genre of each league's teams, with its bonus.
_LEAGUE_GENRES: dict[str, tuple[str, int]] = {
    "MLB": ("baseball", 20),
    "NHL": ("hockey", 20),
    "NBA": ("basketball", 20),
    "NFL": ("football", 20),
    "MLS": ("soccer", 20),
    "CFL": ("football", 10),
}


def _classification(attraction: dict[str, Any], level: str) -> str:
    classifications = attraction.get("classifications") or [{}]
    first = classifications[0] if isinstance(classifications[0], dict) else {}
    value = first.get(level) or {}
    return str(value.get("name") or "") if isinstance(value, dict) else ""


def score_team(query: str, league: str, attraction: dict[str, Any]) -> float:
    """Heuristic score of *attraction* as the team named *query*."""
    name = str(attraction.get("name") or "").lower()
    q = query.strip().lower()
    if not name or not q:
        return 0.0

    score = 0.0
    if name == q:
        score += 120
    if q in name:
        score += 50

    if league:
        lg = league.lower()
        sub_genre = _classification(attraction, "subGenre").lower()
        if sub_genre == lg:
            score += 40
        if lg in sub_genre:
            score += 20
        sport = _LEAGUE_GENRES.get(league.upper())
        if sport and sport[0] in _classification(attraction, "genre").lower():
            score += sport[1]
    return score


def score_artist(query: str, attraction: dict[str, Any]) -> float:
    """Heuristic score of *attraction* as the artist named *query*."""
    name = str(attraction.get("name") or "").lower().strip()
    q = query.strip().lower()
    if not name or not q:
        return 0.0

    score = 0.0
    if name == q:
        score += 100
    if q in name:
        score += 40
    score += word_overlap(q, name) * 5
    return score


class TicketmasterPickResolver(IPickResolver, IAttractionDirectory):
    """Keyword lookup of team/artist picks against Ticketmaster attractions.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient``.
    api_key:
        Discovery API consumer key.
    base_url:
        API root, without the ``/attractions.json`` suffix.
    country_code:
        Comma-separated country filter passed with each search.
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        base_url: str = _DEFAULT_BASE_URL,
        country_code: str = "US,CA",
        timeout: float = 15.0,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._country_code = country_code
        self._timeout = timeout
        self._logger = get_logger(__name__)

    def get_provider_name(self) -> str:
        return "ticketmaster"

    async def resolve(self, pick: Pick) -> ResolvedEntity | None:
        """Best-scoring attraction for *pick*, or None.

        Raises
        ------
        RateLimitError
            If the API answers 429.
        ProviderUnavailableError
            On network errors or any other non-200 status.
        """
        if not pick.is_entity or not pick.display_name.strip():
            return None

        is_team = pick.kind == PickKind.TEAM
        attractions = await self._search(
            keyword=pick.display_name.strip(),
            segment="Sports" if is_team else "Music",
        )

        best: ResolvedEntity | None = None
        for attraction in attractions:
            attraction_id = str(attraction.get("id") or "")
            name = str(attraction.get("name") or "")
            if not attraction_id or not name:
                continue
            if is_team:
                heuristic = score_team(pick.display_name, pick.league, attraction)
                floor = _MIN_TEAM_SCORE
            else:
                heuristic = score_artist(pick.display_name, attraction)
                floor = _MIN_ARTIST_SCORE
            if heuristic < floor:
                continue
            score = heuristic + similarity(pick.display_name, name)
            if best is None or score > best.score:
                best = ResolvedEntity(id=attraction_id, name=name, score=score)

        self._logger.debug(
            "pick_resolution_scored",
            slot=pick.slot.value,
            query=pick.display_name,
            candidates=len(attractions),
            best_id=best.id if best else None,
            best_score=round(best.score, 2) if best else None,
        )
        return best

    async def list_attractions(
        self,
        classification: str,
        page: int,
        size: int,
    ) -> list[ResolvedEntity]:
        """One relevance-ordered page of attractions in *classification*."""
        attractions = await self._get_attractions(
            {
                "classificationName": classification,
                "size": size,
                "page": page,
                "sort": "relevance,desc",
            }
        )
        return [
            ResolvedEntity(id=str(a["id"]), name=str(a["name"]))
            for a in attractions
            if a.get("id") and a.get("name")
        ]

    async def _search(self, keyword: str, segment: str) -> list[dict[str, Any]]:
        return await self._get_attractions(
            {
                "keyword": keyword,
                "segmentName": segment,
                "size": _CANDIDATE_COUNT,
            }
        )

    async def _get_attractions(self, query: dict[str, Any]) -> list[dict[str, Any]]:
        if not self._api_key:
            raise ProviderUnavailableError(
                message="TICKETMASTER_API_KEY is not set",
                provider_name=self.get_provider_name(),
            )
        params = {
            **query,
            "apikey": self._api_key,
            "countryCode": self._country_code,
        }
        try:
            response = await self._http.get(
                f"{self._base_url}/attractions.json",
                params=params,
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            raise ProviderUnavailableError(
                message=f"Attraction search failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if response.status_code == 429:
            raise RateLimitError(
                message="Attraction search rate limited",
                provider_name=self.get_provider_name(),
            )
        if response.status_code != 200:
            raise ProviderUnavailableError(
                message=f"Attraction search returned HTTP {response.status_code}",
                provider_name=self.get_provider_name(),
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderUnavailableError(
                message="Attraction search returned invalid JSON",
                provider_name=self.get_provider_name(),
            ) from exc

        embedded = (data.get("_embedded") or {}) if isinstance(data, dict) else None
        attractions = (embedded.get("attractions") or []) if isinstance(embedded, dict) else None
        if not isinstance(attractions, list):
            raise ProviderUnavailableError(
                message="Attraction search returned an unexpected shape",
                provider_name=self.get_provider_name(),
            )
        return [a for a in attractions if isinstance(a, dict)]
