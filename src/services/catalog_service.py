"""Options catalog: every selectable team, artist and genre.

The pick inputs offer a combined, grouped list of options.  Building it
costs up to ``artist_pages`` attraction-listing requests, so the whole list
is cached for ``ttl`` seconds behind the injected cache's ``get_or_load``:
concurrent requests during a rebuild wait on the same load instead of each
starting their own.

Groups, in order:

    NHL, NBA, MLB, NFL, MLS, CFL   static rosters, sorted within league
    Artists                         paged music attractions, deduped, sorted
    Genres                          keyword buckets from the genre matcher
"""

from __future__ import annotations

from src.config.domain_knowledge import TEAMS_BY_LEAGUE
from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.pick_resolver import IAttractionDirectory, IPickResolver, ResolvedEntity
from src.models.catalog import CatalogOption
from src.models.pick import Pick, PickKind, Slot
from src.services.matching.genre_matcher import GENRE_EXPANSION
from src.utils.concurrency import provider_semaphore, throttled_gather
from src.utils.errors import RendezvousError
from src.utils.logging import get_logger

CATALOG_CACHE_KEY = "catalog:options"

_ARTIST_PAGE_SIZE = 200
_ARTIST_CLASSIFICATION = "music"


def build_team_options() -> list[CatalogOption]:
    """Roster teams as options, league by league, names sorted."""
    options: list[CatalogOption] = []
    for league, teams in TEAMS_BY_LEAGUE.items():
        for name in sorted(teams):
            options.append(
                CatalogOption(
                    id=f"team:{league}:{name}",
                    label=name,
                    group=league,
                    kind=PickKind.TEAM,
                    league=league,
                )
            )
    return options


def build_genre_options() -> list[CatalogOption]:
    return [
        CatalogOption(id=f"genre:{bucket}", label=bucket, group="Genres", kind=PickKind.GENRE)
        for bucket in GENRE_EXPANSION
    ]


def artist_options(entities: list[ResolvedEntity], limit: int) -> list[CatalogOption]:
    """Dedupe by lowercase label (first wins), sort by label, cap at *limit*."""
    by_label: dict[str, CatalogOption] = {}
    for entity in entities:
        key = entity.name.strip().lower()
        if not key or key in by_label:
            continue
        by_label[key] = CatalogOption(
            id=f"artist:{entity.id}",
            label=entity.name.strip(),
            group="Artists",
            kind=PickKind.ARTIST,
        )
    return sorted(by_label.values(), key=lambda o: (o.label.lower(), o.label))[:limit]


class CatalogService:
    """Builds and caches the combined options list.

    Parameters
    ----------
    directory:
        Attraction listing source for the artist group.
    cache:
        Cache holding the built list under :data:`CATALOG_CACHE_KEY`.
    resolver:
        Optional resolver used to look up pinned artists missing from the
        listing pages.
    artist_pages:
        How many listing pages to request.
    artist_limit:
        Maximum number of artist options kept.
    pinned_artists:
        Names that must appear in the artist group when the provider knows
        them, even if they fell outside the listing pages.
    """

    def __init__(
        self,
        directory: IAttractionDirectory | None,
        cache: ICacheProvider,
        resolver: IPickResolver | None = None,
        artist_pages: int = 10,
        artist_limit: int = 1200,
        pinned_artists: tuple[str, ...] = (),
    ) -> None:
        self._directory = directory
        self._cache = cache
        self._resolver = resolver
        self._artist_pages = artist_pages
        self._artist_limit = artist_limit
        self._pinned_artists = pinned_artists
        self._semaphore = provider_semaphore()
        self._logger = get_logger(__name__)

    async def get_options(self) -> list[CatalogOption]:
        """Cached combined list: teams, then artists, then genres."""
        return await self._cache.get_or_load(CATALOG_CACHE_KEY, self._build)

    async def refresh(self) -> list[CatalogOption]:
        """Drop the cached list and rebuild it."""
        await self._cache.delete(CATALOG_CACHE_KEY)
        return await self.get_options()

    async def _build(self) -> list[CatalogOption]:
        teams = build_team_options()
        artists = await self._load_artists()
        genres = build_genre_options()
        self._logger.info(
            "catalog_built",
            teams=len(teams),
            artists=len(artists),
            genres=len(genres),
        )
        return [*teams, *artists, *genres]

    async def _load_artists(self) -> list[CatalogOption]:
        if self._directory is None:
            return []

        directory = self._directory
        pages = await throttled_gather(
            [
                directory.list_attractions(_ARTIST_CLASSIFICATION, page, _ARTIST_PAGE_SIZE)
                for page in range(self._artist_pages)
            ],
            self._semaphore,
            return_exceptions=True,
        )

        entities: list[ResolvedEntity] = []
        failed = 0
        for page in pages:
            if isinstance(page, RendezvousError):
                failed += 1
                continue
            if isinstance(page, BaseException):
                raise page
            entities.extend(page)
        if failed:
            self._logger.warning("catalog_artist_pages_failed", failed=failed, pages=len(pages))

        entities.extend(await self._pinned(entities))
        return artist_options(entities, self._artist_limit)

    async def _pinned(self, entities: list[ResolvedEntity]) -> list[ResolvedEntity]:
        if self._resolver is None or not self._pinned_artists:
            return []
        known = {e.name.strip().lower() for e in entities}
        found: list[ResolvedEntity] = []
        for name in self._pinned_artists:
            if name.strip().lower() in known:
                continue
            pick = Pick(kind=PickKind.ARTIST, slot=Slot.P1, display_name=name)
            try:
                entity = await self._resolver.resolve(pick)
            except RendezvousError as exc:
                self._logger.warning("catalog_pinned_artist_failed", name=name, error=str(exc))
                continue
            if entity is not None:
                found.append(entity)
        return found
