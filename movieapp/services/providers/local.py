"""
Local Provider
Offline catalog provider over the bundled dataset
"""
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from movieapp.core.config import settings
from movieapp.models.catalog import (
    Category,
    CatalogFilters,
    CatalogItem,
    Genre,
    Page,
    SortKey,
    Video,
)
from movieapp.services.errors import NotFoundError
from movieapp.services.providers import dataset
from movieapp.services.providers.base import CatalogProvider
from movieapp.utils.helpers import validate_page

logger = logging.getLogger(__name__)

SORTERS: Dict[SortKey, tuple] = {
    SortKey.POPULARITY_DESC: (lambda item: item.popularity or 0, True),
    SortKey.POPULARITY_ASC: (lambda item: item.popularity or 0, False),
    SortKey.RATING_DESC: (lambda item: item.vote_average, True),
    SortKey.RATING_ASC: (lambda item: item.vote_average, False),
    SortKey.RELEASE_DATE_DESC: (lambda item: item.release_date, True),
    SortKey.RELEASE_DATE_ASC: (lambda item: item.release_date, False),
    SortKey.TITLE_ASC: (lambda item: item.title.lower(), False),
    SortKey.TITLE_DESC: (lambda item: item.title.lower(), True),
}


class LocalProvider(CatalogProvider):
    """
    Deterministic provider used when no credential is configured.

    Every call sleeps for ``delay_ms`` first so callers still go through
    a visible loading state.
    """

    kind = "local"

    def __init__(
        self,
        items: Optional[List[Dict[str, Any]]] = None,
        details: Optional[Dict[int, Dict[str, Any]]] = None,
        genres: Optional[List[Dict[str, Any]]] = None,
        page_size: Optional[int] = None,
        delay_ms: Optional[int] = None,
        image_base_url: Optional[str] = None,
    ):
        raw_items = dataset.MOVIES if items is None else items
        self.items: List[CatalogItem] = [CatalogItem.model_validate(item) for item in raw_items]
        self.details = dataset.DETAILS if details is None else details
        self.genres = [Genre.model_validate(genre) for genre in (genres or dataset.GENRES)]
        self.page_size = page_size or settings.PAGE_SIZE
        self.delay_ms = settings.LOCAL_PROVIDER_DELAY_MS if delay_ms is None else delay_ms
        if image_base_url:
            self.image_base_url = image_base_url

    async def _simulate_latency(self, delay_ms: Optional[int] = None):
        delay = self.delay_ms if delay_ms is None else delay_ms
        if delay > 0:
            await asyncio.sleep(delay / 1000)

    def _paginate(self, items: List[CatalogItem], page: int) -> Page[CatalogItem]:
        return Page[CatalogItem].paginate(items, validate_page(page, settings.MAX_PAGE), self.page_size)

    async def list_by_category(self, category: Category, page: int = 1) -> Page[CatalogItem]:
        """
        List a category from the dataset

        Only top-rated has its own ordering; the other categories share
        the dataset (popularity) order.
        """
        await self._simulate_latency()
        items = list(self.items)
        if Category(category) is Category.TOP_RATED:
            items.sort(key=lambda item: item.vote_average, reverse=True)
        return self._paginate(items, page)

    async def search(
        self,
        query: str,
        page: int = 1,
        filters: Optional[CatalogFilters] = None
    ) -> Page[CatalogItem]:
        """Case-insensitive substring match over title and overview"""
        if not query or not query.strip():
            return Page[CatalogItem].empty()

        await self._simulate_latency(self.delay_ms * 3 // 4)
        needle = query.strip().lower()
        matches = [
            item for item in self.items
            if needle in item.title.lower() or needle in item.overview.lower()
        ]
        if filters and filters.year:
            matches = [item for item in matches if item.release_year == filters.year]
        return self._paginate(matches, page)

    async def get_detail(self, item_id: int) -> CatalogItem:
        """Dataset movie merged with its detail-only fields"""
        await self._simulate_latency(self.delay_ms * 5 // 8)
        for item in self.items:
            if item.id == item_id:
                extras = self.details.get(item_id, {})
                payload = {**item.model_dump(), **extras}
                return CatalogItem.from_tmdb(payload, max_credits=settings.MAX_CREDITS)
        raise NotFoundError()

    async def list_taxonomy(self) -> List[Genre]:
        return list(self.genres)

    async def discover(
        self,
        page: int = 1,
        filters: Optional[CatalogFilters] = None
    ) -> Page[CatalogItem]:
        """Filter and sort the dataset the way /discover/movie would"""
        await self._simulate_latency()
        items = list(self.items)

        if filters:
            predicates: List[Callable[[CatalogItem], bool]] = []
            if filters.genre_ids:
                wanted = set(filters.genre_ids)
                predicates.append(lambda item: bool(wanted.intersection(item.genre_ids)))
            if filters.year:
                predicates.append(lambda item: item.release_year == filters.year)
            if filters.min_rating:
                predicates.append(lambda item: item.vote_average >= filters.min_rating)
            items = [item for item in items if all(check(item) for check in predicates)]

            if filters.sort_by:
                key, reverse = SORTERS[filters.sort_by]
                items.sort(key=key, reverse=reverse)

        return self._paginate(items, page)

    async def list_videos(self, item_id: int) -> List[Video]:
        """Placeholder trailer for any movie"""
        await self._simulate_latency(self.delay_ms * 3 // 8)
        return [
            Video(key="dQw4w9WgXcQ", name="Official Trailer", site="YouTube", type="Trailer")
        ]
