"""
Resource Definitions
How each catalog facet is fetched and how long it stays cached
"""
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Type

from pydantic import BaseModel

from movieapp.core.config import Settings
from movieapp.models.catalog import Category, CatalogFilters, CatalogItem, Genre, Page, Video
from movieapp.services.providers.base import CatalogProvider, ProviderCapabilities

logger = logging.getLogger(__name__)

Fetcher = Callable[..., Awaitable[Page]]


@dataclass(frozen=True)
class ResourceDefinition:
    """
    One independently cached and paginated facet.

    Attributes:
        name: Resource name, also the cache key segment
        ttl_setting: Name of the Settings field holding the TTL in ms
        fetch: Coroutine ``(provider, capabilities, page, filters, **arguments) -> Page``
        item_model: Model of the page items, used to validate cached pages
    """
    name: str
    ttl_setting: str
    fetch: Fetcher
    item_model: Type[BaseModel] = CatalogItem

    def ttl_ms(self, app_settings: Settings) -> int:
        return getattr(app_settings, self.ttl_setting)

    @property
    def page_model(self) -> Type[Page]:
        return Page[self.item_model]


def _has_filters(filters: Optional[CatalogFilters]) -> bool:
    return filters is not None and not filters.is_empty()


def category_fetcher(category: Category) -> Fetcher:
    """Plain category listing, or discover when filters are given and supported"""

    async def fetch(
        provider: CatalogProvider,
        capabilities: ProviderCapabilities,
        page: int,
        filters: Optional[CatalogFilters] = None,
    ) -> Page[CatalogItem]:
        if _has_filters(filters):
            if capabilities.discover is not None:
                return await capabilities.discover(page, filters)
            logger.warning(
                "%s provider cannot discover; ignoring filters for %s",
                provider.kind,
                category.value,
            )
        return await provider.list_by_category(category, page)

    return fetch


async def fetch_discover(
    provider: CatalogProvider,
    capabilities: ProviderCapabilities,
    page: int,
    filters: Optional[CatalogFilters] = None,
) -> Page[CatalogItem]:
    """Filtered browsing; falls back to the trending list without filters"""
    if capabilities.discover is not None:
        return await capabilities.discover(page, filters)
    if _has_filters(filters):
        logger.warning("%s provider cannot discover; dropping filters", provider.kind)
    return await provider.list_by_category(Category.TRENDING, page)


async def fetch_search(
    provider: CatalogProvider,
    capabilities: ProviderCapabilities,
    page: int,
    filters: Optional[CatalogFilters] = None,
    query: str = "",
) -> Page[CatalogItem]:
    return await provider.search(query, page, filters)


async def fetch_details(
    provider: CatalogProvider,
    capabilities: ProviderCapabilities,
    page: int,
    filters: Optional[CatalogFilters] = None,
    item_id: int = 0,
) -> Page[CatalogItem]:
    item = await provider.get_detail(item_id)
    return Page[CatalogItem](page=1, results=[item], total_pages=1, total_results=1)


async def fetch_videos(
    provider: CatalogProvider,
    capabilities: ProviderCapabilities,
    page: int,
    filters: Optional[CatalogFilters] = None,
    item_id: int = 0,
) -> Page[Video]:
    if capabilities.list_videos is None:
        return Page[Video].empty()
    videos = await capabilities.list_videos(item_id)
    return Page[Video](
        page=1,
        results=videos,
        total_pages=1 if videos else 0,
        total_results=len(videos),
    )


async def fetch_genres(
    provider: CatalogProvider,
    capabilities: ProviderCapabilities,
    page: int,
    filters: Optional[CatalogFilters] = None,
) -> Page[Genre]:
    genres = await provider.list_taxonomy()
    return Page[Genre](
        page=1,
        results=genres,
        total_pages=1 if genres else 0,
        total_results=len(genres),
    )


TRENDING = "trending"
NOW_SHOWING = "now_showing"
TOP_RATED = "top_rated"
UPCOMING = "upcoming"
DISCOVER = "discover"
SEARCH = "search"
DETAILS = "details"
VIDEOS = "videos"
GENRES = "genres"

RESOURCES: Dict[str, ResourceDefinition] = {
    TRENDING: ResourceDefinition(TRENDING, "CACHE_TTL_TRENDING_MS", category_fetcher(Category.TRENDING)),
    NOW_SHOWING: ResourceDefinition(NOW_SHOWING, "CACHE_TTL_NOW_SHOWING_MS", category_fetcher(Category.NOW_SHOWING)),
    TOP_RATED: ResourceDefinition(TOP_RATED, "CACHE_TTL_TOP_RATED_MS", category_fetcher(Category.TOP_RATED)),
    UPCOMING: ResourceDefinition(UPCOMING, "CACHE_TTL_UPCOMING_MS", category_fetcher(Category.UPCOMING)),
    DISCOVER: ResourceDefinition(DISCOVER, "CACHE_TTL_DISCOVER_MS", fetch_discover),
    SEARCH: ResourceDefinition(SEARCH, "CACHE_TTL_SEARCH_MS", fetch_search),
    DETAILS: ResourceDefinition(DETAILS, "CACHE_TTL_DETAILS_MS", fetch_details),
    VIDEOS: ResourceDefinition(VIDEOS, "CACHE_TTL_VIDEOS_MS", fetch_videos, Video),
    GENRES: ResourceDefinition(GENRES, "CACHE_TTL_GENRES_MS", fetch_genres, Genre),
}

# Slices browsable by listing name
LISTING_RESOURCES = (TRENDING, NOW_SHOWING, TOP_RATED, UPCOMING, DISCOVER)


def get_resource(name: str) -> ResourceDefinition:
    """Look up a resource definition; raises KeyError for unknown names"""
    return RESOURCES[name]


def describe_arguments(arguments: Dict[str, Any]) -> str:
    """Compact rendering of bound arguments for log lines"""
    return ", ".join(f"{key}={value!r}" for key, value in sorted(arguments.items()))
