"""
TMDB Provider
Async client for The Movie Database API
"""
import aiohttp
import asyncio
import logging
from typing import Any, Dict, List, Optional
from movieapp.core.config import settings
from movieapp.models.catalog import (
    Category,
    CatalogFilters,
    CatalogItem,
    Genre,
    Page,
    Video,
)
from movieapp.models.config import ProviderConfig
from movieapp.services.errors import (
    MissingCredentialError,
    NetworkError,
    NotFoundError,
    RemoteError,
)
from movieapp.services.providers.base import CatalogProvider
from movieapp.utils.helpers import validate_page
from movieapp.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

CATEGORY_ENDPOINTS = {
    Category.TRENDING: "/movie/popular",
    Category.NOW_SHOWING: "/movie/now_playing",
    Category.TOP_RATED: "/movie/top_rated",
    Category.UPCOMING: "/movie/upcoming",
}


class TMDBProvider(CatalogProvider):
    """Async catalog provider backed by the TMDB API"""

    kind = "remote"

    def __init__(self, config: ProviderConfig, timeout: Optional[float] = None):
        self.config = config
        self.image_base_url = config.image_base_url
        self.timeout = timeout or settings.TMDB_TIMEOUT_SECONDS
        self.session: Optional[aiohttp.ClientSession] = None

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self.session

    async def close(self):
        """Close aiohttp session"""
        if self.session and not self.session.closed:
            await self.session.close()

    def _build_params(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, str]:
        request_params = {"language": self.config.locale}
        if not self.config.adult_content_allowed:
            request_params["include_adult"] = "false"
        if self.config.region:
            request_params["region"] = self.config.region
        if params:
            request_params.update({key: str(value) for key, value in params.items()})
        return request_params

    @staticmethod
    async def _error_message(response: aiohttp.ClientResponse) -> str:
        """Prefer the message TMDB puts in error bodies"""
        fallback = f"HTTP {response.status}: {response.reason or ''}".rstrip(": ")
        try:
            body = await response.json(content_type=None)
        except (aiohttp.ContentTypeError, ValueError):
            return fallback
        if isinstance(body, dict):
            return body.get("status_message") or body.get("message") or fallback
        return fallback

    async def _request(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Make API request to TMDB

        Args:
            endpoint: Path below the configured base URL
            params: Extra query parameters

        Returns:
            Decoded JSON body

        Raises:
            MissingCredentialError: no credential configured
            NotFoundError: TMDB answered 404
            RemoteError: any other non-2xx answer
            NetworkError: transport failure or timeout
        """
        if not self.config.has_credential:
            raise MissingCredentialError()

        if not settings.DISABLE_RATE_LIMITING:
            limiter = RateLimiter.get_limiter("tmdb", settings.TMDB_RATE_LIMIT)
            await limiter.acquire()

        url = f"{self.config.base_url}{endpoint}"
        request_params = self._build_params(params)
        headers = {
            "Authorization": f"Bearer {self.config.credential}",
            "Accept": "application/json",
        }

        try:
            session = await self.get_session()
            async with session.get(url, params=request_params, headers=headers) as response:
                if 200 <= response.status < 300:
                    return await response.json()

                message = await self._error_message(response)
                if response.status == 404:
                    logger.debug("TMDB 404 for %s: %s", endpoint, message)
                    raise NotFoundError(message)

                logger.error(
                    "TMDB API error: %s for %s params=%s",
                    response.status,
                    endpoint,
                    request_params,
                )
                raise RemoteError(response.status, message)

        except asyncio.TimeoutError as e:
            logger.error(f"TMDB request timeout: {endpoint}")
            raise NetworkError(f"Request to {endpoint} timed out") from e
        except aiohttp.ClientError as e:
            logger.error(f"TMDB request error: {e}")
            raise NetworkError() from e

    def _parse_page(self, response: Dict[str, Any]) -> Page[CatalogItem]:
        return Page[CatalogItem](
            page=max(1, response.get("page") or 1),
            results=[CatalogItem.from_tmdb(item) for item in response.get("results", [])],
            total_pages=response.get("total_pages") or 0,
            total_results=response.get("total_results") or 0,
        )

    async def list_by_category(self, category: Category, page: int = 1) -> Page[CatalogItem]:
        """
        Get one page of a category listing

        Args:
            category: Category to list
            page: Page number (clamped to 1..500)

        Returns:
            Page of movies
        """
        endpoint = CATEGORY_ENDPOINTS[Category(category)]
        response = await self._request(endpoint, {"page": validate_page(page, settings.MAX_PAGE)})
        return self._parse_page(response)

    async def search(
        self,
        query: str,
        page: int = 1,
        filters: Optional[CatalogFilters] = None
    ) -> Page[CatalogItem]:
        """
        Search movies by title

        Args:
            query: Free-text query; blank queries never reach the API
            page: Page number
            filters: Only ``year`` is honored by the search endpoint

        Returns:
            Page of movies
        """
        if not query or not query.strip():
            return Page[CatalogItem].empty()

        params: Dict[str, Any] = {
            "query": query.strip(),
            "page": validate_page(page, settings.MAX_PAGE),
        }
        if filters and filters.year:
            params["year"] = filters.year

        response = await self._request("/search/movie", params)
        return self._parse_page(response)

    async def get_detail(self, item_id: int) -> CatalogItem:
        """
        Get detailed information about a movie

        Args:
            item_id: TMDB movie ID

        Returns:
            CatalogItem with credits, runtime, budget and revenue
        """
        response = await self._request(
            f"/movie/{item_id}",
            {"append_to_response": "credits,videos,images"}
        )
        return CatalogItem.from_tmdb(response, max_credits=settings.MAX_CREDITS)

    async def list_taxonomy(self) -> List[Genre]:
        """Get the movie genre list"""
        response = await self._request("/genre/movie/list")
        return [Genre.model_validate(genre) for genre in response.get("genres", [])]

    async def discover(
        self,
        page: int = 1,
        filters: Optional[CatalogFilters] = None
    ) -> Page[CatalogItem]:
        """
        Discover movies with filters

        Args:
            page: Page number
            filters: Genres (any of), year, minimum rating and sort order

        Returns:
            Page of movies
        """
        params: Dict[str, Any] = {"page": validate_page(page, settings.MAX_PAGE)}

        if filters:
            if filters.genre_ids:
                params["with_genres"] = ",".join(str(genre_id) for genre_id in filters.genre_ids)
            if filters.year:
                params["year"] = filters.year
            if filters.sort_by:
                params["sort_by"] = filters.sort_by.value
            if filters.min_rating:
                params["vote_average.gte"] = filters.min_rating

        response = await self._request("/discover/movie", params)
        return self._parse_page(response)

    async def list_videos(self, item_id: int) -> List[Video]:
        """Get trailers and clips for a movie"""
        response = await self._request(f"/movie/{item_id}/videos")
        return [Video.model_validate(video) for video in response.get("results", [])]
