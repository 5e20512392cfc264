"""
Catalog Provider Contract
Abstract data-access interface shared by the remote and local providers
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from movieapp.models.catalog import Category, CatalogFilters, CatalogItem, Genre, Page, Video

DiscoverFn = Callable[[int, Optional[CatalogFilters]], Awaitable[Page[CatalogItem]]]
VideosFn = Callable[[int], Awaitable[List[Video]]]

POSTER_PLACEHOLDER = "/placeholder-movie.jpg"
BACKDROP_PLACEHOLDER = "/placeholder-backdrop.jpg"


@dataclass(frozen=True)
class ProviderCapabilities:
    """
    Optional operations of a provider.

    Each field is a bound coroutine function, or None when the provider
    does not implement the operation.
    """
    discover: Optional[DiscoverFn] = None
    list_videos: Optional[VideosFn] = None


class CatalogProvider(ABC):
    """
    Data-access contract for the movie catalog.

    Subclasses implement the required operations; ``discover`` and
    ``list_videos`` are optional and advertised through ``capabilities()``.
    """

    kind: str = "abstract"
    image_base_url: str = "https://image.tmdb.org/t/p"

    @abstractmethod
    async def list_by_category(self, category: Category, page: int = 1) -> Page[CatalogItem]:
        """List one page of a category (trending, now-showing, ...)"""

    @abstractmethod
    async def search(
        self,
        query: str,
        page: int = 1,
        filters: Optional[CatalogFilters] = None
    ) -> Page[CatalogItem]:
        """Search by free text; blank queries return an empty page"""

    @abstractmethod
    async def get_detail(self, item_id: int) -> CatalogItem:
        """Fetch one movie with extended fields; raises NotFoundError"""

    @abstractmethod
    async def list_taxonomy(self) -> List[Genre]:
        """Full genre vocabulary"""

    def capabilities(self) -> ProviderCapabilities:
        """Detect which optional operations this provider implements"""
        return ProviderCapabilities(
            discover=getattr(self, "discover", None),
            list_videos=getattr(self, "list_videos", None),
        )

    def image_url(self, path: Optional[str], size: str = "w500") -> str:
        """Poster URL for an image path, or a placeholder"""
        if not path:
            return POSTER_PLACEHOLDER
        return f"{self.image_base_url}/{size}{path}"

    def backdrop_url(self, path: Optional[str], size: str = "w1280") -> str:
        """Backdrop URL for an image path, or a placeholder"""
        if not path:
            return BACKDROP_PLACEHOLDER
        return f"{self.image_base_url}/{size}{path}"

    async def close(self):
        """Release network resources (no-op by default)"""
        return None
