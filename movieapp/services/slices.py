"""
Resource Slices
Generic cache-aside loader with loading/error/pagination state per facet
"""
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from movieapp.core.config import Settings
from movieapp.models.catalog import CatalogFilters, Page, SliceState
from movieapp.services.cache import TTLCache
from movieapp.services.errors import NotFoundError, describe_error
from movieapp.services.resources import ResourceDefinition, describe_arguments
from movieapp.services.selector import ProviderSelector
from movieapp.utils.helpers import build_cache_key

logger = logging.getLogger(__name__)

IDLE = "idle"
LOADING = "loading"
READY = "ready"
FAILED = "failed"


class ResourceSlice:
    """
    Independently loading, paginated view over one resource.

    ``load`` checks the TTL cache, falls back to the selector's current
    provider on a miss and writes the result back. Provider errors end up
    in ``state.error``; they never escape ``load``.

    Every call takes a new generation number and a result is only applied
    while its generation is still the latest, so when loads overlap the
    last one issued wins.
    """

    def __init__(
        self,
        definition: ResourceDefinition,
        cache: TTLCache,
        selector: ProviderSelector,
        app_settings: Settings,
        arguments: Optional[Dict[str, Any]] = None,
    ):
        self.definition = definition
        self.cache = cache
        self.selector = selector
        self.app_settings = app_settings
        self.arguments: Dict[str, Any] = dict(arguments or {})
        self.state = SliceState()
        self.data: Optional[Page] = None
        self._generation = 0

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def generation(self) -> int:
        return self._generation

    def cache_key(
        self,
        page: int,
        filters: Optional[CatalogFilters] = None,
        arguments: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Deterministic cache key for a page of this resource

        Bound arguments (item id, query) and set filters are merged into
        the serialized part of the key.
        """
        payload: Dict[str, Any] = {**self.arguments, **(arguments or {})}
        if filters is not None:
            payload.update(filters.to_key_payload())
        return build_cache_key(
            self.app_settings.CACHE_NAMESPACE,
            self.definition.name,
            page,
            payload,
        )

    @staticmethod
    def _page_state(page: Page, from_cache: bool) -> SliceState:
        return SliceState(
            status=READY,
            results=list(page.results),
            loading=False,
            error=None,
            error_kind=None,
            page=page.page,
            total_pages=page.total_pages,
            total_results=page.total_results,
            from_cache=from_cache,
        )

    def _settle(self, generation: int, state: SliceState, data: Optional[Page]) -> SliceState:
        """Apply a finished load if it is still the latest; return its own state either way"""
        if generation == self._generation:
            self.data = data
            self.state = state
        else:
            logger.debug("Discarding superseded %s page %s", self.name, state.page)
        return state

    async def _read_cached(self, key: str) -> Optional[Page]:
        cached = await self.cache.read(key, self.definition.ttl_ms(self.app_settings))
        if cached is None:
            return None
        try:
            return self.definition.page_model.model_validate(cached)
        except ValidationError as e:
            logger.warning(f"Discarding cached {self.name} page that failed validation ({key}): {e}")
            return None

    async def load(
        self,
        page: int = 1,
        filters: Optional[CatalogFilters] = None,
        **arguments: Any
    ) -> SliceState:
        """
        Load one page of the resource

        Args:
            page: 1-based page number; bounds are the caller's responsibility
            filters: Optional discover/search filters
            **arguments: Per-call fetch arguments (e.g. query)

        Returns:
            State produced by this load, also applied to ``state`` unless a
            newer load was issued meanwhile
        """
        self._generation += 1
        generation = self._generation
        previous = self.state
        call_arguments = {**self.arguments, **arguments}
        key = self.cache_key(page, filters, arguments)

        cached = await self._read_cached(key)
        if cached is not None:
            logger.debug("Cache hit for %s page %s", self.name, page)
            return self._settle(generation, self._page_state(cached, from_cache=True), cached)

        if generation == self._generation:
            self.state = previous.model_copy(
                update={"status": LOADING, "loading": True, "error": None, "error_kind": None}
            )

        try:
            async with self.selector.lease() as (provider, capabilities):
                logger.debug(
                    "Fetching %s page %s from %s provider (%s)",
                    self.name,
                    page,
                    provider.kind,
                    describe_arguments(call_arguments),
                )
                result = await self.definition.fetch(provider, capabilities, page, filters, **call_arguments)
        except NotFoundError:
            not_found = SliceState(status=READY, error_kind=NotFoundError.kind, page=page)
            return self._settle(generation, not_found, None)
        except Exception as e:
            kind, message = describe_error(e, self.name)
            # Previous results stay visible next to the error
            failed = previous.model_copy(
                update={"status": FAILED, "loading": False, "error": message, "error_kind": kind}
            )
            return self._settle(generation, failed, self.data)

        await self.cache.write(key, result.model_dump(mode="json"))
        return self._settle(generation, self._page_state(result, from_cache=False), result)

    def reset(self):
        """Back to idle; results of loads still in flight are discarded"""
        self._generation += 1
        self.data = None
        self.state = SliceState()
