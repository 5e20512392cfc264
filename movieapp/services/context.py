"""
Catalog Context
Explicitly constructed bundle of store, cache, providers and slices
"""
import logging
from collections import OrderedDict
from typing import Callable, Dict, Optional, Tuple

import redis.asyncio as redis

from movieapp.core.config import Settings, settings as default_settings
from movieapp.models.config import ProviderConfig
from movieapp.services import resources
from movieapp.services.cache import TTLCache
from movieapp.services.library import UserLibrary
from movieapp.services.providers.base import CatalogProvider
from movieapp.services.providers.local import LocalProvider
from movieapp.services.search import SearchController
from movieapp.services.selector import ProviderSelector
from movieapp.services.settings import SettingsManager
from movieapp.services.slices import ResourceSlice
from movieapp.services.store import KeyValueStore

logger = logging.getLogger(__name__)


class CatalogContext:
    """
    Everything a client session needs, created by ``create`` and torn
    down by ``close``. Contexts share nothing except the backing store.
    """

    def __init__(
        self,
        app_settings: Settings,
        store: KeyValueStore,
        cache: TTLCache,
        settings_manager: SettingsManager,
        selector: ProviderSelector,
        user_id: Optional[str] = None,
    ):
        self.settings = app_settings
        self.store = store
        self.cache = cache
        self.settings_manager = settings_manager
        self.selector = selector
        self.user_id = user_id
        self.slices: Dict[str, ResourceSlice] = {
            name: self._new_slice(name)
            for name in (*resources.LISTING_RESOURCES, resources.SEARCH, resources.GENRES)
        }
        self._item_slices: "OrderedDict[Tuple[str, int], ResourceSlice]" = OrderedDict()
        self.search = self.search_controller(user_id, self.slices[resources.SEARCH])

        self.library: Optional[UserLibrary] = None
        if user_id:
            self.library = UserLibrary(
                store,
                user_id,
                prefix=app_settings.STORAGE_PREFIX,
                watchlist_limit=app_settings.WATCHLIST_LIMIT,
                history_limit=app_settings.VIEW_HISTORY_LIMIT,
            )

    @classmethod
    async def create(
        cls,
        app_settings: Optional[Settings] = None,
        redis_client: Optional[redis.Redis] = None,
        user_id: Optional[str] = None,
        clock: Optional[Callable[[], int]] = None,
        remote_factory: Optional[Callable[[ProviderConfig], CatalogProvider]] = None,
    ) -> "CatalogContext":
        """
        Build a context and load persisted configuration

        Args:
            app_settings: Settings to use (defaults to environment settings)
            redis_client: Existing Redis client (e.g. fakeredis in tests)
            user_id: Signed-in user, if any
            clock: Epoch-millis clock for the TTL cache
            remote_factory: Builds the remote provider (defaults to TMDB)

        Returns:
            Ready-to-use CatalogContext
        """
        app_settings = app_settings or default_settings
        store = KeyValueStore(
            url=app_settings.REDIS_URL,
            prefix=app_settings.STORAGE_PREFIX,
            client=redis_client,
        )
        cache = TTLCache(store, clock=clock)
        settings_manager = SettingsManager(store, app_settings)
        selector = ProviderSelector(
            settings_manager.current,
            local_factory=lambda cfg: LocalProvider(
                page_size=app_settings.PAGE_SIZE,
                delay_ms=app_settings.LOCAL_PROVIDER_DELAY_MS,
                image_base_url=cfg.image_base_url,
            ),
            remote_factory=remote_factory,
        )
        settings_manager.subscribe(selector.update)

        context = cls(app_settings, store, cache, settings_manager, selector, user_id=user_id)
        await settings_manager.load()
        if context.library is not None:
            await context.library.load()
        logger.info(f"Catalog context ready (user={'yes' if user_id else 'no'})")
        return context

    def _new_slice(self, name: str, **arguments) -> ResourceSlice:
        return ResourceSlice(
            resources.get_resource(name),
            self.cache,
            self.selector,
            self.settings,
            arguments=arguments,
        )

    def request_slice(self, name: str, **arguments) -> ResourceSlice:
        """
        Fresh slice over the shared cache and selector

        For callers serving concurrent requests: each gets its own state
        while still sharing cached pages. KeyError if the name is unknown.
        """
        return self._new_slice(name, **arguments)

    def search_controller(
        self,
        user_id: Optional[str] = None,
        search_slice: Optional[ResourceSlice] = None,
    ) -> SearchController:
        """Search controller over the user's recent-search list; a fresh slice unless one is given"""
        recent_key = f"{self.settings.STORAGE_PREFIX}recent_searches"
        if user_id:
            recent_key = f"{recent_key}_{user_id}"
        return SearchController(
            search_slice or self._new_slice(resources.SEARCH),
            self.store,
            debounce_ms=self.settings.SEARCH_DEBOUNCE_MS,
            recent_limit=self.settings.RECENT_SEARCH_LIMIT,
            storage_key=recent_key,
        )

    def slice(self, name: str) -> ResourceSlice:
        """Listing, search or genre slice by resource name; KeyError if unknown"""
        return self.slices[name]

    def _item_slice(self, name: str, item_id: int) -> ResourceSlice:
        key = (name, item_id)
        item_slice = self._item_slices.get(key)
        if item_slice is None:
            item_slice = self._new_slice(name, item_id=item_id)
            self._item_slices[key] = item_slice
            while len(self._item_slices) > self.settings.ITEM_SLICE_LIMIT:
                self._item_slices.popitem(last=False)
        else:
            self._item_slices.move_to_end(key)
        return item_slice

    def detail(self, item_id: int) -> ResourceSlice:
        """Detail slice for one movie"""
        return self._item_slice(resources.DETAILS, item_id)

    def videos(self, item_id: int) -> ResourceSlice:
        """Videos slice for one movie"""
        return self._item_slice(resources.VIDEOS, item_id)

    async def close(self):
        """Cancel pending work and release providers and the store"""
        self.search.cancel()
        await self.selector.close()
        await self.store.close()
        logger.info("Catalog context closed")
