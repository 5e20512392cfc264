"""
Search Controller
Debounced query input driving the search slice, plus recent searches
"""
import asyncio
import logging
from typing import List, Optional

from movieapp.models.catalog import CatalogFilters, SliceState
from movieapp.services.slices import ResourceSlice
from movieapp.services.store import KeyValueStore
from movieapp.utils.helpers import normalize_query, push_recent

logger = logging.getLogger(__name__)


class SearchController:
    """
    Turns raw keystrokes into committed queries.

    ``on_input`` restarts a quiet-period timer; only when it elapses is the
    text committed and the search slice loaded. The committed query is
    kept apart from the raw input.
    """

    def __init__(
        self,
        search_slice: ResourceSlice,
        store: KeyValueStore,
        debounce_ms: int = 500,
        recent_limit: int = 5,
        storage_key: str = "movieapp_recent_searches",
    ):
        self.slice = search_slice
        self.store = store
        self.debounce_ms = debounce_ms
        self.recent_limit = recent_limit
        self.storage_key = storage_key
        self.raw_input = ""
        self.query = ""
        self.filters: Optional[CatalogFilters] = None
        self._pending: Optional[asyncio.Task] = None

    @property
    def state(self) -> SliceState:
        return self.slice.state

    def on_input(self, text: str, filters: Optional[CatalogFilters] = None):
        """Record raw input and (re)start the debounce timer"""
        self.raw_input = text
        self.cancel()
        self._pending = asyncio.create_task(self._commit_later(text, filters))

    async def _commit_later(self, text: str, filters: Optional[CatalogFilters]):
        try:
            await asyncio.sleep(self.debounce_ms / 1000)
        except asyncio.CancelledError:
            logger.debug("Debounced search superseded")
            raise
        await self.commit(text, filters)

    def cancel(self):
        """Drop a pending debounced commit"""
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def flush(self):
        """Wait for the pending debounced commit, if any"""
        pending = self._pending
        if pending is not None:
            try:
                await pending
            except asyncio.CancelledError:
                pass

    async def commit(
        self,
        text: str,
        filters: Optional[CatalogFilters] = None,
        page: int = 1
    ) -> SliceState:
        """
        Make text the active query and load its first page

        A blank query clears the results and returns the slice to idle
        without calling the provider.
        """
        trimmed = (text or "").strip()
        self.filters = filters
        if not trimmed:
            self.query = ""
            self.slice.reset()
            return self.slice.state

        self.query = trimmed
        await self.add_recent(trimmed)
        return await self.slice.load(page, filters, query=trimmed)

    async def load_page(self, page: int) -> SliceState:
        """Load another page of the committed query"""
        if not self.query:
            return self.slice.state
        return await self.slice.load(page, self.filters, query=self.query)

    def clear(self):
        """Forget input, query and results"""
        self.cancel()
        self.raw_input = ""
        self.query = ""
        self.filters = None
        self.slice.reset()

    async def recent_searches(self) -> List[str]:
        """Recent queries, newest first"""
        stored = await self.store.get(self.storage_key)
        if not isinstance(stored, list):
            return []
        return [item for item in stored if isinstance(item, str)][:self.recent_limit]

    async def add_recent(self, query: str) -> List[str]:
        normalized = normalize_query(query)
        if not normalized:
            return await self.recent_searches()
        updated = push_recent(await self.recent_searches(), normalized, self.recent_limit)
        await self.store.set(self.storage_key, updated)
        return updated

    async def clear_recent(self):
        await self.store.remove(self.storage_key)
