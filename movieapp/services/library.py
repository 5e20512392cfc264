"""
User Library
Per-user watchlist, favorites, ratings and view history
"""
import logging
from typing import Dict, List

from pydantic import BaseModel, Field, ValidationError

from movieapp.services.store import KeyValueStore
from movieapp.utils.helpers import push_recent

logger = logging.getLogger(__name__)


class UserData(BaseModel):
    """Bookmarks of one user"""
    watchlist: List[int] = Field(default_factory=list)
    favorites: List[int] = Field(default_factory=list)
    ratings: Dict[int, int] = Field(default_factory=dict)
    view_history: List[int] = Field(default_factory=list)


class UserLibrary:
    """
    Bookmark storage for the signed-in user.

    Data lives in the key-value store under a key namespaced by user id
    and is written back after every change.
    """

    def __init__(
        self,
        store: KeyValueStore,
        user_id: str,
        prefix: str = "movieapp_",
        watchlist_limit: int = 100,
        history_limit: int = 50,
    ):
        if not user_id:
            raise ValueError("A user id is required for the library")
        self.store = store
        self.user_id = user_id
        self.storage_key = f"{prefix}user_data_{user_id}"
        self.watchlist_limit = watchlist_limit
        self.history_limit = history_limit
        self.data = UserData()

    async def load(self) -> UserData:
        """Read the user's data from the store"""
        stored = await self.store.get(self.storage_key)
        if stored is None:
            self.data = UserData()
        else:
            try:
                self.data = UserData.model_validate(stored)
            except ValidationError as e:
                logger.warning(f"Resetting unreadable library for user {self.user_id}: {e}")
                self.data = UserData()
        return self.data

    async def _save(self):
        await self.store.set(self.storage_key, self.data.model_dump(mode="json"))

    async def add_to_watchlist(self, item_id: int) -> bool:
        """Add a movie to the watchlist; False if already there or full"""
        if item_id in self.data.watchlist:
            return False
        if len(self.data.watchlist) >= self.watchlist_limit:
            logger.info(f"Watchlist full for user {self.user_id}")
            return False
        self.data.watchlist.insert(0, item_id)
        await self._save()
        return True

    async def remove_from_watchlist(self, item_id: int) -> bool:
        if item_id not in self.data.watchlist:
            return False
        self.data.watchlist.remove(item_id)
        await self._save()
        return True

    def is_in_watchlist(self, item_id: int) -> bool:
        return item_id in self.data.watchlist

    async def add_to_favorites(self, item_id: int) -> bool:
        if item_id in self.data.favorites:
            return False
        self.data.favorites.insert(0, item_id)
        await self._save()
        return True

    async def remove_from_favorites(self, item_id: int) -> bool:
        if item_id not in self.data.favorites:
            return False
        self.data.favorites.remove(item_id)
        await self._save()
        return True

    def is_in_favorites(self, item_id: int) -> bool:
        return item_id in self.data.favorites

    async def rate(self, item_id: int, rating: int):
        """
        Rate a movie

        Args:
            item_id: Movie ID
            rating: Integer from 1 to 10

        Raises:
            ValueError: rating out of range
        """
        if not 1 <= rating <= 10:
            raise ValueError("Rating must be between 1 and 10")
        self.data.ratings[item_id] = rating
        await self._save()

    def get_rating(self, item_id: int):
        return self.data.ratings.get(item_id)

    async def add_to_view_history(self, item_id: int):
        """Move a movie to the front of the view history"""
        self.data.view_history = push_recent(self.data.view_history, item_id, self.history_limit)
        await self._save()
