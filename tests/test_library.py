"""
Tests for the per-user library
"""
import pytest
from movieapp.services.library import UserLibrary


@pytest.fixture
async def library(store):
    library = UserLibrary(store, "user-1", watchlist_limit=3, history_limit=3)
    await library.load()
    return library


def test_user_id_is_required(store):
    with pytest.raises(ValueError):
        UserLibrary(store, "")


class TestWatchlist:

    @pytest.mark.asyncio
    async def test_add_newest_first(self, library):
        assert await library.add_to_watchlist(1) is True
        assert await library.add_to_watchlist(2) is True

        assert library.data.watchlist == [2, 1]
        assert library.is_in_watchlist(1)

    @pytest.mark.asyncio
    async def test_duplicates_are_rejected(self, library):
        await library.add_to_watchlist(1)

        assert await library.add_to_watchlist(1) is False
        assert library.data.watchlist == [1]

    @pytest.mark.asyncio
    async def test_limit(self, library):
        for item_id in (1, 2, 3):
            await library.add_to_watchlist(item_id)

        assert await library.add_to_watchlist(4) is False
        assert library.data.watchlist == [3, 2, 1]

    @pytest.mark.asyncio
    async def test_remove(self, library):
        await library.add_to_watchlist(1)

        assert await library.remove_from_watchlist(1) is True
        assert await library.remove_from_watchlist(1) is False
        assert not library.is_in_watchlist(1)


class TestFavoritesAndRatings:

    @pytest.mark.asyncio
    async def test_favorites(self, library):
        assert await library.add_to_favorites(5) is True
        assert await library.add_to_favorites(5) is False
        assert library.is_in_favorites(5)

        assert await library.remove_from_favorites(5) is True
        assert not library.is_in_favorites(5)

    @pytest.mark.asyncio
    async def test_rate(self, library):
        await library.rate(7, 8)
        await library.rate(7, 9)

        assert library.get_rating(7) == 9
        assert library.get_rating(8) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rating", [0, 11, -1])
    async def test_rating_out_of_range(self, library, rating):
        with pytest.raises(ValueError):
            await library.rate(7, rating)


@pytest.mark.asyncio
async def test_view_history_is_bounded_and_deduplicated(library):
    for item_id in (1, 2, 3, 1, 4):
        await library.add_to_view_history(item_id)

    assert library.data.view_history == [4, 1, 3]


@pytest.mark.asyncio
async def test_data_is_persisted_per_user(library, store):
    await library.add_to_watchlist(1)
    await library.rate(1, 10)

    same_user = UserLibrary(store, "user-1")
    other_user = UserLibrary(store, "user-2")

    assert (await same_user.load()).watchlist == [1]
    assert same_user.get_rating(1) == 10
    assert (await other_user.load()).watchlist == []


@pytest.mark.asyncio
async def test_unreadable_data_resets(store):
    await store.set("movieapp_user_data_user-3", {"watchlist": "not a list"})

    library = UserLibrary(store, "user-3")
    data = await library.load()

    assert data.watchlist == []
