"""
Tests for the TMDB provider
"""
import asyncio
import aiohttp
import pytest
from unittest.mock import AsyncMock, patch
from movieapp.models.catalog import Category, CatalogFilters, SortKey
from movieapp.models.config import ProviderConfig
from movieapp.services.errors import MissingCredentialError, NetworkError, NotFoundError, RemoteError
from movieapp.services.providers.tmdb import TMDBProvider


@pytest.fixture
def tmdb_provider():
    """Create TMDB provider for testing"""
    provider = TMDBProvider(ProviderConfig(credential="test-read-token"))
    yield provider


@pytest.fixture
def mock_page_response():
    """Mock list response from TMDB API"""
    return {
        "page": 1,
        "results": [
            {
                "id": 278,
                "title": "The Shawshank Redemption",
                "overview": None,
                "vote_average": 8.7,
                "vote_count": 3200,
                "release_date": "1994-09-23",
                "poster_path": "/path2.jpg",
                "genre_ids": [18, 80],
            },
            {
                "id": 13,
                "title": "Forrest Gump",
                "vote_average": 8.5,
                "vote_count": 2800,
                "release_date": "1994-07-06",
                "poster_path": None,
                "genre_ids": [35, 18],
            },
        ],
        "total_pages": 5,
        "total_results": 87,
    }


def attach_session(provider, session):
    """Route the provider's HTTP calls to a fake session"""
    return patch.object(provider, "get_session", new_callable=AsyncMock, return_value=session)


class TestRequest:
    """Transport, headers and error mapping"""

    @pytest.mark.asyncio
    async def test_request_sends_bearer_and_locale(
        self, tmdb_provider, fake_session_class, fake_response_class, mock_page_response
    ):
        session = fake_session_class(fake_response_class(payload=mock_page_response))

        with attach_session(tmdb_provider, session):
            await tmdb_provider.list_by_category(Category.TRENDING, 1)

        call = session.calls[0]
        assert call["url"] == "https://api.themoviedb.org/3/movie/popular"
        assert call["headers"]["Authorization"] == "Bearer test-read-token"
        assert call["params"]["language"] == "en-US"
        assert call["params"]["region"] == "US"
        assert call["params"]["include_adult"] == "false"
        assert call["params"]["page"] == "1"

    @pytest.mark.asyncio
    async def test_adult_flag_omitted_when_allowed(self, fake_session_class):
        provider = TMDBProvider(ProviderConfig(credential="t", adult_content_allowed=True))
        session = fake_session_class()

        with attach_session(provider, session):
            await provider.list_taxonomy()

        assert "include_adult" not in session.calls[0]["params"]

    @pytest.mark.asyncio
    async def test_missing_credential_fails_before_io(self):
        provider = TMDBProvider(ProviderConfig(credential="   "))

        with patch.object(provider, "get_session", new_callable=AsyncMock) as mock_session:
            with pytest.raises(MissingCredentialError) as exc_info:
                await provider.list_by_category(Category.TRENDING)

        mock_session.assert_not_called()
        assert "API key is required" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_remote_error_uses_status_message(
        self, tmdb_provider, fake_session_class, fake_response_class
    ):
        response = fake_response_class(
            status=401,
            reason="Unauthorized",
            payload={"status_code": 7, "status_message": "Invalid API key: You must be granted a valid key."},
        )

        with attach_session(tmdb_provider, fake_session_class(response)):
            with pytest.raises(RemoteError) as exc_info:
                await tmdb_provider.list_by_category(Category.TOP_RATED)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Invalid API key: You must be granted a valid key."

    @pytest.mark.asyncio
    async def test_remote_error_falls_back_to_status_text(
        self, tmdb_provider, fake_session_class, fake_response_class
    ):
        response = fake_response_class(
            status=500,
            reason="Internal Server Error",
            json_error=ValueError("no json"),
        )

        with attach_session(tmdb_provider, fake_session_class(response)):
            with pytest.raises(RemoteError) as exc_info:
                await tmdb_provider.list_by_category(Category.UPCOMING)

        assert exc_info.value.message == "HTTP 500: Internal Server Error"

    @pytest.mark.asyncio
    async def test_404_raises_not_found(self, tmdb_provider, fake_session_class, fake_response_class):
        response = fake_response_class(
            status=404,
            reason="Not Found",
            payload={"status_message": "The resource you requested could not be found."},
        )

        with attach_session(tmdb_provider, fake_session_class(response)):
            with pytest.raises(NotFoundError) as exc_info:
                await tmdb_provider.get_detail(999999)

        assert isinstance(exc_info.value, RemoteError)
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        aiohttp.ClientConnectionError("connection refused"),
        asyncio.TimeoutError(),
    ])
    async def test_transport_failures_become_network_errors(
        self, tmdb_provider, fake_session_class, error
    ):
        with attach_session(tmdb_provider, fake_session_class(error=error)):
            with pytest.raises(NetworkError):
                await tmdb_provider.list_by_category(Category.TRENDING)


class TestOperations:
    """Endpoint mapping and response parsing"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("category,endpoint", [
        (Category.TRENDING, "/movie/popular"),
        (Category.NOW_SHOWING, "/movie/now_playing"),
        (Category.TOP_RATED, "/movie/top_rated"),
        (Category.UPCOMING, "/movie/upcoming"),
    ])
    async def test_category_endpoints(self, tmdb_provider, mock_page_response, category, endpoint):
        with patch.object(tmdb_provider, "_request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = mock_page_response

            page = await tmdb_provider.list_by_category(category, 1)

        assert mock_request.call_args[0][0] == endpoint
        assert page.total_pages == 5
        assert page.total_results == 87
        assert page.results[0].overview == ""
        assert page.results[1].poster_path is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("requested,sent", [(0, 1), (-2, 2), (750, 500)])
    async def test_page_is_clamped(self, tmdb_provider, mock_page_response, requested, sent):
        with patch.object(tmdb_provider, "_request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = mock_page_response

            await tmdb_provider.list_by_category(Category.TRENDING, requested)

        assert mock_request.call_args[0][1]["page"] == sent

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   "])
    async def test_blank_search_makes_no_request(self, tmdb_provider, query):
        with patch.object(tmdb_provider, "_request", new_callable=AsyncMock) as mock_request:
            page = await tmdb_provider.search(query)

        mock_request.assert_not_called()
        assert page.results == []
        assert page.total_results == 0

    @pytest.mark.asyncio
    async def test_search_params(self, tmdb_provider, mock_page_response):
        with patch.object(tmdb_provider, "_request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = mock_page_response

            await tmdb_provider.search("  shawshank ", 2, CatalogFilters(year=1994))

        endpoint, params = mock_request.call_args[0]
        assert endpoint == "/search/movie"
        assert params == {"query": "shawshank", "page": 2, "year": 1994}

    @pytest.mark.asyncio
    async def test_detail_truncates_credits(self, tmdb_provider, sample_tmdb_movie):
        with patch.object(tmdb_provider, "_request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = sample_tmdb_movie

            item = await tmdb_provider.get_detail(550)

        endpoint, params = mock_request.call_args[0]
        assert endpoint == "/movie/550"
        assert params["append_to_response"] == "credits,videos,images"
        assert len(item.cast) == 10
        assert item.crew[0].job == "Director"
        assert item.genre_ids == [18]
        assert item.runtime == 139

    @pytest.mark.asyncio
    async def test_discover_params(self, tmdb_provider, mock_page_response):
        filters = CatalogFilters(
            genre_ids=[28, 12],
            year=2010,
            min_rating=7.5,
            sort_by=SortKey.RATING_DESC,
        )

        with patch.object(tmdb_provider, "_request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = mock_page_response

            await tmdb_provider.discover(3, filters)

        endpoint, params = mock_request.call_args[0]
        assert endpoint == "/discover/movie"
        assert params == {
            "page": 3,
            "with_genres": "28,12",
            "year": 2010,
            "sort_by": "vote_average.desc",
            "vote_average.gte": 7.5,
        }

    @pytest.mark.asyncio
    async def test_genres_and_videos(self, tmdb_provider):
        with patch.object(tmdb_provider, "_request", new_callable=AsyncMock) as mock_request:
            mock_request.side_effect = [
                {"genres": [{"id": 28, "name": "Action"}]},
                {"id": 550, "results": [{"key": "SUXWAEX2jlg", "name": "Trailer", "site": "YouTube", "type": "Trailer"}]},
            ]

            genres = await tmdb_provider.list_taxonomy()
            videos = await tmdb_provider.list_videos(550)

        assert genres[0].name == "Action"
        assert videos[0].key == "SUXWAEX2jlg"

    def test_capabilities(self, tmdb_provider):
        capabilities = tmdb_provider.capabilities()

        assert capabilities.discover is not None
        assert capabilities.list_videos is not None
