"""
Test configuration and fixtures
"""
import os

# Keep the bundled provider instant and the limiter out of the way under test
os.environ.setdefault("LOCAL_PROVIDER_DELAY_MS", "0")
os.environ.setdefault("DISABLE_RATE_LIMITING", "true")

import pytest
from fakeredis import aioredis as fakeredis

from movieapp.core.config import Settings
from movieapp.services.cache import TTLCache
from movieapp.services.context import CatalogContext
from movieapp.services.providers.local import LocalProvider
from movieapp.services.store import KeyValueStore
from movieapp.utils.rate_limiter import RateLimiter


class FakeClock:
    """Epoch-millis clock advanced by hand"""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int):
        self.now += ms


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse"""

    def __init__(self, status=200, payload=None, reason="OK", json_error=None):
        self.status = status
        self.reason = reason
        self._payload = payload
        self._json_error = json_error

    async def json(self, content_type="application/json"):
        if self._json_error is not None:
            raise self._json_error
        return self._payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Records GET calls and answers with a canned response or error"""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse(payload={})
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, params=None, headers=None):
        self.calls.append({"url": url, "params": params, "headers": headers})
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def reset_rate_limiters():
    """Shared limiters must not leak between event loops"""
    RateLimiter.reset()
    yield
    RateLimiter.reset()


@pytest.fixture
async def fake_redis():
    """Provide fake Redis client for testing"""
    redis_client = fakeredis.FakeRedis(decode_responses=True)
    yield redis_client
    await redis_client.flushall()
    await redis_client.aclose()


@pytest.fixture
def test_settings():
    """Settings isolated from the environment"""
    return Settings(
        _env_file=None,
        TMDB_API_KEY=None,
        CREDENTIAL_KEY="test-credential-key",
        LOCAL_PROVIDER_DELAY_MS=0,
        DISABLE_RATE_LIMITING=True,
        SEARCH_DEBOUNCE_MS=20,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(fake_redis):
    return KeyValueStore(client=fake_redis)


@pytest.fixture
def cache(store, clock):
    return TTLCache(store, clock=clock)


@pytest.fixture
def local_provider():
    return LocalProvider(delay_ms=0)


@pytest.fixture
async def context(fake_redis, test_settings, clock):
    """Anonymous catalog context on fake Redis"""
    catalog = await CatalogContext.create(test_settings, redis_client=fake_redis, clock=clock)
    yield catalog
    await catalog.close()


@pytest.fixture
def sample_tmdb_movie():
    """Sample TMDB movie detail payload"""
    return {
        "id": 550,
        "title": "Fight Club",
        "original_title": "Fight Club",
        "poster_path": "/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg",
        "backdrop_path": "/fCayJrkfRaCRCTh8GqN30f8oyQF.jpg",
        "overview": "A ticking-time-bomb insomniac...",
        "release_date": "1999-10-15",
        "vote_average": 8.4,
        "vote_count": 26280,
        "popularity": 45.3,
        "runtime": 139,
        "budget": 63000000,
        "revenue": 100853753,
        "imdb_id": "tt0137523",
        "tagline": "Mischief. Mayhem. Soap.",
        "genres": [{"id": 18, "name": "Drama"}],
        "credits": {
            "cast": [
                {"id": index, "name": f"Actor {index}", "character": f"Role {index}", "order": index}
                for index in range(15)
            ],
            "crew": [{"id": 7467, "name": "David Fincher", "job": "Director"}],
        },
    }


@pytest.fixture
def fake_response_class():
    return FakeResponse


@pytest.fixture
def fake_session_class():
    return FakeSession
