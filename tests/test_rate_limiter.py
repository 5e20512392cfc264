"""
Tests for the shared token bucket
"""
import pytest
from movieapp.utils.rate_limiter import RateLimiter


def test_limiter_is_shared_per_service():
    assert RateLimiter.get_limiter("tmdb", 40) is RateLimiter.get_limiter("tmdb", 40)
    assert RateLimiter.get_limiter("tmdb", 40) is not RateLimiter.get_limiter("other", 40)


def test_rate_change_replaces_limiter():
    first = RateLimiter.get_limiter("tmdb", 40)

    assert RateLimiter.get_limiter("tmdb", 10) is not first


@pytest.mark.asyncio
async def test_acquire_spends_tokens():
    limiter = RateLimiter("tmdb", 5)

    for _ in range(3):
        await limiter.acquire()

    assert limiter.tokens < 3


@pytest.mark.asyncio
async def test_zero_rate_never_waits():
    limiter = RateLimiter("tmdb", 0)

    for _ in range(100):
        await limiter.acquire()

    assert limiter.tokens == 0
