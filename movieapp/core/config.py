"""
Configuration Management
Loads and validates environment variables
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
import secrets


class Settings(BaseSettings):
    """Application settings from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # TMDB (no key means the bundled dataset is used)
    TMDB_API_KEY: Optional[str] = None
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p"
    LOCALE: str = "en-US"
    REGION: str = "US"
    INCLUDE_ADULT: bool = False
    TMDB_TIMEOUT_SECONDS: float = 10.0

    # Secret used to encrypt the persisted credential
    CREDENTIAL_KEY: str = secrets.token_hex(32)

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    STORAGE_PREFIX: str = "movieapp_"
    CACHE_NAMESPACE: str = "movieapp_movie_cache"

    # Cache TTLs (milliseconds)
    CACHE_TTL_TRENDING_MS: int = 15 * 60 * 1000  # 15 minutes
    CACHE_TTL_NOW_SHOWING_MS: int = 15 * 60 * 1000
    CACHE_TTL_TOP_RATED_MS: int = 15 * 60 * 1000
    CACHE_TTL_UPCOMING_MS: int = 15 * 60 * 1000
    CACHE_TTL_DISCOVER_MS: int = 15 * 60 * 1000
    CACHE_TTL_SEARCH_MS: int = 5 * 60 * 1000  # 5 minutes
    CACHE_TTL_DETAILS_MS: int = 60 * 60 * 1000  # 1 hour
    CACHE_TTL_VIDEOS_MS: int = 60 * 60 * 1000
    CACHE_TTL_GENRES_MS: int = 24 * 60 * 60 * 1000  # 24 hours

    # Pagination
    PAGE_SIZE: int = 20
    MAX_PAGE: int = 500  # TMDB rejects pages above 500
    MAX_CREDITS: int = 10

    # Local dataset provider
    LOCAL_PROVIDER_DELAY_MS: int = 800

    # Search and user data
    SEARCH_DEBOUNCE_MS: int = 500
    RECENT_SEARCH_LIMIT: int = 5
    WATCHLIST_LIMIT: int = 100
    VIEW_HISTORY_LIMIT: int = 50

    # Per-movie slices kept by a context (least recently used are dropped)
    ITEM_SLICE_LIMIT: int = 100

    # API Rate Limits (requests per second)
    TMDB_RATE_LIMIT: int = 40
    DISABLE_RATE_LIMITING: bool = False

    # Development
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"


settings = Settings()
