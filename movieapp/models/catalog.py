"""
Catalog Models
Pydantic models for movies, pages and filters
"""
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

MAX_CREDITS = 10


class Category(str, Enum):
    """Category listings every provider must support"""
    TRENDING = "trending"
    NOW_SHOWING = "now-showing"
    TOP_RATED = "top-rated"
    UPCOMING = "upcoming"


class SortKey(str, Enum):
    """Sort orders accepted by discover"""
    POPULARITY_DESC = "popularity.desc"
    POPULARITY_ASC = "popularity.asc"
    RATING_DESC = "vote_average.desc"
    RATING_ASC = "vote_average.asc"
    RELEASE_DATE_DESC = "release_date.desc"
    RELEASE_DATE_ASC = "release_date.asc"
    TITLE_ASC = "title.asc"
    TITLE_DESC = "title.desc"


class Genre(BaseModel):
    """Taxonomy tag"""
    id: int
    name: str


class CastMember(BaseModel):
    id: int
    name: str
    character: str = ""
    profile_path: Optional[str] = None
    order: Optional[int] = None


class CrewMember(BaseModel):
    id: int
    name: str
    job: str = ""
    department: Optional[str] = None
    profile_path: Optional[str] = None


class Video(BaseModel):
    """Trailer or clip attached to a movie"""
    key: str
    name: str = ""
    site: str = "YouTube"
    type: str = "Trailer"


class CatalogItem(BaseModel):
    """
    A movie as returned by list, search and detail operations.

    List responses only fill the core fields; the extended fields
    (runtime, budget, revenue, cast, crew, ...) are populated by detail
    fetches. An unset extended field does not mean the movie lacks it.
    """
    id: int
    title: str
    overview: str = ""
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    vote_average: float = 0.0
    vote_count: int = 0
    release_date: str = ""
    genre_ids: List[int] = Field(default_factory=list)
    genres: List[Genre] = Field(default_factory=list)
    popularity: Optional[float] = None
    original_language: Optional[str] = None
    original_title: Optional[str] = None
    adult: bool = False

    # Detail-only fields
    runtime: Optional[int] = None
    budget: Optional[int] = None
    revenue: Optional[int] = None
    cast: Optional[List[CastMember]] = None
    crew: Optional[List[CrewMember]] = None
    tagline: Optional[str] = None
    status: Optional[str] = None
    imdb_id: Optional[str] = None
    homepage: Optional[str] = None

    @property
    def release_year(self) -> Optional[int]:
        """Year part of release_date, if parseable"""
        try:
            return int(self.release_date[:4])
        except (TypeError, ValueError):
            return None

    @classmethod
    def from_tmdb(cls, payload: Dict[str, Any], max_credits: int = MAX_CREDITS) -> "CatalogItem":
        """
        Build an item from a raw TMDB movie payload

        Args:
            payload: TMDB movie dictionary (list or detail shape)
            max_credits: Maximum cast/crew entries kept

        Returns:
            CatalogItem
        """
        data = dict(payload)

        credits = data.pop("credits", None) or {}
        if "cast" in credits:
            data["cast"] = credits["cast"]
        if "crew" in credits:
            data["crew"] = credits["crew"]
        if data.get("cast") is not None:
            data["cast"] = data["cast"][:max_credits]
        if data.get("crew") is not None:
            data["crew"] = data["crew"][:max_credits]

        # Detail responses carry genres but no genre_ids
        if data.get("genres") and not data.get("genre_ids"):
            data["genre_ids"] = [genre["id"] for genre in data["genres"]]

        # TMDB sends null for missing text fields
        for key in ("overview", "release_date"):
            if data.get(key) is None:
                data.pop(key, None)

        return cls.model_validate(data)


class Page(BaseModel, Generic[T]):
    """One page of a paginated result"""
    page: int = Field(1, ge=1)
    results: List[T] = Field(default_factory=list)
    total_pages: int = Field(0, ge=0)
    total_results: int = Field(0, ge=0)

    @classmethod
    def empty(cls) -> "Page[T]":
        """Empty result: page 1 of 0"""
        return cls(page=1, results=[], total_pages=0, total_results=0)

    @classmethod
    def paginate(cls, items: List[T], page: int, page_size: int) -> "Page[T]":
        """
        Slice a full in-memory list into one page

        A page past the end yields no results but keeps the requested
        page number.
        """
        start = (page - 1) * page_size
        total = len(items)
        return cls(
            page=page,
            results=items[start:start + page_size],
            total_pages=(total + page_size - 1) // page_size,
            total_results=total,
        )


class CatalogFilters(BaseModel):
    """Optional discover/search filters"""
    genre_ids: Optional[List[int]] = None
    year: Optional[int] = None
    min_rating: Optional[float] = Field(None, ge=0.0, le=10.0)
    sort_by: Optional[SortKey] = None

    def is_empty(self) -> bool:
        return not self.to_key_payload()

    def to_key_payload(self) -> Dict[str, Any]:
        """Set fields only, in a JSON-friendly and deterministic form"""
        payload = self.model_dump(mode="json", exclude_none=True)
        if not payload.get("genre_ids"):
            payload.pop("genre_ids", None)
        else:
            payload["genre_ids"] = sorted(payload["genre_ids"])
        return payload


class SliceState(BaseModel):
    """Observable state of one resource slice"""
    status: str = "idle"  # idle | loading | ready | failed
    results: List[Any] = Field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None
    error_kind: Optional[str] = None
    page: int = 1
    total_pages: int = 0
    total_results: int = 0
    from_cache: bool = False
