"""
Catalog Endpoint
Category listings, discover, movie details, videos and genres
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Header, HTTPException, Path, Query, Request
from movieapp.api.deps import get_catalog, get_library
from movieapp.models.catalog import CatalogFilters, SliceState, SortKey
from movieapp.services import resources
from movieapp.services.context import CatalogContext
from movieapp.services.errors import NotFoundError
from movieapp.services.slices import FAILED
from movieapp.utils.helpers import validate_page
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def parse_genre_ids(raw: Optional[str]) -> Optional[List[int]]:
    """
    Parse a comma separated genre list

    Args:
        raw: e.g. "28,12"

    Returns:
        List of genre IDs, or None when nothing usable was given
    """
    if not raw:
        return None
    genre_ids = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        if not part.isdigit():
            raise HTTPException(status_code=422, detail=f"Invalid genre id: {part}")
        genre_ids.append(int(part))
    return genre_ids or None


def build_filters(
    genres: Optional[str] = Query(None, description="Comma separated genre IDs"),
    year: Optional[int] = Query(None, ge=1800, le=2200),
    min_rating: Optional[float] = Query(None, ge=0.0, le=10.0),
    sort_by: Optional[SortKey] = Query(None),
) -> Optional[CatalogFilters]:
    """Query parameters as CatalogFilters; None when no filter is set"""
    filters = CatalogFilters(
        genre_ids=parse_genre_ids(genres),
        year=year,
        min_rating=min_rating,
        sort_by=sort_by,
    )
    return None if filters.is_empty() else filters


@router.get("/catalog/{resource}", response_model=SliceState)
async def get_catalog_page(
    resource: str = Path(..., description="trending, now-showing, top-rated, upcoming or discover"),
    page: int = Query(1, ge=1, description="Page number; values above the provider limit are clamped"),
    filters: Optional[CatalogFilters] = Depends(build_filters),
    catalog: CatalogContext = Depends(get_catalog),
):
    """Load one page of a listing"""
    name = resource.replace("-", "_")
    if name not in resources.LISTING_RESOURCES:
        raise HTTPException(status_code=404, detail=f"Unknown catalog: {resource}")

    page = validate_page(page, catalog.settings.MAX_PAGE)
    logger.info(f"Catalog request: {name} page {page}")
    return await catalog.request_slice(name).load(page, filters)


@router.get("/movies/{item_id}", response_model=SliceState)
async def get_movie(
    request: Request,
    item_id: int = Path(..., ge=1),
    x_user_id: Optional[str] = Header(None),
    catalog: CatalogContext = Depends(get_catalog),
):
    """Full record of one movie; viewing it is added to the user's history"""
    state = await catalog.request_slice(resources.DETAILS, item_id=item_id).load()

    if state.error_kind == NotFoundError.kind:
        raise HTTPException(status_code=404, detail="Movie not found")
    if state.status == FAILED:
        raise HTTPException(status_code=502, detail=state.error)

    if x_user_id:
        library = await get_library(request, x_user_id)
        await library.add_to_view_history(item_id)

    return state


@router.get("/movies/{item_id}/videos", response_model=SliceState)
async def get_movie_videos(
    item_id: int = Path(..., ge=1),
    catalog: CatalogContext = Depends(get_catalog),
):
    """Trailers and clips for one movie"""
    state = await catalog.request_slice(resources.VIDEOS, item_id=item_id).load()
    if state.status == FAILED:
        raise HTTPException(status_code=502, detail=state.error)
    return state


@router.get("/genres", response_model=SliceState)
async def get_genres(catalog: CatalogContext = Depends(get_catalog)):
    """Genre taxonomy"""
    return await catalog.request_slice(resources.GENRES).load()
