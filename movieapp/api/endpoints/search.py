"""
Search Endpoint
Title search and the recent-search list
"""
from typing import Optional
from fastapi import APIRouter, Depends, Header, Query
from movieapp.api.deps import get_catalog
from movieapp.api.endpoints.catalog import build_filters
from movieapp.models.catalog import CatalogFilters, SliceState
from movieapp.services.context import CatalogContext
from movieapp.utils.helpers import validate_page
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/search", response_model=SliceState)
async def search_movies(
    q: str = Query("", description="Search text"),
    page: int = Query(1, ge=1),
    filters: Optional[CatalogFilters] = Depends(build_filters),
    x_user_id: Optional[str] = Header(None),
    catalog: CatalogContext = Depends(get_catalog),
):
    """
    Search by title

    Requests are already discrete here, so the query is committed at once
    instead of going through the input debounce.
    """
    controller = catalog.search_controller(x_user_id)
    page = validate_page(page, catalog.settings.MAX_PAGE)
    return await controller.commit(q, filters, page=page)


@router.get("/search/recent")
async def get_recent_searches(
    x_user_id: Optional[str] = Header(None),
    catalog: CatalogContext = Depends(get_catalog),
):
    """Recent queries of the caller (or of anonymous callers), newest first"""
    return {"recent": await catalog.search_controller(x_user_id).recent_searches()}


@router.delete("/search/recent")
async def clear_recent_searches(
    x_user_id: Optional[str] = Header(None),
    catalog: CatalogContext = Depends(get_catalog),
):
    await catalog.search_controller(x_user_id).clear_recent()
    return {"recent": []}
