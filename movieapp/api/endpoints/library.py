"""
Library Endpoint
Watchlist, favorites, ratings and view history of the signed-in user
"""
from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel, Field
from movieapp.api.deps import get_library
from movieapp.services.library import UserData, UserLibrary
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/library")


class RatingRequest(BaseModel):
    rating: int = Field(..., description="1 to 10")


@router.get("", response_model=UserData)
async def get_user_library(library: UserLibrary = Depends(get_library)):
    return library.data


@router.post("/watchlist/{item_id}")
async def add_to_watchlist(
    item_id: int = Path(..., ge=1),
    library: UserLibrary = Depends(get_library),
):
    """Add a movie to the watchlist"""
    if library.is_in_watchlist(item_id):
        return {"added": False, "watchlist": library.data.watchlist}
    if not await library.add_to_watchlist(item_id):
        raise HTTPException(
            status_code=409,
            detail=f"Watchlist is limited to {library.watchlist_limit} movies"
        )
    return {"added": True, "watchlist": library.data.watchlist}


@router.delete("/watchlist/{item_id}")
async def remove_from_watchlist(
    item_id: int = Path(..., ge=1),
    library: UserLibrary = Depends(get_library),
):
    removed = await library.remove_from_watchlist(item_id)
    return {"removed": removed, "watchlist": library.data.watchlist}


@router.post("/favorites/{item_id}")
async def add_to_favorites(
    item_id: int = Path(..., ge=1),
    library: UserLibrary = Depends(get_library),
):
    added = await library.add_to_favorites(item_id)
    return {"added": added, "favorites": library.data.favorites}


@router.delete("/favorites/{item_id}")
async def remove_from_favorites(
    item_id: int = Path(..., ge=1),
    library: UserLibrary = Depends(get_library),
):
    removed = await library.remove_from_favorites(item_id)
    return {"removed": removed, "favorites": library.data.favorites}


@router.put("/ratings/{item_id}")
async def rate_movie(
    request: RatingRequest,
    item_id: int = Path(..., ge=1),
    library: UserLibrary = Depends(get_library),
):
    """Rate a movie from 1 to 10"""
    try:
        await library.rate(item_id, request.rating)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"item_id": item_id, "rating": library.get_rating(item_id)}
