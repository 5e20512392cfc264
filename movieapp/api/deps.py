"""
Shared endpoint dependencies
"""
from typing import Optional
from fastapi import Header, HTTPException, Request
from movieapp.services.context import CatalogContext
from movieapp.services.library import UserLibrary


def get_catalog(request: Request) -> CatalogContext:
    """Catalog context attached to the application"""
    context = getattr(request.app.state, "catalog", None)
    if context is None:
        raise HTTPException(status_code=503, detail="Catalog is not initialized")
    return context


async def get_library(
    request: Request,
    x_user_id: Optional[str] = Header(None, description="Signed-in user id"),
) -> UserLibrary:
    """Library of the user named by the X-User-Id header"""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Sign in to manage your library")
    context = get_catalog(request)
    library = UserLibrary(
        context.store,
        x_user_id,
        prefix=context.settings.STORAGE_PREFIX,
        watchlist_limit=context.settings.WATCHLIST_LIMIT,
        history_limit=context.settings.VIEW_HISTORY_LIMIT,
    )
    await library.load()
    return library
