"""
Health Check Endpoint
"""
from fastapi import APIRouter, Depends, Query
from movieapp.api.deps import get_catalog
from movieapp.services.context import CatalogContext

router = APIRouter()


@router.get("/health")
async def health_check(
    include_cache: bool = Query(False, description="Include cache metrics"),
    catalog: CatalogContext = Depends(get_catalog),
):
    """Health check endpoint for monitoring"""
    payload = {
        "status": "healthy",
        "version": "1.0.0",
        "provider": catalog.selector.current().kind,
        "configured": catalog.settings_manager.is_configured,
    }

    if include_cache:
        payload["cache_metrics"] = catalog.cache.get_metrics_snapshot()

    return payload
