"""
Settings Endpoint
Read and change the provider configuration
"""
from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from movieapp.api.deps import get_catalog
from movieapp.services.context import CatalogContext
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


class SettingsUpdate(BaseModel):
    """Fields a client may change; unset fields keep their value"""
    credential: Optional[str] = Field(None, description="TMDB API read access token")
    locale: Optional[str] = Field(None, min_length=2)
    region: Optional[str] = Field(None, min_length=2, max_length=2)
    adult_content_allowed: Optional[bool] = None


@router.get("/settings")
async def get_settings(catalog: CatalogContext = Depends(get_catalog)):
    """Current settings with the credential masked"""
    payload = catalog.settings_manager.masked()
    payload["provider"] = catalog.selector.current().kind
    return payload


@router.put("/settings")
async def update_settings(
    update: SettingsUpdate,
    catalog: CatalogContext = Depends(get_catalog),
):
    """
    Change settings

    A new credential switches the active provider; listings loaded
    afterwards come from it.
    """
    changes = update.model_dump(exclude_unset=True)
    if "credential" in changes and changes["credential"] is not None:
        changes["credential"] = changes["credential"].strip()
    await catalog.settings_manager.update(**changes)
    logger.info(f"Settings updated: {sorted(changes)}")
    return await get_settings(catalog)
