# =============================================================================
# app/routers/assets.py - Bucket Listing and Deletion
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel

from app.dependencies import SettingsDep
from app.exceptions import MissingFieldError
from core.models.asset import AssetList
from core.services.storage_service import StorageService

router = APIRouter()

LimitQuery = Annotated[int, Query(ge=1, le=1000, description="Page size")]
OffsetQuery = Annotated[int, Query(ge=0, description="Objects to skip")]


class DeleteRequest(BaseModel):
    name: str | None = None


@router.get("/list/asset", response_model=AssetList)
async def list_assets(settings: SettingsDep, limit: LimitQuery = 24, offset: OffsetQuery = 0):
    """List image assets, newest first."""
    items = StorageService(settings.ASSETS_BUCKET).list_assets(limit=limit, offset=offset)
    return AssetList(items=items)


@router.get("/list/product", response_model=AssetList)
async def list_products(settings: SettingsDep, limit: LimitQuery = 24, offset: OffsetQuery = 0):
    """List product images, newest first."""
    items = StorageService(settings.PRODUCTS_BUCKET).list_assets(limit=limit, offset=offset)
    return AssetList(items=items)


@router.post("/delete/product")
async def delete_product(settings: SettingsDep, request: DeleteRequest):
    """Delete a product image by name."""
    if not request.name:
        raise MissingFieldError("name")
    StorageService(settings.PRODUCTS_BUCKET).remove(request.name)
    return {"ok": True}
