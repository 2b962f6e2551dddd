# =============================================================================
# app/routers/uploads.py - File Upload Endpoints
# =============================================================================
# - POST /upload/asset    image asset, AI-generated filename
# - POST /upload/video    video source image, AI-generated filename
# - POST /upload/product  product image, original filename (overwrites)
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, File, UploadFile

from app.dependencies import SettingsDep, UploadServiceDep
from app.exceptions import MissingFieldError
from core.models.asset import UploadedAsset, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_upload(file: UploadFile | None) -> UploadedAsset:
    """Pull the multipart file into an UploadedAsset."""
    if file is None:
        raise MissingFieldError("file")
    content = await file.read()
    logger.info(f"Received upload: {file.filename} ({len(content)} bytes, {file.content_type})")
    return UploadedAsset(
        content=content,
        mime_type=file.content_type or None,
        original_name=file.filename or None,
    )


@router.post("/upload/asset", response_model=UploadResponse)
async def upload_asset(
    settings: SettingsDep,
    uploads: UploadServiceDep,
    file: Annotated[UploadFile | None, File(description="Image to upload")] = None,
):
    """
    Upload an image asset under a smart filename.

    The name is `{subject}_{unixMillis}.{ext}`; see the filename synthesizer.
    """
    asset = await _read_upload(file)
    return await uploads.upload_smart(settings.ASSETS_BUCKET, asset)


@router.post("/upload/video", response_model=UploadResponse)
async def upload_video(
    settings: SettingsDep,
    uploads: UploadServiceDep,
    file: Annotated[UploadFile | None, File(description="Image to animate")] = None,
):
    """Upload a video source image under a smart filename."""
    asset = await _read_upload(file)
    return await uploads.upload_smart(settings.VIDEOS_BUCKET, asset)


@router.post("/upload/product", response_model=UploadResponse)
async def upload_product(
    settings: SettingsDep,
    uploads: UploadServiceDep,
    file: Annotated[UploadFile | None, File(description="Product image")] = None,
):
    """Upload a product image, keeping its original filename."""
    asset = await _read_upload(file)
    return await uploads.upload_product(settings.PRODUCTS_BUCKET, asset)
