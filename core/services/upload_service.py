# =============================================================================
# core/services/upload_service.py - Upload Pipeline
# =============================================================================
# Two ways a file lands in storage:
#
# - Smart upload (assets / videos buckets):
#     validate -> load profile -> synthesize filename -> upload -> notify
# - Product upload (products bucket):
#     validate -> upload under the original filename (overwrite allowed)
#
# The notification webhook is best-effort; a failed notification never
# undoes the upload.
# =============================================================================

import logging

from agents.filename_synthesizer import FilenameSynthesizer
from core.models.asset import UploadedAsset, UploadResponse
from core.services.profile_service import ProfileService
from core.services.storage_service import StorageService
from lib.notifier import notify_upload
from app.exceptions import FileTooLargeError, InvalidFileTypeError, MissingFieldError

logger = logging.getLogger(__name__)


class UploadService:
    """
    Coordinates validation, naming, storage and notification.

    Attributes:
        synthesizer: Builds smart filenames
        max_bytes: Upload size limit
        notify_url: Notification webhook (None = disabled)
    """

    def __init__(
        self,
        synthesizer: FilenameSynthesizer,
        max_bytes: int,
        notify_url: str | None = None,
    ):
        self.synthesizer = synthesizer
        self.max_bytes = max_bytes
        self.notify_url = notify_url

    def validate(self, asset: UploadedAsset, images_only: bool = True) -> None:
        """
        Reject empty, oversized or non-image uploads.

        A missing MIME type is allowed and treated as an image.
        """
        if not asset.content:
            raise MissingFieldError("file")

        if asset.size > self.max_bytes:
            raise FileTooLargeError(asset.size / (1024 * 1024), self.max_bytes // (1024 * 1024))

        if images_only and asset.mime_type and not asset.mime_type.startswith("image/"):
            raise InvalidFileTypeError(asset.original_name or "upload", asset.mime_type)

    async def upload_smart(self, bucket: str, asset: UploadedAsset) -> UploadResponse:
        """
        Upload under an AI-generated name.

        Args:
            bucket: Target bucket (assets or videos)
            asset: The uploaded file

        Returns:
            UploadResponse with the generated name and public URL

        Raises:
            MissingFieldError, FileTooLargeError, InvalidFileTypeError: bad input
            StorageError: upload rejected by Supabase
        """
        self.validate(asset)

        profile = ProfileService.get_business_profile_or_empty()
        name = await self.synthesizer.synthesize(
            asset.content,
            asset.mime_type,
            asset.original_name,
            profile,
        )

        storage = StorageService(bucket)
        storage.upload(name, asset.content, asset.mime_type, upsert=False)
        public_url = storage.get_public_url(name)

        await notify_upload(
            self.notify_url,
            name=name,
            url=public_url,
            bucket=bucket,
            mime=asset.mime_type,
            size=asset.size,
        )

        return UploadResponse(name=name, public_url=public_url, bucket=bucket)

    async def upload_product(self, bucket: str, asset: UploadedAsset) -> UploadResponse:
        """
        Upload a product image under its original filename (overwrites).

        Raises:
            MissingFieldError: no file or no filename
            StorageError: upload rejected by Supabase
        """
        self.validate(asset, images_only=False)
        if not asset.original_name:
            raise MissingFieldError("file name")

        storage = StorageService(bucket)
        storage.upload(asset.original_name, asset.content, asset.mime_type, upsert=True)

        return UploadResponse(
            name=asset.original_name,
            public_url=storage.get_public_url(asset.original_name),
            bucket=bucket,
        )
