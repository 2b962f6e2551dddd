# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles list/upload/remove/public-URL operations on one storage bucket.
# =============================================================================

import logging

from lib.supabase_client import SupabaseClient
from app.exceptions import StorageError
from core.models.asset import AssetItem

logger = logging.getLogger(__name__)


class StorageService:
    """
    Service for Supabase Storage operations on a single bucket.

    Example:
        assets = StorageService("ig_assets")
        items = assets.list_assets(limit=24)
    """

    def __init__(self, bucket: str):
        self.bucket = bucket

    def _bucket(self):
        return SupabaseClient.get_client().storage.from_(self.bucket)

    def list_assets(self, limit: int = 24, offset: int = 0) -> list[AssetItem]:
        """
        List objects at the bucket root, newest first.

        Args:
            limit: Page size
            offset: Number of objects to skip

        Returns:
            AssetItems with public URLs

        Raises:
            StorageError: If listing fails
        """
        try:
            files = self._bucket().list(
                "",
                {
                    "limit": limit,
                    "offset": offset,
                    "sortBy": {"column": "created_at", "order": "desc"},
                },
            )
        except Exception as e:
            logger.error(f"Storage list failed for {self.bucket}: {e}")
            raise StorageError("list", str(e), bucket=self.bucket)

        return [
            AssetItem(name=f["name"], url=self.get_public_url(f["name"]))
            for f in (files or [])
        ]

    def upload(
        self,
        key: str,
        content: bytes,
        content_type: str | None,
        upsert: bool = True,
    ) -> str:
        """
        Upload raw bytes under `key`.

        Args:
            key: Object name within the bucket
            content: File bytes
            content_type: MIME type stored with the object
            upsert: Overwrite an existing object with the same key

        Returns:
            The key

        Raises:
            StorageError: If upload fails
        """
        file_options = {"upsert": "true" if upsert else "false"}
        if content_type:
            file_options["content-type"] = content_type

        try:
            self._bucket().upload(path=key, file=content, file_options=file_options)
        except Exception as e:
            logger.error(f"Storage upload failed for {self.bucket}/{key}: {e}")
            raise StorageError("upload", str(e), bucket=self.bucket)

        logger.info(f"Uploaded file to storage: {self.bucket}/{key} ({len(content)} bytes)")
        return key

    def remove(self, name: str) -> None:
        """
        Delete one object.

        Raises:
            StorageError: If removal fails
        """
        try:
            self._bucket().remove([name])
        except Exception as e:
            logger.error(f"Failed to delete {self.bucket}/{name}: {e}")
            raise StorageError("remove", str(e), bucket=self.bucket)

        logger.info(f"Deleted file from storage: {self.bucket}/{name}")

    def get_public_url(self, key: str) -> str:
        """Public URL for an object (bucket must be public)."""
        return self._bucket().get_public_url(key)
