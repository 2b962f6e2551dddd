# =============================================================================
# core/models/asset.py - Storage Asset Schemas
# =============================================================================
# - UploadedAsset: the file as received, alive for one request only
# - AssetItem / AssetList: bucket listings
# - UploadResponse: what the upload endpoints return
# =============================================================================

from dataclasses import dataclass

from pydantic import BaseModel


@dataclass
class UploadedAsset:
    """Raw upload: bytes, declared MIME type and the client's filename."""

    content: bytes
    mime_type: str | None = None
    original_name: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)


class AssetItem(BaseModel):
    name: str
    url: str


class AssetList(BaseModel):
    items: list[AssetItem]


class UploadResponse(BaseModel):
    name: str
    public_url: str
    bucket: str
