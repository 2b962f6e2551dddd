# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - profile.py: BusinessProfile read model and upsert payload
# - asset.py: Uploaded files and bucket listings
# - post.py: Planned posts (ig_posts table)
# - schedule.py: Posting schedule and n8n workflow summary
# - prompt.py: Prompt composer request/response
#
# These models define the "contract" between API and clients.
# =============================================================================

from .profile import (
    BusinessProfile,
    BusinessProfileUpdate,
    ProfileEnvelope,
    to_text_list,
)
from .asset import (
    AssetItem,
    AssetList,
    UploadedAsset,
    UploadResponse,
)
from .post import (
    ImageStrategy,
    PostCreate,
)
from .schedule import (
    ScheduleResponse,
    ScheduleUpdate,
    WorkflowSummary,
)
from .prompt import (
    PromptBundle,
    PromptRequest,
    PromptVariables,
)

__all__ = [
    # Profile
    "BusinessProfile",
    "BusinessProfileUpdate",
    "ProfileEnvelope",
    "to_text_list",
    # Assets
    "AssetItem",
    "AssetList",
    "UploadedAsset",
    "UploadResponse",
    # Posts
    "ImageStrategy",
    "PostCreate",
    # Schedule
    "ScheduleResponse",
    "ScheduleUpdate",
    "WorkflowSummary",
    # Prompt
    "PromptBundle",
    "PromptRequest",
    "PromptVariables",
]
