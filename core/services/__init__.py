# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .storage_service import StorageService
from .profile_service import ProfileService
from .post_service import PostService
from .schedule_service import ScheduleService
from .upload_service import UploadService

__all__ = [
    "StorageService",
    "ProfileService",
    "PostService",
    "ScheduleService",
    "UploadService",
]
