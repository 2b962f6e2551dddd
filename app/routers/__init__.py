# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - uploads.py: Asset, video-source and product uploads
# - assets.py: Bucket listings and product deletion
# - prompt.py: Product post prompt composer
# - profile.py: Business profile read/save
# - schedule.py: Posting schedule (n8n) and run-now
# - posts.py: Planned posts
#
# Each router is mounted in main.py under /api/v1.
# =============================================================================

from . import health
from . import uploads
from . import assets
from . import prompt
from . import profile
from . import schedule
from . import posts

__all__ = [
    "health",
    "uploads",
    "assets",
    "prompt",
    "profile",
    "schedule",
    "posts",
]
