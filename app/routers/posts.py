# =============================================================================
# app/routers/posts.py - Planned Post Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query

from core.models.post import PostCreate
from core.services.post_service import PostService

router = APIRouter()


@router.get("/posts/recent")
async def recent_posts(limit: Annotated[int, Query(ge=1, le=100)] = 10):
    """Latest planned posts, newest date first."""
    return {"posts": PostService.recent_posts(limit=limit)}


@router.post("/posts")
async def create_post(post: PostCreate):
    """Add a planned post for the daily workflow to pick up."""
    return {"row": PostService.create_post(post)}
