# =============================================================================
# core/services/post_service.py - Planned Post Logic
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.post import PostCreate
from app.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class PostService:
    """Service for the ig_posts table."""

    @staticmethod
    def recent_posts(limit: int = 10) -> list[dict[str, Any]]:
        """Latest posts, newest date first."""
        try:
            return SupabaseClient.fetch_recent_posts(limit=limit)
        except SupabaseClientError as e:
            raise DatabaseError("ig_posts", e.message)

    @staticmethod
    def create_post(post: PostCreate) -> dict[str, Any]:
        """
        Insert a planned post.

        Returns:
            Inserted row

        Raises:
            DatabaseError: If the insert fails
        """
        try:
            row = SupabaseClient.insert_post(post.model_dump(mode="json"))
        except SupabaseClientError as e:
            logger.error(f"Failed to create post: {e}")
            raise DatabaseError("ig_posts", e.message)

        logger.info(f"Created post {row.get('id')} for {post.date}")
        return row
