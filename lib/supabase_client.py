# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for:
# - The single-row business_profile table
# - The append-only ig_posts table
#
# Storage (buckets) goes through core/services/storage_service.py, which
# shares the same client.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   row = SupabaseClient.fetch_business_profile()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import get_settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# business_profile holds exactly one row, always upserted under this id
PROFILE_ROW_ID = 1

PROFILE_TABLE = "business_profile"
POSTS_TABLE = "ig_posts"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages: what failed and, where possible,
    how to fix it.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        profile = SupabaseClient.fetch_business_profile()
        posts = SupabaseClient.fetch_recent_posts(limit=10)
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            settings = get_settings()
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (used by tests)."""
        cls._instance = None

    # -------------------------------------------------------------------------
    # Business Profile
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_business_profile(cls) -> dict[str, Any] | None:
        """
        Fetch the business profile row.

        Returns:
            Profile dict, or None if the table is empty

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(PROFILE_TABLE)
                .select("*")
                .limit(1)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            if "PGRST116" in str(e):  # PostgREST code for no rows
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch business profile: {e}",
                code="FETCH_PROFILE_FAILED",
                suggestion="Check that the business_profile table exists and is accessible",
            )

    @classmethod
    def upsert_business_profile(cls, payload: dict[str, Any]) -> dict[str, Any] | None:
        """
        Insert or update the single business profile row.

        Args:
            payload: Column values to write (id is forced to PROFILE_ROW_ID)

        Returns:
            The stored row, or None if Supabase returned nothing

        Raises:
            SupabaseClientError: If upsert fails
        """
        client = cls.get_client()
        data = {**payload, "id": PROFILE_ROW_ID}

        try:
            response = (
                client.table(PROFILE_TABLE)
                .upsert(data, on_conflict="id")
                .execute()
            )
            rows = response.data or []
            logger.info(f"Upserted business profile ({len(data) - 1} fields)")
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upsert business profile: {e}",
                code="UPSERT_PROFILE_FAILED",
                details={"fields": sorted(payload.keys())}
            )

    # -------------------------------------------------------------------------
    # Posts
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_recent_posts(cls, limit: int = 10) -> list[dict[str, Any]]:
        """
        Fetch the most recent planned posts.

        Ordered by date (newest first, undated last), then id (newest first).

        Args:
            limit: Maximum number of posts to return

        Returns:
            List of post dicts

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(POSTS_TABLE)
                .select("*")
                .order("date", desc=True, nullsfirst=False)
                .order("id", desc=True)
                .limit(limit)
                .execute()
            )
            posts = response.data or []
            logger.debug(f"Fetched {len(posts)} recent posts")
            return posts

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch posts: {e}",
                code="FETCH_POSTS_FAILED",
                details={"limit": limit}
            )

    @classmethod
    def insert_post(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a planned post.

        Args:
            data: Column values for the new row

        Returns:
            Inserted post dict with generated id

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(POSTS_TABLE)
                .insert(data)
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert post: {e}",
                code="INSERT_POST_FAILED",
                details={"date": data.get("date"), "template": data.get("template")}
            )
