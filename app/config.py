# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values, plus the
# small config objects handed to the AI helpers (FilenameConfig, StorageConfig).
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The AI helpers never read settings directly. Routes build their config
# objects from Settings and pass them in.
# =============================================================================

from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # URL and service key are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        validation_alias=AliasChoices("SUPABASE_SERVICE_KEY", "SUPABASE_SERVICE_ROLE"),
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_ANON_KEY: str | None = Field(
        default=None,
        description="Supabase anon/public API key"
    )

    # -------------------------------------------------------------------------
    # Storage Buckets
    # -------------------------------------------------------------------------

    ASSETS_BUCKET: str = Field(
        default="ig_assets",
        validation_alias=AliasChoices("ASSETS_BUCKET", "IG_ASSETS_BUCKET"),
        description="Bucket for image assets (img2img sources)"
    )

    VIDEOS_BUCKET: str = Field(
        default="ig_videos",
        validation_alias=AliasChoices("VIDEOS_BUCKET", "IG_VIDEOS_BUCKET"),
        description="Bucket for video source images (I2V)"
    )

    PRODUCTS_BUCKET: str = Field(
        default="ig_products",
        validation_alias=AliasChoices("PRODUCTS_BUCKET", "IG_PRODUCTS_BUCKET"),
        description="Public bucket for product images"
    )

    # -------------------------------------------------------------------------
    # Vision Model Configuration
    # -------------------------------------------------------------------------
    # Used by the filename synthesizer. Missing key = deterministic fallback.

    VISION_PROVIDER: Literal["gemini", "openai"] = Field(
        default="gemini",
        description="Which generative model answers image-subject questions"
    )

    GEMINI_API_KEY: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_GEMINI_API_KEY", "GOOGLE_API_KEY"),
        description="Google Generative Language API key"
    )

    GEMINI_MODEL: str = Field(default="gemini-1.5-flash")

    GEMINI_API_BASE: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL for the generateContent endpoint"
    )

    OPENAI_API_KEY: str | None = Field(
        default=None,
        description="OpenAI API key (when VISION_PROVIDER=openai)"
    )

    OPENAI_MODEL: str = Field(
        default="gpt-4o-mini",
        description="Vision-capable OpenAI model"
    )

    # -------------------------------------------------------------------------
    # Smart Filename Settings
    # -------------------------------------------------------------------------

    FILENAME_FORMAT: Literal["word", "slug"] = Field(
        default="word",
        description="word = single lowercase word, slug = hyphenated short slug"
    )

    FILENAME_SLUG_MAX_LENGTH: int = Field(default=40, ge=8, le=120)

    # -------------------------------------------------------------------------
    # n8n Workflow Automation
    # -------------------------------------------------------------------------

    N8N_BASE_URL: str | None = Field(default=None)
    N8N_API_KEY: str | None = Field(default=None)
    N8N_DAILY_WORKFLOW_ID: str | None = Field(default=None)

    N8N_RUN_WEBHOOK_URL: str | None = Field(
        default=None,
        description="Production URL of the Webhook node that starts the daily flow"
    )

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------

    UPLOAD_NOTIFY_WEBHOOK_URL: str | None = Field(
        default=None,
        description="Receives a POST after every successful smart upload"
    )

    # -------------------------------------------------------------------------
    # Business Profile Defaults
    # -------------------------------------------------------------------------

    DEFAULT_TIMEZONE: str = Field(default="Africa/Johannesburg")

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # File Upload Settings
    # -------------------------------------------------------------------------

    MAX_UPLOAD_SIZE_MB: int = Field(
        default=20,
        ge=1,
        le=500,
        description="Maximum file upload size in MB"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def max_upload_size_bytes(self) -> int:
        """Convert MB to bytes for file size validation."""
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def n8n_configured(self) -> bool:
        """True when the schedule endpoints can reach the workflow engine."""
        return bool(self.N8N_BASE_URL and self.N8N_API_KEY and self.N8N_DAILY_WORKFLOW_ID)


# =============================================================================
# Component Config Objects
# =============================================================================

@dataclass(frozen=True)
class FilenameConfig:
    """
    Settings for the filename synthesizer.

    Attributes:
        format: "word" or "slug"
        slug_max_length: Cap applied to slug bases
        brief_chars: How much of the content brief goes into the model context
    """

    format: str = "word"
    slug_max_length: int = 40
    brief_chars: int = 200

    @classmethod
    def from_settings(cls, settings: Settings) -> "FilenameConfig":
        return cls(
            format=settings.FILENAME_FORMAT,
            slug_max_length=settings.FILENAME_SLUG_MAX_LENGTH,
        )


@dataclass(frozen=True)
class StorageConfig:
    """
    Where public product images live.

    public_base_url may be None, in which case object names cannot be
    resolved to URLs.
    """

    public_base_url: str | None
    products_bucket: str = "ig_products"

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageConfig":
        return cls(
            public_base_url=settings.SUPABASE_URL or None,
            products_bucket=settings.PRODUCTS_BUCKET,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()
