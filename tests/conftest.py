# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides sample profile rows and a fake vision client
# - Replaces the Supabase singleton with a MagicMock
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main loads settings at import time

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import MagicMock

import pytest

from core.models.profile import BusinessProfile
from lib.supabase_client import SupabaseClient


# =============================================================================
# Fakes
# =============================================================================

class FakeVisionClient:
    """Vision client returning a canned answer (or raising)."""

    def __init__(self, answer=None, error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.calls = []

    async def describe_image(self, image_b64, mime_type, instruction):
        self.calls.append(
            {"image_b64": image_b64, "mime_type": mime_type, "instruction": instruction}
        )
        if self.error:
            raise self.error
        return self.answer


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def sample_profile_row():
    """A fully filled business_profile row."""
    return {
        "id": 1,
        "company_name": "Crumb & Co",
        "industry": "Bakery",
        "key_topics": ["sourdough", "pastries", "coffee"],
        "tone_style": "warm",
        "content_brief": "Neighbourhood bakery with daily fresh bread. " * 10,
        "brand_primary_hex": "#AA5500",
        "brand_accent_hex": "#FFEEDD",
        "timezone": "Africa/Johannesburg",
        "schedule_hours": [8],
        "enabled": True,
    }


@pytest.fixture
def sample_profile(sample_profile_row):
    return BusinessProfile.from_row(sample_profile_row)


@pytest.fixture
def fake_vision():
    """Factory for FakeVisionClient."""
    return FakeVisionClient


@pytest.fixture
def supabase_mock():
    """
    Replace the singleton Supabase client with a MagicMock.

    Table and storage calls chain freely; set `.execute.return_value` etc.
    on the returned mock as needed.
    """
    mock = MagicMock()
    SupabaseClient._instance = mock
    yield mock
    SupabaseClient.reset()
