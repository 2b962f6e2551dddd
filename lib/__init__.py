# =============================================================================
# lib/ - Standalone Client Modules
# =============================================================================
# This package contains wrappers around external services:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - vision_client.py: Gemini / OpenAI image-understanding clients
# - n8n_client.py: n8n workflow REST API and run webhook
# - notifier.py: Upload notification webhook (best-effort)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.vision_client import (
    GeminiVisionClient,
    OpenAIVisionClient,
    VisionClient,
    VisionClientError,
    build_vision_client,
)
from lib.n8n_client import N8nClient, apply_trigger_hours, trigger_webhook
from lib.notifier import notify_upload

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Vision
    "GeminiVisionClient",
    "OpenAIVisionClient",
    "VisionClient",
    "VisionClientError",
    "build_vision_client",
    # n8n
    "N8nClient",
    "apply_trigger_hours",
    "trigger_webhook",
    # Notifications
    "notify_upload",
]
