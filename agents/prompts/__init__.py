# =============================================================================
# agents/prompts/ - Prompt Text for the AI Helpers
# =============================================================================
# - filename_instructions.py: subject-inference instruction for smart filenames
# - product_post.py: system/user prompt pieces for Instagram product posts
# =============================================================================

from agents.prompts.filename_instructions import (
    build_context_block,
    build_filename_instruction,
)
from agents.prompts.product_post import (
    POST_REQUIREMENTS,
    build_system_prompt,
    build_user_prompt,
)

__all__ = [
    "build_context_block",
    "build_filename_instruction",
    "POST_REQUIREMENTS",
    "build_system_prompt",
    "build_user_prompt",
]
