# =============================================================================
# agents/ - AI Helpers
# =============================================================================
# This package contains the two pieces of the dashboard that talk to, or
# write for, generative models:
# - filename_synthesizer.py: names uploaded images after their subject
# - prompt_composer.py: builds Instagram product-post prompts
#
# Prompts:
# - prompts/filename_instructions.py: subject-inference instruction text
# - prompts/product_post.py: system/user prompt pieces
# =============================================================================

from agents.filename_synthesizer import (
    FilenameFormat,
    FilenameSynthesizer,
    clean_model_response,
    extension_for_mime,
    fallback_base,
    sanitize_word,
    slugify,
)
from agents.prompt_composer import (
    DEFAULT_BRAND_ACCENT,
    DEFAULT_BRAND_PRIMARY,
    DEFAULT_COMPANY_NAME,
    PromptComposer,
)

__all__ = [
    # Filenames
    "FilenameFormat",
    "FilenameSynthesizer",
    "clean_model_response",
    "extension_for_mime",
    "fallback_base",
    "sanitize_word",
    "slugify",
    # Prompts
    "DEFAULT_BRAND_ACCENT",
    "DEFAULT_BRAND_PRIMARY",
    "DEFAULT_COMPANY_NAME",
    "PromptComposer",
]
