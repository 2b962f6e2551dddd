# =============================================================================
# agents/prompts/filename_instructions.py - Smart Filename Instructions
# =============================================================================
# Instruction text sent alongside an uploaded image when asking a vision
# model for the image's main subject. Two output formats exist:
#
# - word: ONE lowercase word ("sneaker")
# - slug: a short hyphenated slug ("red-running-sneaker")
#
# The business context block is shared by both.
# =============================================================================

from __future__ import annotations

from core.models.profile import BusinessProfile

WORD_FORMAT_RULES = """Return ONLY ONE WORD (lowercase letters only) that best describes the main subject of the image.
No spaces, no hyphens, no numbers, no punctuation, no quotes.
Examples: laptop, portrait, sneaker, skyline, salad."""

SLUG_FORMAT_RULES = """Return ONLY a short filename slug (2-5 words) describing the main subject of the image.
Use lowercase letters and digits joined by hyphens. No spaces, no file extension, no quotes.
Examples: red-running-sneaker, sourdough-loaf, city-skyline-night."""


def build_context_block(profile: BusinessProfile, brief_chars: int = 200) -> str:
    """
    Describe the business so the model can prefer on-brand words.

    Args:
        profile: Current business profile (may be empty)
        brief_chars: Truncation length for the content brief

    Returns:
        Multi-line context text
    """
    topics = ", ".join(profile.key_topics or [])
    brief = (profile.content_brief or "")[:brief_chars]
    return (
        f"Business: {profile.company_name or ''}. Industry: {profile.industry or ''}.\n"
        f"Key topics: {topics}. Tone: {profile.tone_style or ''}.\n"
        f"Brief: {brief}."
    )


def build_filename_instruction(
    profile: BusinessProfile,
    slug: bool = False,
    brief_chars: int = 200,
) -> str:
    """Full instruction: preamble, format rules, then business context."""
    rules = SLUG_FORMAT_RULES if slug else WORD_FORMAT_RULES
    return (
        "You will receive an image and business context.\n"
        f"{rules}\n"
        f"{build_context_block(profile, brief_chars)}"
    )
