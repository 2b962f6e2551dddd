# =============================================================================
# agents/filename_synthesizer.py - Smart Filename Synthesizer
# =============================================================================
# Turns an uploaded image into a storage key of the form
#
#     {base}_{unixMillis}.{ext}
#
# The base comes from a vision model ("what is this a picture of?") and is
# sanitized to a storage-safe token. When the model is not configured, fails,
# or answers with something unusable, the base is derived from the business
# profile instead. synthesize() never raises.
#
# Two formats are supported (FilenameFormat):
# - WORD: one lowercase word             -> sneaker_1717171717171.jpg
# - SLUG: short hyphenated slug          -> red-running-sneaker_1717171717171.jpg
#
# Usage:
#   synthesizer = FilenameSynthesizer(FilenameConfig(format="word"), vision_client)
#   name = await synthesizer.synthesize(content, "image/png", "IMG_0042.png", profile)
# =============================================================================

from __future__ import annotations

import base64
import logging
import os
import re
import time
from enum import Enum
from typing import Callable

from agents.prompts.filename_instructions import build_filename_instruction
from app.config import FilenameConfig
from core.models.profile import BusinessProfile
from lib.vision_client import VisionClient

logger = logging.getLogger(__name__)


class FilenameFormat(str, Enum):
    """Shape of the semantic part of a generated filename."""
    WORD = "word"
    SLUG = "slug"


DEFAULT_EXTENSION = "webp"
DEFAULT_MIME_TYPE = "image/webp"
WORD_MAX_LENGTH = 20
WORD_FALLBACK = "image"
SLUG_FALLBACK = "upload"

# Checked in order; the first substring found in the MIME type wins
MIME_EXTENSIONS: list[tuple[tuple[str, ...], str]] = [
    (("png",), "png"),
    (("jpeg", "jpg"), "jpg"),
    (("webp",), "webp"),
    (("gif",), "gif"),
]

_NON_LETTERS = re.compile(r"[^a-z]+")
_NON_SLUG = re.compile(r"[^a-z0-9]+")
_FENCE_OPEN = re.compile(r"```[\w-]*[ \t]*\n")


# =============================================================================
# Pure Helpers
# =============================================================================

def extension_for_mime(mime_type: str | None) -> str:
    """
    Map a MIME type to a file extension.

    Example:
        "image/jpeg" -> "jpg", "image/heic" -> "webp", None -> "webp"
    """
    mime = (mime_type or "").lower()
    for needles, ext in MIME_EXTENSIONS:
        if any(needle in mime for needle in needles):
            return ext
    return DEFAULT_EXTENSION


def sanitize_word(text: str | None, max_length: int = WORD_MAX_LENGTH) -> str:
    """Lowercase letters only, capped. May return an empty string."""
    return _NON_LETTERS.sub("", (text or "").lower())[:max_length]


def slugify(text: str | None, max_length: int = 40) -> str:
    """
    Lowercase alphanumerics joined by single hyphens, capped.

    Leading/trailing hyphens are trimmed both before and after the cap.
    May return an empty string.
    """
    slug = _NON_SLUG.sub("-", (text or "").lower()).strip("-")
    return slug[:max_length].strip("-")


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence markers (with or without a language tag)."""
    return _FENCE_OPEN.sub("\n", text).replace("```", "\n")


def clean_model_response(
    text: str | None,
    fmt: FilenameFormat,
    slug_max_length: int = 40,
) -> str:
    """
    Reduce a free-text model answer to one storage-safe token.

    Takes the first non-empty line after removing code fences and quotes.
    WORD keeps only the first whitespace-separated token.

    Returns:
        The cleaned base, or "" when nothing usable remains
    """
    if not text:
        return ""

    cleaned = strip_code_fences(text).replace("`", "").replace('"', "").replace("'", "")
    first_line = next((line.strip() for line in cleaned.splitlines() if line.strip()), "")

    if fmt == FilenameFormat.SLUG:
        return slugify(first_line, slug_max_length)

    tokens = first_line.split()
    return sanitize_word(tokens[0] if tokens else "")


def file_stem(original_name: str | None) -> str:
    """Basename without its extension ("photos/IMG_01.png" -> "IMG_01")."""
    if not original_name:
        return ""
    base = os.path.basename(original_name.replace("\\", "/"))
    return os.path.splitext(base)[0]


def fallback_base(
    profile: BusinessProfile,
    fmt: FilenameFormat,
    original_name: str | None = None,
    slug_max_length: int = 40,
) -> str:
    """
    Deterministic base used when the model gives nothing usable.

    WORD: first key topic, else industry, else "image".
    SLUG: industry + original filename stem, else "upload".
    """
    if fmt == FilenameFormat.SLUG:
        combined = f"{profile.industry or ''} {file_stem(original_name)}"
        return slugify(combined, slug_max_length) or SLUG_FALLBACK

    candidates = [(profile.key_topics or [None])[0], profile.industry]
    for candidate in candidates:
        word = sanitize_word(candidate)
        if word:
            return word
    return WORD_FALLBACK


# =============================================================================
# Synthesizer
# =============================================================================

class FilenameSynthesizer:
    """
    Builds collision-resistant, human-meaningful storage keys.

    Attributes:
        config: Format and length settings
        vision_client: Model used for subject inference (None = fallback only)
        clock: Returns seconds since epoch; injectable for tests
    """

    def __init__(
        self,
        config: FilenameConfig | None = None,
        vision_client: VisionClient | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or FilenameConfig()
        self.format = FilenameFormat(self.config.format)
        self.vision_client = vision_client
        self.clock = clock

    async def synthesize(
        self,
        file_bytes: bytes,
        mime_type: str | None,
        original_name: str | None,
        profile: BusinessProfile | None,
    ) -> str:
        """
        Generate a filename for an uploaded image.

        Args:
            file_bytes: Raw image content
            mime_type: Declared MIME type (None treated as image/webp)
            original_name: Client-side filename (used by the SLUG fallback)
            profile: Business context (None treated as empty)

        Returns:
            "{base}_{unixMillis}.{ext}"
        """
        profile = profile or BusinessProfile()
        ext = extension_for_mime(mime_type)

        base = await self._infer_base(file_bytes, mime_type or DEFAULT_MIME_TYPE, profile)
        if not base:
            base = fallback_base(profile, self.format, original_name, self.config.slug_max_length)
            logger.info(f"Using fallback filename base '{base}'")

        timestamp = int(self.clock() * 1000)
        return f"{base}_{timestamp}.{ext}"

    async def _infer_base(
        self,
        file_bytes: bytes,
        mime_type: str,
        profile: BusinessProfile,
    ) -> str:
        """Ask the vision model for a base; "" on any failure."""
        if self.vision_client is None:
            return ""

        instruction = build_filename_instruction(
            profile,
            slug=self.format == FilenameFormat.SLUG,
            brief_chars=self.config.brief_chars,
        )
        encoded = base64.b64encode(file_bytes).decode("ascii")

        try:
            answer = await self.vision_client.describe_image(encoded, mime_type, instruction)
        except Exception as e:
            logger.warning(f"Vision model call failed, using fallback: {e}")
            return ""

        base = clean_model_response(answer, self.format, self.config.slug_max_length)
        if not base:
            logger.warning(f"Vision model answer unusable: {str(answer)[:50]!r}")
        else:
            logger.debug(f"Vision model suggested base '{base}'")
        return base
