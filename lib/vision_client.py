# =============================================================================
# lib/vision_client.py - Generative Vision Model Clients
# =============================================================================
# Thin request/response wrappers around the image-understanding models used
# by the filename synthesizer. Input is a base64 image, its MIME type and a
# free-text instruction; output is whatever text the model answers with.
#
# No structured output is requested from the provider - callers impose
# structure through the instruction and clean the answer afterwards.
#
# Providers:
# - GeminiVisionClient: Google Generative Language REST API (via httpx)
# - OpenAIVisionClient: OpenAI chat completions with an image part
#
# Usage:
#   client = build_vision_client(settings)
#   text = await client.describe_image(b64, "image/png", "One word...")
# =============================================================================

from __future__ import annotations

import logging
from typing import Protocol

import httpx
from openai import AsyncOpenAI

from app.config import Settings

logger = logging.getLogger(__name__)


class VisionClientError(Exception):
    """Raised when the model endpoint answers with a non-success status."""

    def __init__(self, provider: str, message: str, status: int | None = None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status = status


class VisionClient(Protocol):
    """Anything that can answer a question about an image."""

    async def describe_image(
        self,
        image_b64: str,
        mime_type: str,
        instruction: str,
    ) -> str | None:
        ...


# =============================================================================
# Gemini
# =============================================================================

class GeminiVisionClient:
    """
    Calls models/{model}:generateContent with an inline image part.

    Example:
        client = GeminiVisionClient(api_key="...", model="gemini-1.5-flash")
        text = await client.describe_image(b64, "image/jpeg", "Name the subject")
    """

    provider = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def describe_image(
        self,
        image_b64: str,
        mime_type: str,
        instruction: str,
    ) -> str | None:
        """
        Send one image + instruction, return the first candidate's text.

        Returns:
            The text, or None when the response carries no text part

        Raises:
            VisionClientError: Non-2xx status
            httpx.HTTPError: Transport failures
        """
        body = {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"inlineData": {"mimeType": mime_type, "data": image_b64}},
                        {"text": instruction},
                    ],
                }
            ]
        }

        async with httpx.AsyncClient(transport=self._transport) as http_client:
            resp = await http_client.post(
                self.endpoint,
                json=body,
                headers={"x-goog-api-key": self.api_key},
            )

        if resp.status_code >= 400:
            raise VisionClientError(self.provider, resp.text[:200], status=resp.status_code)

        data = resp.json()
        candidates = data.get("candidates") or []
        if not candidates:
            return None
        parts = (candidates[0].get("content") or {}).get("parts") or []
        if not parts:
            return None
        return parts[0].get("text") or None


# =============================================================================
# OpenAI
# =============================================================================

class OpenAIVisionClient:
    """
    Calls chat.completions with the image as a data URL.

    Example:
        client = OpenAIVisionClient(api_key="...", model="gpt-4o-mini")
    """

    provider = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        client: AsyncOpenAI | None = None,
    ):
        self.model = model
        self.client = client or AsyncOpenAI(api_key=api_key)

    async def describe_image(
        self,
        image_b64: str,
        mime_type: str,
        instruction: str,
    ) -> str | None:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": instruction},
                        {
                            "type": "image_url",
                            "image_url": {"url": f"data:{mime_type};base64,{image_b64}"},
                        },
                    ],
                }
            ],
            max_tokens=20,
            temperature=0,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content or None


# =============================================================================
# Factory
# =============================================================================

def build_vision_client(settings: Settings) -> VisionClient | None:
    """
    Build the client for the configured provider.

    Returns:
        A client, or None when the provider's API key is not set
        (the synthesizer then uses its deterministic fallback)
    """
    if settings.VISION_PROVIDER == "openai":
        if not settings.OPENAI_API_KEY:
            logger.info("OPENAI_API_KEY not set; smart filenames use fallback only")
            return None
        return OpenAIVisionClient(api_key=settings.OPENAI_API_KEY, model=settings.OPENAI_MODEL)

    if not settings.GEMINI_API_KEY:
        logger.info("GEMINI_API_KEY not set; smart filenames use fallback only")
        return None
    return GeminiVisionClient(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_API_BASE,
    )
