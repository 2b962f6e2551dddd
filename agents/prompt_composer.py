# =============================================================================
# agents/prompt_composer.py - Product Post Prompt Composer
# =============================================================================
# Assembles a ready-to-use prompt for writing an Instagram post about one
# product image:
#
# 1. Resolve the image to an absolute URL (given directly, or built from the
#    storage base + products bucket + object name)
# 2. Load the business profile (best-effort; failures mean defaults)
# 3. Build the system prompt (brand tone, limits, colors)
# 4. Build the user prompt (variables block + numbered requirements)
# 5. Merge both into one string
#
# Only step 1 can fail. Nothing here calls a model.
#
# Usage:
#   composer = PromptComposer(StorageConfig.from_settings(settings), load_profile)
#   bundle = await composer.compose(name="shoe.jpg", price="R999")
# =============================================================================

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Union

from agents.prompts.product_post import build_system_prompt, build_user_prompt
from app.config import StorageConfig
from app.exceptions import PromptInputError, StorageConfigError
from core.models.profile import BusinessProfile
from core.models.prompt import PromptBundle, PromptVariables

logger = logging.getLogger(__name__)

DEFAULT_BRAND_PRIMARY = "#0A84FF"
DEFAULT_BRAND_ACCENT = "#00C2A8"
DEFAULT_COMPANY_NAME = "Our Brand"

ProfileLike = Union[BusinessProfile, dict[str, Any], None]
ProfileLoader = Callable[[], Union[ProfileLike, Awaitable[ProfileLike]]]


def public_object_url(base_url: str, bucket: str, name: str) -> str:
    """Public URL of an object in a Supabase Storage bucket."""
    return f"{base_url.rstrip('/')}/storage/v1/object/public/{bucket}/{name.lstrip('/')}"


class PromptComposer:
    """
    Builds PromptBundles for product posts.

    Attributes:
        storage: Where named product images live
        profile_loader: Zero-arg callable (sync or async) returning the
            current profile; None means "no profile available"
    """

    def __init__(
        self,
        storage: StorageConfig,
        profile_loader: ProfileLoader | None = None,
    ):
        self.storage = storage
        self.profile_loader = profile_loader

    def resolve_image_url(self, image: str | None, name: str | None) -> str:
        """
        Turn the request into an absolute image URL.

        Raises:
            PromptInputError: Neither image nor name given
            StorageConfigError: Name given but no storage base URL configured
        """
        if image:
            return image
        if not name:
            raise PromptInputError()
        if not self.storage.public_base_url:
            raise StorageConfigError()
        return public_object_url(self.storage.public_base_url, self.storage.products_bucket, name)

    async def load_profile(self) -> BusinessProfile:
        """Best-effort profile lookup; any failure yields an empty profile."""
        if self.profile_loader is None:
            return BusinessProfile()
        try:
            result = self.profile_loader()
            if inspect.isawaitable(result):
                result = await result
            if isinstance(result, BusinessProfile):
                return result
            return BusinessProfile.from_row(result)
        except Exception as e:
            logger.warning(f"Profile lookup failed, using brand defaults: {e}")
            return BusinessProfile()

    async def compose(
        self,
        image: str | None = None,
        name: str | None = None,
        price: str | None = None,
        sale_tag: str | None = None,
    ) -> PromptBundle:
        """
        Build the prompt bundle.

        Args:
            image: Public image URL (takes precedence over name)
            name: Object path in the products bucket
            price: Optional price text, e.g. "R999"
            sale_tag: Optional tag, e.g. "20% OFF"

        Returns:
            PromptBundle with system, user and merged prompts plus variables

        Raises:
            PromptInputError, StorageConfigError: see resolve_image_url
        """
        # Validate before any I/O
        image_url = self.resolve_image_url(image, name)

        profile = await self.load_profile()
        primary = profile.brand_primary_hex or DEFAULT_BRAND_PRIMARY
        accent = profile.brand_accent_hex or DEFAULT_BRAND_ACCENT
        company = profile.company_name or DEFAULT_COMPANY_NAME

        system_prompt = build_system_prompt(company, primary, accent)
        user_prompt = build_user_prompt(image_url, primary, accent, price=price, sale_tag=sale_tag)

        logger.info(f"Composed product prompt for {image_url}")

        return PromptBundle(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            merged_prompt=f"{system_prompt}\n\n{user_prompt}",
            variables=PromptVariables(
                image=image_url,
                price=price or None,
                sale_tag=sale_tag or None,
                brand_primary=primary,
                brand_accent=accent,
                company=company,
            ),
        )
