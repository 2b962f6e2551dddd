# =============================================================================
# core/models/prompt.py - Prompt Composer Schemas
# =============================================================================
# Request and response contract for POST /prompt/product.
# The bundle is a text-generation aid; only the documented keys are stable.
# =============================================================================

from pydantic import BaseModel, Field


class PromptRequest(BaseModel):
    """
    Which product image to write about, plus optional commerce fields.

    Example:
        {"name": "shoe.jpg", "price": "R999", "sale_tag": "20% OFF"}
    """

    image: str | None = Field(default=None, description="Public image URL")
    name: str | None = Field(default=None, description="Object path in the products bucket")
    price: str | None = None
    sale_tag: str | None = None


class PromptVariables(BaseModel):
    """Resolved values that went into the prompt."""

    image: str
    price: str | None = None
    sale_tag: str | None = None
    brand_primary: str
    brand_accent: str
    company: str


class PromptBundle(BaseModel):
    """System, user and merged prompt for a single product post."""

    system_prompt: str
    user_prompt: str
    merged_prompt: str
    variables: PromptVariables
