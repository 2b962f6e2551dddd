# =============================================================================
# core/models/post.py - Scheduled Post Schemas
# =============================================================================
# Rows in the append-only ig_posts table. The n8n daily workflow picks up
# rows with status "todo" and renders/publishes them.
# =============================================================================

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, HttpUrl


class ImageStrategy(str, Enum):
    """
    How the workflow produces the post image.

    - ai: generate from scratch
    - img2img: restyle an uploaded asset
    - videoai: animate an uploaded asset
    """
    AI = "ai"
    IMG2IMG = "img2img"
    VIDEOAI = "videoai"


class PostCreate(BaseModel):
    """
    Schema for inserting a planned post.

    Example:
        {
            "date": "2024-06-01",
            "template": "product-spotlight",
            "headline": "Fresh sourdough every morning",
            "image_strategy": "img2img",
            "asset_url": "https://xxx.supabase.co/storage/v1/object/public/ig_assets/bread_1717.jpg"
        }
    """

    date: str = Field(..., description="Publish date (ISO date)")
    template: str = Field(..., description="Layout template identifier")
    headline: str = Field(..., max_length=120)
    subtext: str = ""
    cta: str = ""
    hashtags: str = ""
    style_variant: str = "minimalist high-contrast"
    image_strategy: ImageStrategy
    asset_url: HttpUrl | Literal[""] = ""
    asset_tags: str = ""
    notes: str = ""
    status: str = "todo"
