# =============================================================================
# app/routers/prompt.py - Product Prompt Endpoint
# =============================================================================
# Returns a ready-to-use prompt for a VLM/LLM to write an Instagram post
# about a product image from the products bucket.
# =============================================================================

from fastapi import APIRouter

from app.dependencies import PromptComposerDep
from core.models.prompt import PromptBundle, PromptRequest

router = APIRouter()


@router.post("/prompt/product", response_model=PromptBundle)
async def product_prompt(request: PromptRequest, composer: PromptComposerDep):
    """
    Build system, user and merged prompts for one product image.

    Send either `image` (public URL) or `name` (object path in the products
    bucket). `price` and `sale_tag` are optional.
    """
    return await composer.compose(
        image=request.image,
        name=request.name,
        price=request.price,
        sale_tag=request.sale_tag,
    )
