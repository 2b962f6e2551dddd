# =============================================================================
# agents/prompts/product_post.py - Product Post Prompt Text
# =============================================================================
# Building blocks for the Instagram product-post prompt returned by
# POST /prompt/product. The caller pastes the merged prompt into any
# VLM/LLM together with the image.
# =============================================================================

from __future__ import annotations

CAPTION_CHAR_LIMIT = "2,200"
MAX_EMOJIS = 3
LANGUAGE_VARIANT = "UK English"

POST_REQUIREMENTS: list[str] = [
    "Analyze the product IMAGE to infer product category, material/finish, distinguishing features, and intended use.",
    "Identify a short, punchy hook (<= 8 words) as the opening line.",
    "Write a 2-3 sentence benefit-focused description using brand tone.",
    "If a PRICE is provided, incorporate it naturally (e.g., “Now only <PRICE>”).",
    "If a SALE TAG is provided (e.g., a discount or launch tag), include it once near the end.",
    "Include 10-15 relevant, high-intent hashtags. Mix broad and niche tags. No banned tags.",
    "Add an ADA-friendly alt text (<= 120 chars) describing the product for screen readers.",
]

OUTPUT_SHAPE = """Output JSON with the following keys only:
{
  "hook": string,
  "caption": string,        // full IG caption including hook line and body
  "hashtags": string[],     // 10-15 items without the # prefix
  "alt_text": string        // <=120 chars
}"""


def build_system_prompt(company: str, primary: str, accent: str) -> str:
    """Brand and tone constraints."""
    return (
        "You are a senior e-commerce social media copywriter and brand stylist.\n"
        "- Goal: Create a scroll-stopping Instagram post (caption + hashtags) for a single product image.\n"
        f"- Tone: Friendly, confident, concise, and on-brand for {company}.\n"
        f"- Constraints: Keep the entire caption under {CAPTION_CHAR_LIMIT} characters. "
        f"Avoid overusing emojis (<= {MAX_EMOJIS}). Use {LANGUAGE_VARIANT}.\n"
        "- Visual Theme: When suggesting overlays/backdrops/colors, prefer brand colors "
        f"Primary {primary} and Accent {accent}."
    )


def build_user_prompt(
    image_url: str,
    primary: str,
    accent: str,
    price: str | None = None,
    sale_tag: str | None = None,
) -> str:
    """
    Task instructions plus the variables block.

    PRICE and SALE_TAG lines appear only when the value is truthy.
    """
    variable_lines = [
        f"IMAGE_URL: {image_url}",
        f"BRAND_PRIMARY: {primary}",
        f"BRAND_ACCENT: {accent}",
    ]
    if price:
        variable_lines.append(f"PRICE: {price}")
    if sale_tag:
        variable_lines.append(f"SALE_TAG: {sale_tag}")

    numbered = "\n".join(f" {i}. {req}" for i, req in enumerate(POST_REQUIREMENTS, start=1))

    return (
        "\n".join(variable_lines)
        + "\n\nFollow these requirements precisely:\n"
        + numbered
        + "\n\n"
        + OUTPUT_SHAPE
    )
