from __future__ import annotations

from typing import Optional

from blog_schemas.models import GenerationRequest, OperationKind, ResponseFormat

from .config import OUTPUT_LANGUAGE, RECOMMENDATION_COUNT, TITLE_TEMPERATURE, TITLES_PER_CATEGORY
from .errors import ValidationError


def _require(text: str, what: str, credential: Optional[str]) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise ValidationError(f"Please enter a {what}.")
    if not (credential or "").strip():
        raise ValidationError("No API key is configured. Add one in settings first.", needs_credential=True)
    return cleaned


def title_instruction(per_category: int = TITLES_PER_CATEGORY, language: str = OUTPUT_LANGUAGE) -> str:
    return (
        "You are a professional travel blogger.\n"
        "Respond ONLY with a JSON object of this exact shape and no other text:\n"
        f'{{ "info": ["title 1", ..., "title {per_category}"], '
        f'"tips": ["title 1", ..., "title {per_category}"], '
        f'"hotspots": ["title 1", ..., "title {per_category}"] }}.\n'
        f"Write exactly {per_category} SEO-optimized blog post titles per category "
        f"({per_category * 3} in total), in {language}.\n"
        "- info: essential, up-to-date travel information\n"
        "- tips: insider travel tips\n"
        "- hotspots: restaurants and trending places\n"
    )


def recommendation_instruction(count: int = RECOMMENDATION_COUNT, language: str = OUTPUT_LANGUAGE) -> str:
    return (
        "You are a travel expert. "
        f"Recommend {count} travel destinations that fit the user's theme, written in {language}. "
        f"Respond ONLY with a JSON array of exactly {count} destination-name strings. "
        'Example: ["City 1", "City 2"]'
    )


def build_title_request(destination: str, credential: Optional[str]) -> GenerationRequest:
    # Search grounding is on, so JSON response mode must stay off; the
    # instruction alone asks for JSON.
    destination = _require(destination, "destination", credential)
    return GenerationRequest(
        kind=OperationKind.TITLES,
        prompt_text=f"Suggest {TITLES_PER_CATEGORY * 3} travel blog post titles for {destination}.",
        system_instruction=title_instruction(),
        use_search_tool=True,
        response_format=ResponseFormat.NONE,
        temperature=TITLE_TEMPERATURE,
    )


def build_recommendation_request(theme: str, credential: Optional[str]) -> GenerationRequest:
    theme = _require(theme, "theme", credential)
    return GenerationRequest(
        kind=OperationKind.RECOMMENDATIONS,
        prompt_text=(
            f"Theme: {theme}. Recommend {RECOMMENDATION_COUNT} specific travel destinations "
            "that suit this theme."
        ),
        system_instruction=recommendation_instruction(),
        use_search_tool=False,
        response_format=ResponseFormat.JSON,
    )


BUILDERS = {
    OperationKind.TITLES: build_title_request,
    OperationKind.RECOMMENDATIONS: build_recommendation_request,
}
