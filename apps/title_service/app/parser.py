from __future__ import annotations

import json
from typing import Any, List, Optional

import pydantic
from pydantic import TypeAdapter

from blog_schemas.models import CityRecommendationList, OperationKind, TitleSet

from .errors import ParseError

_RECOMMENDATIONS = TypeAdapter(CityRecommendationList)


def _decode(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        raise ParseError(f"generated text is not valid JSON: {e}") from e


def _first_error(e: pydantic.ValidationError) -> str:
    err = e.errors()[0]
    loc = ".".join(str(part) for part in err["loc"])
    return f"{loc}: {err['msg']}" if loc else err["msg"]


def _check_count(name: str, items: List[str], expected: Optional[int]) -> None:
    if expected is not None and len(items) != expected:
        raise ParseError(f"expected {expected} entries in {name}, got {len(items)}")


def parse_titles(text: str, expected_count: Optional[int] = None) -> TitleSet:
    data = _decode(text)
    if not isinstance(data, dict):
        raise ParseError(f"expected a JSON object with info/tips/hotspots, got {type(data).__name__}")
    try:
        titles = TitleSet.model_validate(data)
    except pydantic.ValidationError as e:
        raise ParseError(f"title set has the wrong shape: {_first_error(e)}") from e
    for name, items in titles.categories().items():
        _check_count(name, items, expected_count)
    return titles


def parse_recommendations(text: str, expected_count: Optional[int] = None) -> List[str]:
    data = _decode(text)
    if not isinstance(data, list):
        raise ParseError(f"expected a JSON array of destinations, got {type(data).__name__}")
    try:
        cities = _RECOMMENDATIONS.validate_python(data)
    except pydantic.ValidationError as e:
        raise ParseError(f"recommendations must all be strings: {_first_error(e)}") from e
    _check_count("recommendations", cities, expected_count)
    return cities


PARSERS = {
    OperationKind.TITLES: parse_titles,
    OperationKind.RECOMMENDATIONS: parse_recommendations,
}
