from __future__ import annotations

import re
from typing import Any

import httpx

from .errors import MalformedResponseError

_LEADING_FENCE = re.compile(r"^```(?:json)?[ \t]*\r?\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\r?\n?[ \t]*```$")


def decode_envelope(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except (ValueError, RecursionError) as e:
        raise MalformedResponseError(f"response body is not JSON: {e}") from e


def _step(node: Any, key: Any, path: str) -> Any:
    try:
        return node[key]
    except (KeyError, IndexError, TypeError):
        raise MalformedResponseError(f"response has no {path}") from None


def strip_fences(text: str) -> str:
    text = text.strip()
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def extract(raw: Any) -> str:
    """Return the generated text at candidates[0].content.parts[0].text, unfenced."""
    node = _step(raw, "candidates", "candidates")
    node = _step(node, 0, "candidates[0]")
    node = _step(node, "content", "candidates[0].content")
    node = _step(node, "parts", "candidates[0].content.parts")
    node = _step(node, 0, "candidates[0].content.parts[0]")
    text = _step(node, "text", "candidates[0].content.parts[0].text")
    if not isinstance(text, str):
        raise MalformedResponseError("candidates[0].content.parts[0].text is not a string")
    return strip_fences(text)
