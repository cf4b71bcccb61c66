from __future__ import annotations

import re
from typing import List

from blog_schemas.models import TitleSet

SECTION_LABELS = (
    ("info", "Essential travel info"),
    ("tips", "Insider travel tips"),
    ("hotspots", "Restaurants & hotspots"),
)

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')


def format_category(items: List[str]) -> str:
    """Text for copying a whole category at once, one title per line."""
    return "\n".join(items)


def format_title_document(titles: TitleSet, destination: str) -> str:
    categories = titles.categories()
    blocks = [f"[ {destination} travel blog title ideas ]"]
    for key, label in SECTION_LABELS:
        items = categories[key]
        numbered = "\n".join(f"{i}. {title}" for i, title in enumerate(items, start=1))
        blocks.append(f"■ {label} ({len(items)})\n{numbered}")
    return "\n\n".join(blocks) + "\n"


def export_filename(destination: str, total: int) -> str:
    stem = _UNSAFE_FILENAME_CHARS.sub("_", destination.strip()) or "destination"
    return f"{stem}_travel_titles_{total}.txt"
