"""
Text Extractor - Turn an element into one speakable string.

Markup rarely carries reliable semantics, so the extractor tries a fixed
list of sources and the first non-blank one wins:

    1. aria-label attribute
    2. title attribute
    3. rendered text (inner_text)
    4. raw text (text_content)
    5. aria-label or text of the nearest enclosing button or link
"""

from __future__ import annotations

from typing import Optional

from inclusive_jobs.accessibility.dom import Element

# Whole-page containers are never read
EXCLUDED_TAGS = frozenset({"HTML", "BODY", "MAIN"})

INTERACTIVE_TAGS = ("button", "a")

MIN_READABLE_LENGTH = 2


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def extract_speakable_text(element: Optional[Element]) -> Optional[str]:
    """Derive speakable text for an element.

    Args:
        element: Element under focus or pointer

    Returns:
        Trimmed text, or None if no source yields any
    """
    if element is None:
        return None

    for candidate in (
        element.get_attribute("aria-label"),
        element.get_attribute("title"),
        element.inner_text,
        element.text_content,
    ):
        text = _clean(candidate)
        if text:
            return text

    clickable = element.closest(*INTERACTIVE_TAGS)
    if clickable is not None:
        return _clean(clickable.get_attribute("aria-label")) or _clean(clickable.text_content)

    return None


def is_readable(element: Optional[Element], min_length: int = MIN_READABLE_LENGTH) -> bool:
    """Whether an element is worth reading at all.

    Page containers (root, body, main landmark) never are. Otherwise the
    element's label or text, trimmed, must be at least ``min_length``
    characters long.
    """
    if element is None:
        return False
    if element.tag_name in EXCLUDED_TAGS:
        return False
    if element.get_attribute("role") == "main":
        return False

    text = (
        element.get_attribute("aria-label")
        or element.inner_text
        or element.text_content
    )
    return bool(text) and len(text.strip()) >= min_length
