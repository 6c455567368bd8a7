# src/composer/dom/text.py
"""Text extraction that sees through CSS truncation."""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, List

from bs4 import Tag

from .core import attr_string, class_list, is_text_node

if TYPE_CHECKING:
    from composer.style.sources import StyleSource

CLAMP_CLASS = re.compile(r"^(line-clamp-\d+|truncate|text-ellipsis)$")
TRAILING_DOTS = re.compile(r"\.{3,}$")
_INLINE_ELLIPSIS = re.compile(r"text-overflow\s*:\s*ellipsis", re.IGNORECASE)
_INLINE_HIDDEN = re.compile(r"(?:^|;)\s*overflow\s*:\s*hidden", re.IGNORECASE)


def clean_text(text: str) -> str:
    """Strips whitespace and any trailing run of three or more dots."""
    return TRAILING_DOTS.sub("", text.strip()).strip()


def has_truncation(element: Tag, computed: dict) -> bool:
    """True when clamping classes, inline declarations or computed style may cut the text."""
    if any(CLAMP_CLASS.match(cls) for cls in class_list(element)):
        return True

    inline = attr_string(element, "style") or ""
    if _INLINE_ELLIPSIS.search(inline) or _INLINE_HIDDEN.search(inline):
        return True

    if computed.get("text-overflow") == "ellipsis":
        return True
    clamp = computed.get("-webkit-line-clamp")
    return bool(clamp) and clamp != "none"


async def full_text(element: Tag, source: "StyleSource") -> str:
    """
    The element's complete text: read with truncation neutralized when the
    element is clamped, cleaned of leftover ellipsis dots either way.
    """
    if has_truncation(element, source.computed_style(element)):
        text = await source.untruncated_text(element)
    else:
        text = source.text_content(element)
    return clean_text(text or "")


def direct_text_runs(element: Tag) -> List[str]:
    """Cleaned, non-empty text of the element's own text nodes, in order."""
    runs = []
    for child in element.children:
        if is_text_node(child):
            text = clean_text(str(child))
            if text:
                runs.append(text)
    return runs
