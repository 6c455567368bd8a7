# src/composer/dom/classifier.py
from enum import Enum
from typing import Mapping, Optional

from bs4 import Tag

from .core import child_elements, tag_name

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
TEXT_TAGS = frozenset({"p", "span", "label"})
IMAGE_TAGS = frozenset({"img", "svg"})


class ComponentKind(str, Enum):
    HEADER = "header"
    LINK = "link"
    LINK_CONTAINER = "link-container"
    VIDEO = "video"
    SECTION = "section"
    TEXT = "text"
    BUTTON = "button"
    IMAGE = "image"
    VSTACK = "vstack"
    HSTACK = "hstack"
    BOX = "box"
    RICH_TEXT = "richTextEditor"


def is_rich_text_marked(element: Tag) -> bool:
    """Elements explicitly hosting freeform formatted text."""
    if element.has_attr("data-rte"):
        return True
    editable = element.get("contenteditable")
    return editable is not None and str(editable).lower() != "false"


def _has_only_text(element: Tag) -> bool:
    return not child_elements(element) and bool(element.get_text().strip())


def classify(element: Tag, style: Optional[Mapping[str, str]] = None) -> ComponentKind:
    """
    Maps an element to a component kind.

    Pure function of the tag name and, for divs, of the computed display,
    flex direction and child presence. Advisory only: it never decides
    whether children are converted.
    """
    tag = tag_name(element)

    if tag in HEADING_TAGS:
        return ComponentKind.HEADER
    if tag == "a":
        return ComponentKind.LINK_CONTAINER if child_elements(element) else ComponentKind.LINK
    if tag == "video":
        return ComponentKind.VIDEO
    if tag == "section":
        return ComponentKind.SECTION
    if tag in TEXT_TAGS:
        return ComponentKind.TEXT
    if tag == "button":
        return ComponentKind.BUTTON
    if tag in IMAGE_TAGS:
        return ComponentKind.IMAGE
    if is_rich_text_marked(element):
        return ComponentKind.RICH_TEXT

    if tag == "div":
        if _has_only_text(element):
            return ComponentKind.TEXT
        style = style or {}
        display = style.get("display")
        if display == "flex":
            if style.get("flex-direction") == "column":
                return ComponentKind.VSTACK
            return ComponentKind.HSTACK
        # TODO: return a grid kind once the page builder ships a grid component
        return ComponentKind.BOX

    if _has_only_text(element):
        return ComponentKind.TEXT
    return ComponentKind.BOX
