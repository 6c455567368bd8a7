# src/composer/dom/metadata.py
import logging
from typing import Dict

from bs4 import Tag

from .core import attr_string, child_elements, class_list, parent_element, tag_name
from .models import Metadata, Position, SourceInfo

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 50
PATH_ROOT_TAG = "body"


def element_position(element: Tag) -> Position:
    """Index among the parent's child elements, sibling count and parent tag."""
    parent = parent_element(element)
    if parent is None:
        return Position()
    siblings = child_elements(parent)
    index = next((i for i, sibling in enumerate(siblings) if sibling is element), 0)
    return Position(index=index, parent_type=tag_name(parent), sibling_count=len(siblings))


def element_selector(element: Tag) -> str:
    """Most specific available selector for one level: id, else first class, else bare tag."""
    selector = tag_name(element)
    element_id = attr_string(element, "id")
    classes = class_list(element)
    if element_id:
        selector += f"#{element_id}"
    elif classes:
        selector += f".{classes[0]}"

    parent = parent_element(element)
    if parent is not None:
        same_tag = [s for s in child_elements(parent) if s.name == element.name]
        if len(same_tag) > 1:
            index = next(i for i, sibling in enumerate(same_tag) if sibling is element)
            selector += f":nth-of-type({index + 1})"
    return selector


def element_path(element: Tag) -> str:
    """CSS-selector-like path from just below <body> down to the element."""
    path = []
    current = element
    while current is not None and tag_name(current) != PATH_ROOT_TAG:
        path.insert(0, element_selector(current))
        current = parent_element(current)
    return " > ".join(path)


def data_attributes(element: Tag) -> Dict[str, str]:
    return {
        name: attr_string(element, name) or ""
        for name in element.attrs
        if name.startswith("data-")
    }


def build_metadata(element: Tag) -> Metadata:
    """
    Derives the debugging/correlation bundle for an element.

    Never raises: any failure degrades to a placeholder title so metadata can
    not abort a conversion.
    """
    tag = "unknown"
    try:
        tag = tag_name(element)
        element_id = attr_string(element, "id")
        classes = class_list(element)
        text = element.get_text().strip()
        preview = text[:PREVIEW_LENGTH]

        title = tag
        if element_id:
            title += f"#{element_id}"
        elif classes:
            title += f".{classes[0]}"
        if preview:
            clipped = "..." if len(text) > PREVIEW_LENGTH else ""
            title += f' - "{preview}{clipped}"'

        return Metadata(
            title=title,
            source_info=SourceInfo(
                tag_name=tag,
                id=element_id or None,
                class_name=" ".join(classes) or None,
                data_attributes=data_attributes(element),
                position=element_position(element),
            ),
            element_path=element_path(element),
            content_preview=preview,
        )
    except Exception as e:
        logger.error("Error extracting metadata for <%s>: %s", tag, e)
        return Metadata(title=f"element-{tag}")
