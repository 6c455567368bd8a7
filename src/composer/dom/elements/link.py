# src/composer/dom/elements/link.py
from typing import Any, Dict, Optional

from bs4 import Tag

from ..core import NodeDraft, TagDefinition, attr_string
from ..models import PropValue


def classify_href(href: Optional[str]) -> Dict[str, bool]:
    """Link locality flags derived from the href prefix."""
    href = href or ""
    return {
        "isExternal": href.startswith(("http", "//")),
        "isInternal": href.startswith("#"),
        "isEmail": href.startswith("mailto:"),
        "isPhone": href.startswith("tel:"),
    }


def link_info(element: Tag) -> Dict[str, Any]:
    href = attr_string(element, "href")
    return {
        "href": href,
        "target": attr_string(element, "target") or "_self",
        "rel": attr_string(element, "rel") or "",
        **classify_href(href),
        "textContent": element.get_text().strip(),
    }


async def handle_link(element: Tag, draft: NodeDraft, source) -> None:
    """Sets href/label (and target/rel when present) plus the linkInfo bundle."""
    info = link_info(element)

    draft.props["href"] = PropValue.string(info["href"])
    draft.props["label"] = PropValue.string(info["textContent"])

    target = attr_string(element, "target")
    rel = attr_string(element, "rel")
    if target:
        draft.props["target"] = PropValue.string(target)
    if rel:
        draft.props["rel"] = PropValue.string(rel)

    draft.metadata_extras["link_info"] = info


# --- DEFINITION ---
DEFINITION = TagDefinition(
    tag_names=["a"],
    node_handler=handle_link,
)
