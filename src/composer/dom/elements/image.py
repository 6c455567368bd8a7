# src/composer/dom/elements/image.py
from typing import List, Mapping
from urllib.parse import urljoin

from bs4 import Tag

from ..core import NodeDraft, TagDefinition, attr_string
from ..models import PropValue


def image_styles(element: Tag, classes: List[str], computed: Mapping[str, str]) -> dict:
    return {"maxWidth": "100%"}


def absolute_src(src: str, base_url: str) -> str:
    """Resolves a possibly relative src against the page URL."""
    if not src:
        return ""
    return urljoin(base_url, src) if base_url else src


async def handle_image(element: Tag, draft: NodeDraft, source) -> None:
    src = absolute_src(attr_string(element, "src") or "", source.base_url)
    alt = attr_string(element, "alt")

    draft.props["src"] = PropValue.image_url(src)
    draft.props["alt"] = PropValue(type="string", static_value=alt)

    width = source.dom_property(element, "naturalWidth") or attr_string(element, "width")
    height = source.dom_property(element, "naturalHeight") or attr_string(element, "height")
    draft.metadata_extras["media_info"] = {
        "type": "image",
        "src": src,
        "alt": alt,
        "dimensions": {"width": width, "height": height},
        "loading": attr_string(element, "loading") or "eager",
        "decoding": attr_string(element, "decoding") or "auto",
    }


# --- DEFINITION ---
DEFINITION = TagDefinition(
    tag_names=["img"],
    style_rule=image_styles,
    node_handler=handle_image,
    terminal=True,
)
