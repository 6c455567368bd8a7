# src/composer/dom/elements/button.py
from typing import List, Mapping

from bs4 import Tag

from ..core import NodeDraft, TagDefinition
from ..models import PropValue
from ..text import full_text


def button_styles(element: Tag, classes: List[str], computed: Mapping[str, str]) -> dict:
    styles = {
        "backgroundColor": "transparent",
        "backgroundImage": "none",
    }
    if "border" not in classes:
        styles["border"] = "unset"
    return styles


async def handle_button(element: Tag, draft: NodeDraft, source) -> None:
    draft.props["label"] = PropValue.string(await full_text(element, source))


# --- DEFINITION ---
DEFINITION = TagDefinition(
    tag_names=["button"],
    style_rule=button_styles,
    node_handler=handle_button,
)
