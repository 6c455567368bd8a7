# src/composer/dom/elements/lists.py
from typing import Dict, List, Mapping

from bs4 import Tag

from composer.style.whitelist import to_camel

from ..core import TagDefinition

LIST_STYLE_PROPS = ("list-style-type", "list-style-position", "list-style-image")
SPACING_PROPS = ("margin-top", "margin-bottom", "padding-left", "padding-right")
ITEM_TEXT_PROPS = ("letter-spacing", "text-transform")

FLEX_LAYOUT_PROPS = ("flex-direction", "justify-content", "align-items", "gap")
GRID_LAYOUT_PROPS = ("grid-template-columns", "grid-template-rows", "gap")


def _copy(computed: Mapping[str, str], props) -> Dict[str, str]:
    # copied as computed, regardless of default-ness
    return {to_camel(prop): computed[prop] for prop in props if computed.get(prop) is not None}


def list_container_styles(element: Tag, classes: List[str], computed: Mapping[str, str]) -> dict:
    """Layout, list-style and spacing of ul/ol/nav, copied straight from the computed style."""
    display = computed.get("display")
    styles: Dict[str, str] = {}
    if display is not None:
        styles["display"] = display
    if display == "flex":
        styles.update(_copy(computed, FLEX_LAYOUT_PROPS))
    elif display == "grid":
        styles.update(_copy(computed, GRID_LAYOUT_PROPS))
    styles.update(_copy(computed, LIST_STYLE_PROPS))
    styles.update(_copy(computed, SPACING_PROPS))
    return styles


def list_item_styles(element: Tag, classes: List[str], computed: Mapping[str, str]) -> dict:
    return _copy(computed, ("display",) + LIST_STYLE_PROPS + SPACING_PROPS + ITEM_TEXT_PROPS)


# --- DEFINITION ---
DEFINITION = TagDefinition(
    tag_names=["ul", "ol", "nav"],
    style_rule=list_container_styles,
)
