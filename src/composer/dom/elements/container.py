# src/composer/dom/elements/container.py
import re
from typing import List, Mapping

from bs4 import Tag

from ..core import TagDefinition

BG_OPACITY = re.compile(r"^bg-opacity-(\d+)$")


def container_styles(element: Tag, classes: List[str], computed: Mapping[str, str]) -> dict:
    """
    Utility-class normalizations for divs: `bg-opacity-N` becomes opacity N/100
    and any `border*` class resets the border to `0 solid` so width/color
    utilities have an anchor to build on.
    """
    styles = {}
    for cls in classes:
        match = BG_OPACITY.match(cls)
        if match:
            styles["opacity"] = f"{int(match.group(1)) / 100:g}"
        if cls.startswith("border"):
            styles["border"] = "0 solid"
    return styles


DEFINITION = TagDefinition(
    tag_names=["div"],
    style_rule=container_styles,
)
