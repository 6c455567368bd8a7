# src/composer/dom/elements/heading.py
from typing import List, Mapping

from bs4 import Tag

from ..core import TagDefinition


def heading_styles(element: Tag, classes: List[str], computed: Mapping[str, str]) -> dict:
    return {"display": "block"}


DEFINITION = TagDefinition(
    tag_names=["h1", "h2", "h3", "h4", "h5", "h6"],
    style_rule=heading_styles,
)
