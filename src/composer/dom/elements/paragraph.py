# src/composer/dom/elements/paragraph.py
from typing import List, Mapping

from bs4 import Tag

from ..core import TagDefinition


def paragraph_styles(element: Tag, classes: List[str], computed: Mapping[str, str]) -> dict:
    return {"display": "inline-block"}


DEFINITION = TagDefinition(
    tag_names=["p"],
    style_rule=paragraph_styles,
)
