# src/composer/dom/elements/list_item.py
from ..core import TagDefinition
from .lists import list_item_styles

DEFINITION = TagDefinition(
    tag_names=["li"],
    style_rule=list_item_styles,
)
