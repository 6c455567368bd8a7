# src/composer/dom/core.py
from __future__ import annotations

import uuid
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, TYPE_CHECKING

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

from .models import Metadata, Node, NodeStyles, PropValue, ResponsiveStyles, StyleMap

if TYPE_CHECKING:
    from composer.style.sources import StyleSource


# --- Element helpers (bs4 Tag is the source element type) ---

def new_uid() -> str:
    return str(uuid.uuid4())


def tag_name(element: Tag) -> str:
    return (element.name or "").lower()


def parent_element(element: Tag) -> Optional[Tag]:
    """Returns the parent element, or None at the top of the document."""
    parent = element.parent
    if parent is None or not isinstance(parent, Tag) or parent.name == "[document]":
        return None
    return parent


def child_elements(element: Tag) -> List[Tag]:
    return [child for child in element.children if isinstance(child, Tag)]


def is_text_node(node: Any) -> bool:
    """Bare text only; comments, CDATA, doctypes and friends do not count."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def class_list(element: Tag) -> List[str]:
    value = element.get("class")
    if not value:
        return []
    if isinstance(value, str):
        return value.split()
    return [c for c in value if c]


def class_string(element: Tag) -> str:
    return " ".join(class_list(element))


def attr_string(element: Tag, name: str) -> Optional[str]:
    """Attribute value as a plain string; multi-valued attributes are space-joined."""
    value = element.get(name)
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def element_attributes(element: Tag) -> Dict[str, str]:
    """All attributes except class and style."""
    return {
        name: attr_string(element, name) or ""
        for name in element.attrs
        if name not in ("class", "style")
    }


# --- Tag definitions (registered through DOMRegistry-style discovery) ---

StyleRule = Callable[[Tag, List[str], Mapping[str, str]], StyleMap]
NodeHandler = Callable[[Tag, "NodeDraft", "StyleSource"], Awaitable[None]]


class TagDefinition:
    """
    Configuration object binding one or more HTML tags to their special handling.

    style_rule:   tag/class-conditioned style exceptions merged over the
                  resolved computed style.
    node_handler: side-channel handling that adds props, attrs and metadata
                  bundles to the node being built.
    terminal:     when True the converter never recurses into the children.
    """

    def __init__(
            self,
            tag_names: List[str],
            style_rule: Optional[StyleRule] = None,
            node_handler: Optional[NodeHandler] = None,
            terminal: bool = False,
    ):
        self.tag_names = [t.lower() for t in tag_names]
        self.style_rule = style_rule
        self.node_handler = node_handler
        self.terminal = terminal


class NodeDraft:
    """
    Mutable scratch state for one node while its element is being converted.

    A draft is turned into an immutable Node exactly once, by build(), right
    before it is handed to the parent.
    """

    def __init__(self, kind: str, metadata: Metadata, styles: ResponsiveStyles,
                 attrs: Optional[Dict[str, str]] = None):
        self.type = kind
        self.uid = new_uid()
        self.metadata = metadata
        self.styles = styles
        self.attrs: Dict[str, str] = dict(attrs or {})
        self.props: Dict[str, PropValue] = {}
        self.metadata_extras: Dict[str, Dict[str, Any]] = {}
        self.children: List[Node] = []

    def set_text(self, text: str) -> None:
        self.props["text"] = PropValue.string(text)

    @property
    def text(self) -> Optional[str]:
        prop = self.props.get("text")
        return prop.static_string if prop else None

    def build(self) -> Node:
        slots: Dict[str, List[Node]] = {}
        props = dict(self.props)
        if self.children:
            slot_id = new_uid()
            props["children"] = PropValue.slot_ref(slot_id)
            slots[slot_id] = list(self.children)

        metadata = self.metadata
        if self.metadata_extras:
            metadata = metadata.model_copy(update=self.metadata_extras)

        return Node(
            type=self.type,
            uid=self.uid,
            metadata=metadata,
            attrs=self.attrs,
            props=props,
            slots=slots,
            styles=NodeStyles.wrap(self.styles),
        )
