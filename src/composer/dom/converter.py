# src/composer/dom/converter.py
from __future__ import annotations

import asyncio
import base64
import logging
from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

from bs4 import Tag

from composer.model import ConverterSettings
from .classifier import ComponentKind, classify
from .core import (
    NodeDraft, attr_string, child_elements, element_attributes, is_text_node, tag_name,
)
from .metadata import build_metadata
from .models import ComponentMapping, Node, PropValue
from .registry import TagRegistry
from .text import clean_text, direct_text_runs, full_text

if TYPE_CHECKING:
    from composer.style.deriver import StyleDeriver
    from composer.style.sources import StyleSource

logger = logging.getLogger(__name__)

LINE_BREAK_TAG = "br"
SVG_DATA_URI_PREFIX = "data:image/svg+xml;base64,"


def encode_svg(markup: str) -> str:
    return SVG_DATA_URI_PREFIX + base64.b64encode(markup.encode("utf-8")).decode("ascii")


def mapped_props(prop_mappings: Dict[str, Any]) -> Dict[str, PropValue]:
    """Component-mapping prop overrides as PropValues; bare values become static values."""
    props = {}
    for name, value in prop_mappings.items():
        if isinstance(value, dict):
            props[name] = PropValue.model_validate(value)
        else:
            props[name] = PropValue(type="string", static_value=value)
    return props


class TreeConverter:
    """
    Recursive element → Node converter.

    Each element is handled by the first branch that applies: skipped tags
    and line breaks, component mappings, rich-text containers, inline SVG,
    text-only divs, line-break merge mode and finally the default branch with
    the registered tag handlers. Children are converted depth-first and in
    document order; every suspension is awaited before the next sibling.
    """

    def __init__(self, source: "StyleSource", deriver: "StyleDeriver",
                 settings: Optional[ConverterSettings] = None):
        self.source = source
        self.deriver = deriver
        self.settings = settings or ConverterSettings()
        self.skip_tags = {t.lower() for t in self.settings.skip_tags}
        self.rich_text_kinds = set(self.settings.rich_text_components)
        TagRegistry.discover()

    async def convert(
            self,
            element: Tag,
            mappings: Sequence[ComponentMapping] = (),
            tokens: Optional[Dict[str, Any]] = None,
    ) -> Optional[Node]:
        tag = tag_name(element)
        if tag == LINE_BREAK_TAG or tag in self.skip_tags:
            return None

        kind = classify(element, self.source.computed_style(element)).value
        styles = await self.deriver.derive(element, tokens)
        draft = NodeDraft(kind, build_metadata(element), styles, element_attributes(element))

        if self._apply_mapping(element, draft, mappings):
            return draft.build()

        if kind in self.rich_text_kinds and any(True for _ in element.children):
            draft.props["html"] = PropValue.string(element.decode_contents())
            return draft.build()

        if tag == "svg":
            draft.props["src"] = PropValue.image_url(await self._svg_data_uri(element))
            return draft.build()

        if tag == "div" and not child_elements(element) and element.get_text().strip():
            await self._add_text_child(element, draft)
            return draft.build()

        if self._has_line_break_child(element) and kind not in self.rich_text_kinds:
            await self._merge_line_breaks(element, draft, mappings, tokens)
            return draft.build()

        handler = TagRegistry.get_node_handler(tag)
        if handler is not None:
            await handler(element, draft, self.source)
        if TagRegistry.is_terminal(tag):
            return draft.build()

        for child in child_elements(element):
            node = await self.convert(child, mappings, tokens)
            if node is not None:
                draft.children.append(node)

        # Anchors carry their text in the label prop
        if tag != "a":
            await self._set_text(element, draft)

        return draft.build()

    # --- branches ---

    def _apply_mapping(self, element: Tag, draft: NodeDraft, mappings: Sequence[ComponentMapping]) -> bool:
        correlation_id = attr_string(element, self.settings.correlation_attribute)
        if not correlation_id:
            return False

        for mapping in mappings:
            node_id = mapping.find(correlation_id)
            if node_id is None:
                continue
            if mapping.code_component_name:
                draft.type = mapping.code_component_name
            draft.props.update(mapped_props(mapping.prop_mappings))
            draft.metadata_extras["component_mapping"] = {
                "figmaNodeId": node_id.node_id,
                "codeComponentName": mapping.code_component_name,
                "figmaComponentKey": mapping.figma_component_key,
                "variantProperties": node_id.variant_properties,
            }
            logger.debug("Element %s mapped to component %s", correlation_id, draft.type)
            return True
        return False

    async def _svg_data_uri(self, element: Tag) -> str:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, lambda: encode_svg(self.source.outer_markup(element)))
        except Exception as e:
            logger.error("SVG conversion error: %s", e)
            return ""

    async def _add_text_child(self, element: Tag, draft: NodeDraft) -> None:
        text = await full_text(element, self.source)
        if not text:
            return
        child = NodeDraft(ComponentKind.TEXT.value, draft.metadata, draft.styles)
        child.set_text(text)
        draft.children.append(child.build())

    @staticmethod
    def _has_line_break_child(element: Tag) -> bool:
        return any(isinstance(child, Tag) and tag_name(child) == LINE_BREAK_TAG for child in element.children)

    async def _merge_line_breaks(self, element: Tag, draft: NodeDraft,
                                 mappings: Sequence[ComponentMapping], tokens) -> None:
        """
        Groups consecutive text runs (across line breaks) into one text-bearing
        node per run group; element children are converted in between.
        """
        runs: List[str] = []

        def flush() -> None:
            if runs:
                merged = NodeDraft(draft.type, draft.metadata, draft.styles)
                merged.set_text(" ".join(runs))
                draft.children.append(merged.build())
                runs.clear()

        for child in element.children:
            if is_text_node(child):
                text = clean_text(str(child))
                if text:
                    runs.append(text)
            elif isinstance(child, Tag):
                if tag_name(child) == LINE_BREAK_TAG:
                    continue
                flush()
                node = await self.convert(child, mappings, tokens)
                if node is not None:
                    draft.children.append(node)
        flush()

        draft.type = ComponentKind.BOX.value

    async def _set_text(self, element: Tag, draft: NodeDraft) -> None:
        if not any(is_text_node(child) and child.strip() for child in element.children):
            return
        if child_elements(element):
            text = " ".join(direct_text_runs(element))
        else:
            text = await full_text(element, self.source)
        if text:
            draft.set_text(text)
