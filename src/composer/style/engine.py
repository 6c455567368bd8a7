# src/composer/style/engine.py
from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, TYPE_CHECKING

from bs4 import Tag

from composer.dom.core import class_string, parent_element, tag_name
from .whitelist import EXCLUDED_VALUES, INHERITABLE_PROPS, SUPPORTED_PROPS, to_camel

if TYPE_CHECKING:
    from .baseline import BaselineCache
    from .sources import StyleSource

logger = logging.getLogger(__name__)

BUTTON_LIKE_CLASS = re.compile(r"(btn|button|cta)", re.IGNORECASE)


class StyleMode(str, Enum):
    ALL = "all"
    INHERITED_ONLY = "inheritedOnly"
    UA_DIFF = "uaDiff"
    UA_DIFF_PLUS_INHERITED = "uaDiffPlusInherited"


def differs_from_baseline(prop: str, value: str, baseline: Mapping[str, str]) -> bool:
    """True when the value is not what a pristine element of the same tag computes."""
    return value != baseline.get(prop)


def is_inherited_from_parent(prop: str, value: str, parent_style: Optional[Mapping[str, str]]) -> bool:
    """True when the property inherits and its value equals the parent's."""
    if parent_style is None or prop not in INHERITABLE_PROPS:
        return False
    return value == parent_style.get(prop)


def should_include(
        mode: StyleMode,
        prop: str,
        value: str,
        baseline: Mapping[str, str],
        parent_style: Optional[Mapping[str, str]],
) -> bool:
    if mode == StyleMode.ALL:
        return True
    if mode == StyleMode.INHERITED_ONLY:
        return is_inherited_from_parent(prop, value, parent_style)
    if mode == StyleMode.UA_DIFF:
        return differs_from_baseline(prop, value, baseline)
    return (differs_from_baseline(prop, value, baseline)
            or is_inherited_from_parent(prop, value, parent_style))


class StyleResolutionEngine:
    """
    Computes the subset of an element's effective style worth keeping.

    A property is kept when the mode's predicate accepts it and it is on the
    whitelist. The result uses camelCase keys.
    """

    def __init__(
            self,
            source: "StyleSource",
            baselines: "BaselineCache",
            mode: StyleMode = StyleMode.UA_DIFF_PLUS_INHERITED,
            whitelist: Iterable[str] = SUPPORTED_PROPS,
    ):
        self.source = source
        self.baselines = baselines
        self.mode = StyleMode(mode)
        self.whitelist = frozenset(whitelist)

    async def resolve(
            self,
            element: Tag,
            mode: Optional[StyleMode] = None,
            whitelist: Optional[Iterable[str]] = None,
    ) -> Dict[str, str]:
        mode = StyleMode(mode) if mode is not None else self.mode
        allowed = frozenset(whitelist) if whitelist is not None else self.whitelist

        computed = self.source.computed_style(element)
        parent = parent_element(element)
        parent_style = self.source.computed_style(parent) if parent is not None else None

        baseline: Mapping[str, str] = {}
        if mode in (StyleMode.UA_DIFF, StyleMode.UA_DIFF_PLUS_INHERITED):
            baseline = await self.baselines.get_baseline(tag_name(element))

        resolved: Dict[str, str] = {}
        for prop, value in computed.items():
            if value is None or value.strip() in EXCLUDED_VALUES:
                continue
            if prop not in allowed:
                continue
            if should_include(mode, prop, value, baseline, parent_style):
                resolved[to_camel(prop)] = value

        # Button-like anchors keep their padding/background/border box
        if tag_name(element) == "a" and "display" not in resolved:
            if BUTTON_LIKE_CLASS.search(class_string(element)):
                resolved["display"] = "inline-block"

        return resolved
