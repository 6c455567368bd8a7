# src/composer/style/deriver.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

from bs4 import Tag

from composer.dom.core import attr_string, class_list, tag_name
from composer.dom.models import ResponsiveStyles
from composer.dom.registry import TagRegistry
from .sources import parse_declarations
from .trace import StyleTrace
from .utilities import utility_class_styles
from .whitelist import to_camel

if TYPE_CHECKING:
    from .engine import StyleResolutionEngine
    from .sources import StyleSource

logger = logging.getLogger(__name__)


def inline_styles(element: Tag) -> Dict[str, str]:
    return {to_camel(prop): value for prop, value in parse_declarations(attr_string(element, "style")).items()}


class StyleDeriver:
    """
    Merges the style layers of one element, lowest precedence first:

    1. resolved computed style (StyleResolutionEngine),
    2. utility-class rules and the tag's registered style exceptions,
    3. inline declarations from the style attribute.

    Only the default breakpoint is filled; tablet and mobile stay empty.
    """

    def __init__(self, engine: "StyleResolutionEngine", source: "StyleSource",
                 trace: Optional[StyleTrace] = None):
        self.engine = engine
        self.source = source
        self.trace = trace or StyleTrace()
        TagRegistry.discover()

    async def derive(self, element: Tag, tokens: Optional[Dict[str, Any]] = None) -> ResponsiveStyles:
        # Design tokens are accepted but not applied yet.
        try:
            styles = dict(await self.engine.resolve(element))
            styles.update(self.exception_styles(element))
            styles.update(inline_styles(element))
            return ResponsiveStyles(default=styles)
        except Exception as e:
            logger.error("Error deriving styles for <%s>: %s", tag_name(element), e)
            return ResponsiveStyles()

    def exception_styles(self, element: Tag) -> Dict[str, str]:
        classes = class_list(element)
        styles = utility_class_styles(classes)

        rule = TagRegistry.get_style_rule(tag_name(element))
        if rule is not None:
            computed = self.source.computed_style(element)
            self.trace.emit(element, classes, computed)
            styles.update(rule(element, classes, computed))
        return styles
