# src/composer/style/trace.py
import json
import logging
from typing import Iterable, List, Mapping

from bs4 import Tag

from composer.dom.core import tag_name

trace_logger = logging.getLogger("composer.trace")

TRACED_TAGS = frozenset({"ul", "ol", "nav", "li"})

TRACED_PROPS = (
    "display", "flex-direction", "align-items", "gap",
    "padding-left", "padding-right", "margin-top", "margin-bottom",
    "letter-spacing", "text-transform",
)


class StyleTrace:
    """
    Diagnostic hook for list/nav style exceptions.

    Emits one JSON record per matching element on the 'composer.trace' logger
    when enabled. An empty class filter traces every list/nav element.
    """

    def __init__(self, enabled: bool = False, trace_classes: Iterable[str] = ()):
        self.enabled = enabled
        self.trace_classes = set(trace_classes)

    def wants(self, classes: List[str]) -> bool:
        if not self.enabled:
            return False
        return not self.trace_classes or bool(self.trace_classes.intersection(classes))

    def emit(self, element: Tag, classes: List[str], computed: Mapping[str, str]) -> None:
        if tag_name(element) not in TRACED_TAGS or not self.wants(classes):
            return
        record = {
            "event": "list-style-exception",
            "tag": tag_name(element),
            "classes": classes,
            "computed": {prop: computed.get(prop) for prop in TRACED_PROPS if prop in computed},
        }
        trace_logger.info(json.dumps(record, ensure_ascii=False))
