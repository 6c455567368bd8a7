# src/composer/style/sources.py
"""
Host capabilities the converter depends on.

The recursive conversion logic never talks to a browser directly. It asks a
StyleSource for computed styles and text, and a BaselineProvider for the
pristine style of an unstyled tag. The static implementations below work on
parsed HTML alone and approximate what a browser would compute.
"""
from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup, Tag

from composer.dom.core import attr_string, parent_element, tag_name
from .whitelist import INHERITABLE_PROPS

logger = logging.getLogger(__name__)


def foreign_markup(element: Tag) -> str:
    """
    Markup of an element with SVG tag and attribute names in their proper case.

    The HTML tree lowercases every name (viewbox, lineargradient), which SVG
    renderers do not recognize. html5lib restores the case while re-parsing.
    """
    markup = str(element)
    if tag_name(element) != "svg":
        return markup
    reparsed = BeautifulSoup(markup, "html5lib").find("svg")
    return str(reparsed) if reparsed is not None else markup


class StyleSource(ABC):
    """Supplies computed-style lookups and live DOM facts for source elements."""

    base_url: str = ""

    @abstractmethod
    def computed_style(self, element: Tag) -> Dict[str, str]:
        """Kebab-case property name -> computed value."""
        raise NotImplementedError

    def text_content(self, element: Tag) -> str:
        """Equivalent of the DOM textContent of the element."""
        return element.get_text()

    async def untruncated_text(self, element: Tag) -> str:
        """
        Text of the element read while visual truncation is neutralized.
        Hosts without a rendering engine have nothing to neutralize.
        """
        return self.text_content(element)

    def dom_property(self, element: Tag, name: str, default: Any = None) -> Any:
        """Live DOM property (value, naturalWidth, selected, ...)."""
        return default

    def outer_markup(self, element: Tag) -> str:
        """Serialized markup of the element, as the DOM outerHTML would give it."""
        return foreign_markup(element)


class BaselineProvider(ABC):
    """Supplies the computed style of a pristine, unstyled instance of a tag."""

    async def open(self) -> None:
        """Prepares the offscreen context. May raise if none can be created."""

    @abstractmethod
    async def probe(self, tag: str) -> Dict[str, str]:
        raise NotImplementedError

    async def close(self) -> None:
        """Releases the offscreen context."""


# --- User agent defaults used by the static host ---

_GENERIC_DEFAULTS: Dict[str, str] = {
    "display": "inline", "position": "static",
    "top": "auto", "right": "auto", "bottom": "auto", "left": "auto", "z-index": "auto",
    "width": "auto", "height": "auto", "min-width": "auto", "min-height": "auto",
    "max-width": "none", "max-height": "none", "aspect-ratio": "auto",
    "overflow": "visible", "overflow-x": "visible", "overflow-y": "visible",
    "margin-top": "0px", "margin-right": "0px", "margin-bottom": "0px", "margin-left": "0px",
    "padding-top": "0px", "padding-right": "0px", "padding-bottom": "0px", "padding-left": "0px",
    "background-color": "rgba(0, 0, 0, 0)", "background-image": "none", "background-repeat": "repeat",
    "background-size": "auto", "background-position": "0% 0%", "background-clip": "border-box",
    "background-origin": "padding-box", "background-attachment": "scroll", "background-blend-mode": "normal",
    "border-top-width": "0px", "border-right-width": "0px", "border-bottom-width": "0px", "border-left-width": "0px",
    "border-top-style": "none", "border-right-style": "none", "border-bottom-style": "none",
    "border-left-style": "none",
    "border-top-color": "rgb(0, 0, 0)", "border-right-color": "rgb(0, 0, 0)",
    "border-bottom-color": "rgb(0, 0, 0)", "border-left-color": "rgb(0, 0, 0)",
    "border-top-left-radius": "0px", "border-top-right-radius": "0px",
    "border-bottom-right-radius": "0px", "border-bottom-left-radius": "0px",
    "border-image": "none",
    "box-shadow": "none", "opacity": "1", "transform": "none", "filter": "none", "backdrop-filter": "none",
    "mix-blend-mode": "normal", "clip-path": "none", "mask": "none",
    "color": "rgb(0, 0, 0)", "font-family": '"Times New Roman"', "font-size": "16px", "font-weight": "400",
    "font-style": "normal", "line-height": "normal", "letter-spacing": "normal", "text-transform": "none",
    "text-decoration-line": "none", "text-decoration-color": "rgb(0, 0, 0)",
    "text-decoration-thickness": "auto", "text-underline-offset": "auto",
    "text-align": "start", "white-space": "normal", "text-overflow": "clip", "overflow-wrap": "normal",
    "word-break": "normal",
    "flex": "0 1 auto", "flex-grow": "0", "flex-shrink": "1", "flex-basis": "auto", "flex-direction": "row",
    "flex-wrap": "nowrap", "align-items": "normal", "justify-content": "normal", "align-content": "normal",
    "align-self": "auto", "gap": "normal",
    "grid-template-columns": "none", "grid-template-rows": "none", "grid-auto-flow": "row",
    "grid-auto-rows": "auto", "grid-auto-columns": "auto", "grid-column": "auto", "grid-row": "auto",
    "row-gap": "normal", "column-gap": "normal", "place-items": "normal", "place-content": "normal",
    "justify-items": "normal", "justify-self": "auto",
    "list-style": "outside none disc", "list-style-type": "disc", "list-style-position": "outside",
    "list-style-image": "none", "table-layout": "auto", "border-collapse": "separate",
    "border-spacing": "0px 0px",
    "visibility": "visible", "pointer-events": "auto", "user-select": "auto", "cursor": "auto",
    "object-fit": "fill", "object-position": "50% 50%",
}

_BLOCK_TAGS = {
    "html", "body", "div", "p", "section", "article", "header", "footer", "nav", "main", "aside",
    "ul", "ol", "form", "figure", "figcaption", "blockquote", "address", "dl", "dt", "dd",
    "fieldset", "hr", "pre", "details", "summary", "h1", "h2", "h3", "h4", "h5", "h6",
}

# (font-size, vertical margin) per heading level
_HEADINGS = {
    "h1": ("32px", "21.44px"), "h2": ("24px", "19.92px"), "h3": ("18.72px", "18.72px"),
    "h4": ("16px", "21.28px"), "h5": ("13.28px", "22.1776px"), "h6": ("10.72px", "24.976px"),
}

_TAG_DEFAULTS: Dict[str, Dict[str, str]] = {
    "body": {"margin-top": "8px", "margin-right": "8px", "margin-bottom": "8px", "margin-left": "8px"},
    "p": {"margin-top": "16px", "margin-bottom": "16px"},
    "ul": {"margin-top": "16px", "margin-bottom": "16px", "padding-left": "40px"},
    "ol": {"margin-top": "16px", "margin-bottom": "16px", "padding-left": "40px",
           "list-style-type": "decimal", "list-style": "outside none decimal"},
    "li": {"display": "list-item", "text-align": "match-parent"},
    "a": {"color": "rgb(0, 0, 238)", "cursor": "pointer", "text-decoration-line": "underline",
          "text-decoration-color": "rgb(0, 0, 238)"},
    "button": {"display": "inline-block", "padding-top": "1px", "padding-bottom": "1px",
               "padding-left": "6px", "padding-right": "6px", "font-size": "13.3333px",
               "background-color": "rgb(239, 239, 239)", "text-align": "center",
               "border-top-width": "2px", "border-right-width": "2px", "border-bottom-width": "2px",
               "border-left-width": "2px", "border-top-style": "outset", "border-right-style": "outset",
               "border-bottom-style": "outset", "border-left-style": "outset"},
    "input": {"display": "inline-block", "font-size": "13.3333px"},
    "select": {"display": "inline-block", "font-size": "13.3333px"},
    "textarea": {"display": "inline-block", "font-size": "13.3333px", "white-space": "pre-wrap"},
    "strong": {"font-weight": "700"}, "b": {"font-weight": "700"},
    "em": {"font-style": "italic"}, "i": {"font-style": "italic"},
    "table": {"display": "table", "border-spacing": "2px 2px"},
    "thead": {"display": "table-header-group"}, "tbody": {"display": "table-row-group"},
    "tr": {"display": "table-row"},
    "td": {"display": "table-cell", "padding-top": "1px", "padding-right": "1px",
           "padding-bottom": "1px", "padding-left": "1px"},
    "th": {"display": "table-cell", "font-weight": "700", "text-align": "center"},
    "pre": {"white-space": "pre", "font-family": "monospace"},
    "script": {"display": "none"}, "style": {"display": "none"}, "template": {"display": "none"},
    "svg": {"width": "300px", "height": "150px"},
}


def _tag_overrides(tag: str) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if tag in _BLOCK_TAGS:
        overrides["display"] = "block"
    if tag in _HEADINGS:
        size, margin = _HEADINGS[tag]
        overrides.update({"font-size": size, "font-weight": "700",
                          "margin-top": margin, "margin-bottom": margin})
    overrides.update(_TAG_DEFAULTS.get(tag, {}))
    return overrides


def user_agent_defaults(tag: str) -> Dict[str, str]:
    """Approximate computed style of a pristine element of the given tag."""
    styles = dict(_GENERIC_DEFAULTS)
    styles.update(_tag_overrides(tag.lower()))
    return styles


def parse_declarations(style_text: Optional[str]) -> Dict[str, str]:
    """
    Parses an inline style attribute into (kebab-case property -> value).
    Splits on the first colon only so values such as url(http://...) survive.
    """
    declarations: Dict[str, str] = {}
    if not style_text:
        return declarations
    for declaration in style_text.split(";"):
        prop, sep, value = declaration.partition(":")
        prop, value = prop.strip(), value.strip()
        if not sep or not prop or not value:
            continue
        if not prop.startswith("--"):
            prop = prop.lower()
        declarations[prop] = value
    return declarations


_BOX_SIDES = ("top", "right", "bottom", "left")


def _expand_box_shorthand(prop: str, value: str) -> Dict[str, str]:
    parts = re.split(r"\s+", value.strip())
    if not 1 <= len(parts) <= 4:
        return {prop: value}
    # CSS 1-4 value box model: top right bottom left
    if len(parts) == 1:
        parts = parts * 4
    elif len(parts) == 2:
        parts = [parts[0], parts[1], parts[0], parts[1]]
    elif len(parts) == 3:
        parts = [parts[0], parts[1], parts[2], parts[1]]
    return {f"{prop}-{side}": part for side, part in zip(_BOX_SIDES, parts)}


class StaticBaselineProvider(BaselineProvider):
    """Baseline snapshots from the built-in user agent table."""

    async def probe(self, tag: str) -> Dict[str, str]:
        return user_agent_defaults(tag)


class StaticStyleSource(StyleSource):
    """
    Approximates computed styles for parsed HTML without a rendering engine.

    computed = user agent defaults, with inheritable properties taken from the
    parent where the user agent sheet does not set them for this tag, then the
    inline declarations (margin/padding shorthands expanded).
    """

    def __init__(self, base_url: str = ""):
        self.base_url = base_url
        self._cache: Dict[int, Dict[str, str]] = {}

    def computed_style(self, element: Tag) -> Dict[str, str]:
        key = id(element)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        tag = tag_name(element)
        styles = dict(_GENERIC_DEFAULTS)

        parent = parent_element(element)
        if parent is not None:
            parent_styles = self.computed_style(parent)
            for prop in INHERITABLE_PROPS:
                if prop in parent_styles:
                    styles[prop] = parent_styles[prop]

        styles.update(_tag_overrides(tag))

        for prop, value in parse_declarations(attr_string(element, "style")).items():
            if prop in ("margin", "padding"):
                styles.update(_expand_box_shorthand(prop, value))
            else:
                styles[prop] = value

        self._cache[key] = styles
        return styles

    def dom_property(self, element: Tag, name: str, default: Any = None) -> Any:
        if name == "value":
            if tag_name(element) == "textarea":
                return element.get_text()
            return attr_string(element, "value") if element.has_attr("value") else default
        if name == "selected":
            return element.has_attr("selected")
        if name in ("naturalWidth", "naturalHeight"):
            raw = attr_string(element, "width" if name == "naturalWidth" else "height")
            return int(raw) if raw and raw.isdigit() else default
        return default

