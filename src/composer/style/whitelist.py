# src/composer/style/whitelist.py
"""
Property tables used by the style resolution engine.

Names are kebab-case, exactly as a computed style declaration lists them.
"""
import re
from typing import FrozenSet, Tuple

SUPPORTED_PROPS: Tuple[str, ...] = (
    # layout
    "display", "position", "top", "right", "bottom", "left", "z-index",
    "width", "height", "min-width", "min-height", "max-width", "max-height", "aspect-ratio",
    "overflow", "overflow-x", "overflow-y",
    # spacing
    "margin-top", "margin-right", "margin-bottom", "margin-left",
    "padding-top", "padding-right", "padding-bottom", "padding-left",
    # background
    "background-color", "background-image", "background-repeat",
    "background-size", "background-position", "background-clip", "background-origin",
    "background-attachment", "background-blend-mode",
    # border
    "border-top-width", "border-right-width", "border-bottom-width", "border-left-width",
    "border-top-style", "border-right-style", "border-bottom-style", "border-left-style",
    "border-top-color", "border-right-color", "border-bottom-color", "border-left-color",
    "border-top-left-radius", "border-top-right-radius",
    "border-bottom-right-radius", "border-bottom-left-radius",
    "border-image",
    # effects
    "box-shadow", "opacity", "transform", "filter", "backdrop-filter", "mix-blend-mode",
    "clip-path", "mask",
    # text
    "color", "font-family", "font-size", "font-weight", "font-style", "line-height",
    "letter-spacing", "text-transform", "text-decoration-line", "text-decoration-color",
    "text-decoration-thickness", "text-underline-offset",
    "text-align", "white-space", "text-overflow", "overflow-wrap", "word-break",
    # flex
    "flex", "flex-grow", "flex-shrink", "flex-basis", "flex-direction", "flex-wrap",
    "align-items", "justify-content", "align-content", "align-self", "gap",
    # grid
    "grid-template-columns", "grid-template-rows", "grid-auto-flow", "grid-auto-rows",
    "grid-auto-columns", "grid-column", "grid-row", "row-gap", "column-gap",
    "place-items", "place-content", "justify-items", "justify-self",
    # lists / tables
    "list-style", "list-style-type", "list-style-position", "list-style-image",
    "table-layout", "border-collapse", "border-spacing",
    # visibility & interaction
    "visibility", "pointer-events", "user-select", "cursor",
    # media
    "object-fit", "object-position",
)

INHERITABLE_PROPS: FrozenSet[str] = frozenset({
    "color", "font", "font-family", "font-feature-settings", "font-kerning", "font-language-override",
    "font-size", "font-size-adjust", "font-stretch", "font-style", "font-synthesis", "font-variant",
    "font-variant-caps", "font-variant-ligatures", "font-variant-numeric", "font-variant-position",
    "font-weight", "letter-spacing", "line-height", "text-align", "text-align-last", "text-indent",
    "text-justify", "text-shadow", "text-transform", "white-space", "word-break", "word-spacing",
    "word-wrap", "direction", "unicode-bidi", "writing-mode",
    "list-style", "list-style-image", "list-style-position", "list-style-type",
    "cursor", "quotes", "tab-size", "visibility", "pointer-events",
})

# Values that never carry author intent.
EXCLUDED_VALUES: FrozenSet[str] = frozenset({"", "initial", "unset"})

_KEBAB_PART = re.compile(r"-([a-z])")
_CAMEL_PART = re.compile(r"[A-Z]")


def to_camel(prop: str) -> str:
    """'background-color' -> 'backgroundColor'. Custom properties are left alone."""
    if prop.startswith("--"):
        return prop
    return _KEBAB_PART.sub(lambda m: m.group(1).upper(), prop)


def to_kebab(prop: str) -> str:
    """'backgroundColor' -> 'background-color'."""
    if prop.startswith("--"):
        return prop
    return _CAMEL_PART.sub(lambda m: "-" + m.group(0).lower(), prop)
