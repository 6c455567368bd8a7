# src/composer/style/utilities.py
"""Class-conditioned style exceptions that apply regardless of tag."""
import re
from typing import Dict, List, Optional

DIRECTIONS = {
    "to-t": "to top",
    "to-r": "to right",
    "to-b": "to bottom",
    "to-l": "to left",
    "to-tr": "to top right",
    "to-tl": "to top left",
    "to-br": "to bottom right",
    "to-bl": "to bottom left",
}

NAMED_COLORS = {
    "red": "#ef4444",
    "blue": "#3b82f6",
    "green": "#22c55e",
    "gray": "#6b7280",
    "white": "#ffffff",
    "black": "#000000",
}

GRADIENT_CLASS = re.compile(r"^(bg|border)-gradient-(to-(?:tr|tl|br|bl|t|r|b|l))$")
_STOP = r"(\[[^\]]+\]|[a-zA-Z0-9-]+)"
_FROM = re.compile(r"(?:^|\s)from-" + _STOP)
_VIA = re.compile(r"(?:^|\s)via-" + _STOP)
_TO = re.compile(r"(?:^|\s)to-(?!(?:tr|tl|br|bl|t|r|b|l)(?:\s|$))" + _STOP)


def process_color(color: str) -> str:
    """'[#C3DFED]' -> '#C3DFED'; known names map to hex; anything else passes through."""
    if color.startswith("[") and color.endswith("]"):
        return color[1:-1]
    return NAMED_COLORS.get(color, color)


def gradient_styles(classes: List[str], gradient_class: str) -> Dict[str, str]:
    """
    Builds a linear-gradient from a gradient class and the two classes after it,
    e.g. 'bg-gradient-to-r from-blue to-[#C3DFED]'.
    """
    position = classes.index(gradient_class)
    stops = " ".join(classes[position + 1:position + 3])

    match = GRADIENT_CLASS.match(gradient_class)
    kind = match.group(1) if match else "bg"
    direction = DIRECTIONS.get(match.group(2), "to right") if match else "to right"

    gradient = f"linear-gradient({direction}"
    for pattern in (_FROM, _VIA, _TO):
        found = pattern.search(stops)
        if found:
            gradient += f", {process_color(found.group(1))}"
    gradient += ")"

    return {"background": gradient} if kind == "bg" else {"borderImage": gradient}


def _first_gradient_class(classes: List[str]) -> Optional[str]:
    for cls in classes:
        if GRADIENT_CLASS.match(cls):
            return cls
    return None


def utility_class_styles(classes: List[str]) -> Dict[str, str]:
    styles: Dict[str, str] = {}
    if "border" in classes:
        styles["borderStyle"] = "solid"

    gradient_class = _first_gradient_class(classes)
    if gradient_class:
        styles.update(gradient_styles(classes, gradient_class))
    return styles
