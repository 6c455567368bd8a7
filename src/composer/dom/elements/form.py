# src/composer/dom/elements/form.py
from typing import Any, Dict, List

from bs4 import Tag

from ..core import NodeDraft, TagDefinition, attr_string, tag_name


def select_options(element: Tag, source) -> List[Dict[str, Any]]:
    options = []
    for option in element.find_all("option"):
        text = option.get_text().strip()
        value = attr_string(option, "value")
        options.append({
            "value": value if value is not None else text,
            "text": text,
            "selected": bool(source.dom_property(option, "selected", False)),
        })
    return options


def form_info(element: Tag, source) -> Dict[str, Any]:
    tag = tag_name(element)
    return {
        "elementType": tag,
        "inputType": attr_string(element, "type") or "text",
        "name": attr_string(element, "name") or "",
        "placeholder": attr_string(element, "placeholder") or "",
        "required": element.has_attr("required"),
        "value": source.dom_property(element, "value") or "",
        "options": select_options(element, source) if tag == "select" else [],
    }


async def handle_form_control(element: Tag, draft: NodeDraft, source) -> None:
    draft.metadata_extras["form_info"] = form_info(element, source)


# --- DEFINITION ---
DEFINITION = TagDefinition(
    tag_names=["input", "textarea", "select", "form"],
    node_handler=handle_form_control,
)
