# src/composer/dom/elements/video.py
import logging
from typing import Dict, List, Optional

from bs4 import Tag

from ..core import NodeDraft, TagDefinition, attr_string

logger = logging.getLogger(__name__)

PLAYBACK_FLAGS = ("controls", "autoplay", "muted", "loop")


def video_sources(element: Tag) -> List[Dict[str, Optional[str]]]:
    return [
        {
            "src": attr_string(source, "src"),
            "type": attr_string(source, "type"),
            "media": attr_string(source, "media"),
        }
        for source in element.find_all("source")
    ]


async def handle_video(element: Tag, draft: NodeDraft, source) -> None:
    """
    Reads the first <source> into attrs and describes every source and the
    playback flags. A video with no <source> falls back to its own src
    attribute and is otherwise emitted with empty media attributes.
    """
    sources = video_sources(element)
    if sources:
        first = sources[0]
        draft.attrs["src"] = first["src"] or ""
        draft.attrs["type"] = first["type"] or ""
    else:
        own_src = attr_string(element, "src")
        if own_src:
            sources = [{"src": own_src, "type": attr_string(element, "type"), "media": None}]
        else:
            logger.warning("Video element without any source: %s", draft.metadata.element_path)
        draft.attrs["src"] = own_src or ""
        draft.attrs["type"] = attr_string(element, "type") or ""

    draft.metadata_extras["media_info"] = {
        "type": "video",
        "sources": sources,
        **{flag: element.has_attr(flag) for flag in PLAYBACK_FLAGS},
        "poster": attr_string(element, "poster"),
    }


# --- DEFINITION ---
DEFINITION = TagDefinition(
    tag_names=["video"],
    node_handler=handle_video,
    terminal=True,
)
