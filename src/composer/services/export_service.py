# src/composer/services/export_service.py
import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlsplit

from composer.dom.models import Node

logger = logging.getLogger(__name__)

FALLBACK_ROUTE = "page-conversion"
EMPTY_PATH_ROUTE = "root"

_SEPARATORS = re.compile(r"[/\s]+")
_DISALLOWED = re.compile(r"[^A-Za-z0-9_-]")


def derive_route(url: str) -> str:
    """
    Filename prefix for a page URL: host (and port) plus the cleaned path.

    https://example.com:8080/blog/post-1/  ->  example.com_8080_blog_post-1
    https://example.com/                    ->  example.com_root
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname
        if not host:
            raise ValueError(f"URL has no host: {url!r}")
        if parts.port:
            host = f"{host}_{parts.port}"

        path = parts.path.strip("/")
        path = _SEPARATORS.sub("_", path)
        path = _DISALLOWED.sub("", path)

        route = f"{host}_{path or EMPTY_PATH_ROUTE}"
        if route[0].isdigit():
            route = f"page_{route}"
        return route
    except Exception as e:
        logger.warning("Could not derive a route from %r: %s", url, e)
        return FALLBACK_ROUTE


def export_timestamp(when: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, made filename safe."""
    when = (when or datetime.now(timezone.utc)).astimezone(timezone.utc)
    iso = when.strftime("%Y-%m-%dT%H:%M:%S.") + f"{when.microsecond // 1000:03d}Z"
    return iso.replace(":", "-").replace(".", "-")


def export_filename(url: str, when: Optional[datetime] = None, suffix: str = "") -> str:
    return f"{derive_route(url)}-{export_timestamp(when)}{suffix}.json"


def write_json(node: Union[Node, dict], path: Path) -> Path:
    """Writes the tree as indented UTF-8 JSON, creating parent directories."""
    data = node.to_dict() if isinstance(node, Node) else node
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    logger.info("Exported conversion to %s", path)
    return path
