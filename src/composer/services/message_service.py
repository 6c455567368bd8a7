# src/composer/services/message_service.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, Optional

from bs4 import Tag

from composer.controllers.convert_controller import (
    ConvertController, ERROR_TYPE, RESPONSE_TYPE, response_message,
)

logger = logging.getLogger(__name__)

REQUEST_TYPE = "request-html-to-json"
RESULT_TYPE = "html-to-json-result"

DEFAULT_ALLOWED_ORIGINS = ("http://localhost:5173", "http://localhost:5174")

MAX_STRING_PREVIEW = 500
MAX_VALUE_PREVIEW = 200
MAX_SAMPLE_KEYS = 10


def summarize_payload(payload: Any) -> Any:
    """Compact, log-friendly view of an arbitrary payload."""
    if payload is None:
        return None
    if isinstance(payload, str):
        return payload[:MAX_STRING_PREVIEW] + "…" if len(payload) > MAX_STRING_PREVIEW else payload
    if isinstance(payload, list):
        return {"kind": "array", "length": len(payload), "sample": payload[:3]}
    if isinstance(payload, dict):
        sample = {}
        for key in list(payload)[:MAX_SAMPLE_KEYS]:
            value = payload[key]
            if isinstance(value, str) and len(value) > MAX_VALUE_PREVIEW:
                value = value[:MAX_VALUE_PREVIEW] + "…"
            sample[key] = value
        return {"kind": "object", "keys": len(payload), "sample": sample}
    return payload


class MessageHandler:
    """
    Cross-window message contract of the converter.

    Only messages from the parent window of an allowed origin are processed;
    everything else is ignored without a reply. A conversion request is
    answered from the session cache when possible, otherwise by running a
    fresh conversion of the root returned by `root_provider`.
    """

    def __init__(
            self,
            controller: ConvertController,
            root_provider: Callable[[], Optional[Tag]],
            allowed_origins: Iterable[str] = DEFAULT_ALLOWED_ORIGINS,
            page_url: Optional[str] = None,
    ):
        self.controller = controller
        self.root_provider = root_provider
        self.allowed_origins = set(allowed_origins)
        self.page_url = page_url

    def accepts(self, origin: Optional[str], from_parent: bool) -> bool:
        return from_parent and origin in self.allowed_origins

    async def handle_message(self, message: Any, origin: Optional[str],
                             from_parent: bool = True) -> Optional[Dict[str, Any]]:
        if not self.accepts(origin, from_parent):
            logger.debug("Ignoring message from origin %r (parent=%s)", origin, from_parent)
            return None
        if not isinstance(message, dict):
            return None

        message_type = message.get("type")
        if message_type == REQUEST_TYPE:
            return await self._handle_request(message, origin)
        if message_type == RESULT_TYPE:
            logger.info("html-to-json-result received: %s", summarize_payload(message.get("payload")))
            return None

        logger.debug("Unknown message type: %s", message_type)
        return None

    async def _handle_request(self, message: Dict[str, Any], origin: str) -> Dict[str, Any]:
        logger.info("request-html-to-json received at %s from %s (url=%s)",
                    datetime.now(timezone.utc).isoformat(), origin, self.page_url)

        session = self.controller.session
        if session.has_result():
            logger.debug("Replaying cached conversion result.")
            return response_message(session.last_result)

        options = message.get("options") or {}
        replies = []
        await self.controller.convert_and_deliver(
            self.root_provider(),
            replies.append,
            mappings=options.get("componentMappings"),
            tokens=options.get("designTokens"),
        )
        if replies:
            return replies[0]
        return {"type": ERROR_TYPE, "error": "Conversion produced no reply"}


__all__ = ["MessageHandler", "summarize_payload", "REQUEST_TYPE", "RESULT_TYPE",
           "RESPONSE_TYPE", "ERROR_TYPE", "DEFAULT_ALLOWED_ORIGINS"]
