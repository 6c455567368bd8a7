# src/composer/controllers/convert_controller.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Union

from bs4 import Tag

from composer.dom.converter import TreeConverter
from composer.dom.models import ComponentMapping, Node
from composer.errors import ConversionError
from composer.model import ConverterSettings
from composer.services.export_service import export_filename, write_json
from composer.style.baseline import BaselineCache
from composer.style.deriver import StyleDeriver
from composer.style.engine import StyleResolutionEngine
from composer.style.sources import BaselineProvider, StyleSource
from composer.style.trace import StyleTrace
from composer.utils.run_timers import RunTimers

logger = logging.getLogger(__name__)

RESPONSE_TYPE = "html-to-json-response"
ERROR_TYPE = "html-to-json-error"

Deliver = Callable[[Dict[str, Any]], Union[None, Awaitable[None]]]
MappingInput = Union[ComponentMapping, Dict[str, Any]]


class ConversionSession:
    """Holds the most recent successful conversion; overwritten on every run."""

    def __init__(self):
        self._last_result: Optional[Node] = None

    def has_result(self) -> bool:
        return self._last_result is not None

    @property
    def last_result(self) -> Optional[Node]:
        return self._last_result

    def store(self, node: Node) -> None:
        self._last_result = node

    def clear(self) -> None:
        self._last_result = None


def build_converter(
        source: StyleSource,
        baseline_provider: BaselineProvider,
        settings: Optional[ConverterSettings] = None,
) -> TreeConverter:
    """Wires the style engine, baseline cache, deriver and trace into a TreeConverter."""
    settings = settings or ConverterSettings()
    baselines = BaselineCache(baseline_provider)
    engine = StyleResolutionEngine(source, baselines, mode=settings.style_mode)
    trace = StyleTrace(enabled=settings.trace, trace_classes=settings.trace_classes)
    deriver = StyleDeriver(engine, source, trace)
    return TreeConverter(source, deriver, settings)


def parse_mappings(mappings: Optional[Iterable[MappingInput]]) -> List[ComponentMapping]:
    return [
        m if isinstance(m, ComponentMapping) else ComponentMapping.model_validate(m)
        for m in (mappings or [])
    ]


class ConvertController:
    """
    Drives one full-page conversion: runs the converter over the root element,
    times it, stores the result in the session and hands it to an exporter or
    a delivery callback. Top-level failures surface as a single ConversionError.
    """

    def __init__(self, converter: TreeConverter, session: Optional[ConversionSession] = None):
        self.converter = converter
        self.session = session or ConversionSession()

    async def convert_page(
            self,
            root: Optional[Tag],
            mappings: Optional[Iterable[MappingInput]] = None,
            tokens: Optional[Dict[str, Any]] = None,
    ) -> Node:
        logger.info("Starting HTML to JSON conversion...")
        timer = RunTimers()
        timer.start()

        if root is None:
            raise ConversionError("No body element found")

        try:
            result = await self.converter.convert(root, parse_mappings(mappings), tokens or {})
        except ConversionError:
            raise
        except Exception as e:
            logger.error("Conversion failed: %s", e, exc_info=True)
            raise ConversionError(str(e)) from e

        if result is None:
            raise ConversionError("Failed to convert body element")

        timer.stop()
        logger.info("Conversion completed in %dms", timer.elapsed_ms)
        self.session.store(result)
        return result

    async def convert_and_export(
            self,
            root: Optional[Tag],
            page_url: str,
            output_dir: Path,
            mappings: Optional[Iterable[MappingInput]] = None,
            tokens: Optional[Dict[str, Any]] = None,
    ) -> Path:
        result = await self.convert_page(root, mappings, tokens)
        return write_json(result, Path(output_dir) / export_filename(page_url))

    async def convert_and_deliver(
            self,
            root: Optional[Tag],
            deliver: Deliver,
            mappings: Optional[Iterable[MappingInput]] = None,
            tokens: Optional[Dict[str, Any]] = None,
            page_url: Optional[str] = None,
            debug_export_dir: Optional[Path] = None,
    ) -> Optional[Node]:
        """
        Builds the whole tree, then delivers exactly one message: the response
        with the tree, or an error message. Returns the tree or None.
        """
        try:
            result = await self.convert_page(root, mappings, tokens)
        except ConversionError as e:
            logger.error("Convert and send failed: %s", e)
            await _call(deliver, {"type": ERROR_TYPE, "error": str(e)})
            return None

        if debug_export_dir is not None and page_url:
            try:
                write_json(result, Path(debug_export_dir) / export_filename(page_url, suffix="-studio"))
            except OSError as e:
                logger.warning("JSON debug export failed: %s", e)

        await _call(deliver, response_message(result))
        return result


def response_message(node: Node) -> Dict[str, Any]:
    return {"type": RESPONSE_TYPE, "data": node.to_dict()}


async def _call(deliver: Deliver, message: Dict[str, Any]) -> None:
    outcome = deliver(message)
    if outcome is not None and hasattr(outcome, "__await__"):
        await outcome
