# src/composer_shell/core/services/conversion_service.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from composer.controllers.convert_controller import ConversionSession, ConvertController, build_converter
from composer.dom.models import Node
from composer.model import ConverterSettings
from composer.services.export_service import export_filename, export_timestamp
from composer.style.sources import StaticBaselineProvider, StaticStyleSource
from composer_shell.core.managers.config_manager import config_manager
from renderer.services.baseline_probe_service import PlaywrightBaselineProvider
from renderer.services.browser_service import BrowserSession
from renderer.services.page_capture_service import CapturedPage, PageCaptureService

logger = logging.getLogger(__name__)


def is_url(target: str) -> bool:
    return target.startswith(("http://", "https://"))


def load_json_file(path: Optional[str], default: Any) -> Any:
    if not path:
        return default
    with open(Path(path).expanduser(), "r", encoding="utf-8") as f:
        return json.load(f)


def parse_html(html: str) -> Optional[Tag]:
    """Body element of an HTML document, or None when there is none."""
    soup = BeautifulSoup(html, "html.parser")
    return soup.find("body")


def browser_session_from_config() -> BrowserSession:
    return BrowserSession(
        headless=bool(config_manager.get_nested("browser.headless", True)),
        viewport=config_manager.get_nested("browser.viewport"),
        wait_until=config_manager.get_nested("browser.wait_until", "networkidle"),
        timeout_ms=int(config_manager.get_nested("browser.timeout_ms", 30000)),
    )


def static_controller(base_url: str, settings: ConverterSettings,
                      session: Optional[ConversionSession] = None) -> ConvertController:
    converter = build_converter(StaticStyleSource(base_url=base_url), StaticBaselineProvider(), settings)
    return ConvertController(converter, session)


def local_export_name(path: Path) -> str:
    return f"{path.stem}-{export_timestamp()}.json"


async def convert_file(
        path: Path,
        settings: ConverterSettings,
        session: Optional[ConversionSession] = None,
        mappings: Optional[List[Dict[str, Any]]] = None,
        tokens: Optional[Dict[str, Any]] = None,
) -> Node:
    """Converts a local HTML file with the static host."""
    html = Path(path).read_text(encoding="utf-8")
    controller = static_controller(Path(path).resolve().as_uri(), settings, session)
    return await controller.convert_page(parse_html(html), mappings, tokens)


async def convert_url(
        url: str,
        settings: ConverterSettings,
        session: Optional[ConversionSession] = None,
        mappings: Optional[List[Dict[str, Any]]] = None,
        tokens: Optional[Dict[str, Any]] = None,
) -> Node:
    """Renders a page in Chromium and converts the live DOM."""
    async with browser_session_from_config() as browser:
        page = await browser.open(url)
        captured = await PageCaptureService(page).capture()
        baseline = PlaywrightBaselineProvider(browser)
        try:
            controller = ConvertController(build_converter(captured.source, baseline, settings), session)
            return await controller.convert_page(captured.body, mappings, tokens)
        finally:
            await captured.source.release()
            await baseline.close()


async def convert_target(target: str, settings: ConverterSettings, **kwargs) -> Tuple[Node, str]:
    """Converts a file path or http(s) URL; returns the tree and the default export filename."""
    if is_url(target):
        return await convert_url(target, settings, **kwargs), export_filename(target)
    path = Path(target).expanduser()
    return await convert_file(path, settings, **kwargs), local_export_name(path)


async def capture_live_page(url: str, browser: BrowserSession) -> CapturedPage:
    page = await browser.open(url)
    return await PageCaptureService(page).capture()
