# src/renderer/services/baseline_probe_service.py
import logging
from typing import Dict, Optional

from playwright.async_api import Page

from composer.style.sources import BaselineProvider
from .browser_service import BrowserSession

logger = logging.getLogger(__name__)

BLANK_DOCUMENT = "<!doctype html><html><head></head><body></body></html>"

PROBE_SCRIPT = """
(tag) => {
    const probe = document.createElement(tag);
    (document.body || document.documentElement).appendChild(probe);
    const cs = getComputedStyle(probe);
    const out = {};
    for (const prop of cs) {
        out[prop] = cs.getPropertyValue(prop);
    }
    probe.remove();
    return out;
}
"""


class PlaywrightBaselineProvider(BaselineProvider):
    """
    Pristine per-tag computed styles from an offscreen page that carries no
    author styling. The page is created on open() and reused for every probe.
    """

    def __init__(self, browser: BrowserSession):
        self.browser = browser
        self._page: Optional[Page] = None

    async def open(self) -> None:
        if self._page is not None:
            return
        self._page = await self.browser.new_page()
        await self._page.set_content(BLANK_DOCUMENT)
        logger.debug("Offscreen baseline page ready.")

    async def probe(self, tag: str) -> Dict[str, str]:
        if self._page is None:
            await self.open()
        return await self._page.evaluate(PROBE_SCRIPT, tag)

    async def close(self) -> None:
        if self._page is not None:
            await self._page.close()
            self._page = None
