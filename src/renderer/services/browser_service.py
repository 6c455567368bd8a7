# src/renderer/services/browser_service.py
import logging
from typing import Dict, Optional

from playwright.async_api import Browser, BrowserContext, Page, async_playwright

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT = {"width": 1440, "height": 900}
LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


class BrowserSession:
    """
    Lazily started Chromium instance with one browser context.

    Usable as an async context manager; pages opened through it share the
    context (and therefore cookies and cache) until close().
    """

    def __init__(self, headless: bool = True, viewport: Optional[Dict[str, int]] = None,
                 wait_until: str = "networkidle", timeout_ms: int = 30000):
        self.headless = headless
        self.viewport = viewport or dict(DEFAULT_VIEWPORT)
        self.wait_until = wait_until
        self.timeout_ms = timeout_ms
        self._playwright = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    async def __aenter__(self) -> "BrowserSession":
        await self.start()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def start(self) -> None:
        if self._browser is not None:
            return
        logger.info("Starting Playwright Chromium (headless=%s)...", self.headless)
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self.headless, args=LAUNCH_ARGS)
        self._context = await self._browser.new_context(viewport=self.viewport)

    async def new_page(self) -> Page:
        await self.start()
        page = await self._context.new_page()
        page.set_default_timeout(self.timeout_ms)
        return page

    async def open(self, url: str) -> Page:
        """Opens a page and waits for it to settle."""
        page = await self.new_page()
        logger.info("Loading %s (wait_until=%s)", url, self.wait_until)
        await page.goto(url, wait_until=self.wait_until, timeout=self.timeout_ms)
        return page

    async def close(self) -> None:
        if self._context is not None:
            await self._context.close()
            self._context = None
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        logger.info("Browser session closed.")
