# src/renderer/services/page_capture_service.py
import logging
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup, Tag
from playwright.async_api import Page

from composer.dom.core import tag_name
from composer.style.sources import StyleSource

logger = logging.getLogger(__name__)

REF_ATTR = "data-composer-ref"

CAPTURE_SCRIPT = """
([refAttr, shorthands]) => {
    const body = document.body;
    if (!body) return null;
    const elements = {};
    const svgMarkup = new Map();
    body.querySelectorAll('svg').forEach(svg => svgMarkup.set(svg, svg.outerHTML));
    const all = [body, ...body.querySelectorAll('*')];
    all.forEach((el, i) => {
        const ref = String(i);
        el.setAttribute(refAttr, ref);
        const cs = getComputedStyle(el);
        const style = {};
        for (const prop of cs) {
            style[prop] = cs.getPropertyValue(prop);
        }
        for (const prop of shorthands) {
            const value = cs.getPropertyValue(prop);
            if (value) style[prop] = value;
        }
        const props = {};
        for (const name of ['value', 'naturalWidth', 'naturalHeight', 'loading', 'decoding', 'selected']) {
            if (name in el) props[name] = el[name];
        }
        if (svgMarkup.has(el)) props.outerHTML = svgMarkup.get(el);
        elements[ref] = {style, props, text: el.textContent || ''};
    });
    return {html: body.outerHTML, url: location.href, elements};
}
"""

UNTRUNCATED_TEXT_SCRIPT = """
(selector) => {
    const el = document.querySelector(selector);
    if (!el) return null;
    const saved = {
        overflow: el.style.overflow,
        textOverflow: el.style.textOverflow,
        whiteSpace: el.style.whiteSpace,
        display: el.style.display,
    };
    el.style.overflow = 'visible';
    el.style.textOverflow = 'clip';
    el.style.whiteSpace = 'normal';
    el.style.display = 'block';
    const text = el.textContent || '';
    Object.assign(el.style, saved);
    return text;
}
"""

RELEASE_SCRIPT = """
(refAttr) => {
    document.querySelectorAll('[' + refAttr + ']').forEach(el => el.removeAttribute(refAttr));
}
"""

# Shorthands that getComputedStyle iteration does not list but the whitelist keeps
SHORTHAND_PROPS = [
    "gap", "list-style", "border-image", "flex", "grid-column", "grid-row",
    "place-items", "place-content", "mask",
]


class PlaywrightStyleSource(StyleSource):
    """
    StyleSource backed by a capture of a live page.

    Computed styles and DOM properties come from the capture; untruncated
    text is read from the live element, which is found again through its
    capture ref.
    """

    def __init__(self, page: Page, records: Dict[int, Dict[str, Any]], refs: Dict[int, str], base_url: str):
        self.page = page
        self.base_url = base_url
        self._records = records
        self._refs = refs

    def _record(self, element: Tag) -> Dict[str, Any]:
        return self._records.get(id(element), {})

    def computed_style(self, element: Tag) -> Dict[str, str]:
        return self._record(element).get("style", {})

    def text_content(self, element: Tag) -> str:
        record = self._record(element)
        if "text" in record:
            return record["text"]
        return element.get_text()

    def dom_property(self, element: Tag, name: str, default: Any = None) -> Any:
        value = self._record(element).get("props", {}).get(name)
        return default if value is None else value

    def outer_markup(self, element: Tag) -> str:
        markup = self.dom_property(element, "outerHTML")
        return markup if markup else super().outer_markup(element)

    async def untruncated_text(self, element: Tag) -> str:
        ref = self._refs.get(id(element))
        if ref is None:
            return self.text_content(element)
        try:
            text = await self.page.evaluate(UNTRUNCATED_TEXT_SCRIPT, f'[{REF_ATTR}="{ref}"]')
        except Exception as e:
            logger.error("Live text read failed for <%s>: %s", tag_name(element), e)
            text = None
        return text if text is not None else self.text_content(element)

    async def release(self) -> None:
        """Removes the capture refs from the live page."""
        try:
            await self.page.evaluate(RELEASE_SCRIPT, REF_ATTR)
        except Exception as e:
            logger.warning("Could not remove capture refs: %s", e)


class CapturedPage:
    """Parsed body of a captured page plus the StyleSource that describes it."""

    def __init__(self, body: Optional[Tag], source: PlaywrightStyleSource, url: str):
        self.body = body
        self.source = source
        self.url = url


class PageCaptureService:
    """Captures markup, computed styles and DOM properties of a live page in one evaluate call."""

    def __init__(self, page: Page):
        self.page = page

    async def capture(self) -> CapturedPage:
        snapshot = await self.page.evaluate(CAPTURE_SCRIPT, [REF_ATTR, SHORTHAND_PROPS])
        if not snapshot:
            logger.warning("Page has no body element.")
            source = PlaywrightStyleSource(self.page, {}, {}, self.page.url)
            return CapturedPage(None, source, self.page.url)

        soup = BeautifulSoup(snapshot["html"], "html.parser")
        body = soup.find("body")

        records: Dict[int, Dict[str, Any]] = {}
        refs: Dict[int, str] = {}
        if body is not None:
            for element in [body, *body.find_all(True)]:
                ref = element.attrs.pop(REF_ATTR, None)
                if ref is None:
                    continue
                refs[id(element)] = ref
                records[id(element)] = snapshot["elements"].get(ref, {})

        logger.info("Captured %d elements from %s", len(records), snapshot["url"])
        source = PlaywrightStyleSource(self.page, records, refs, snapshot["url"])
        return CapturedPage(body, source, snapshot["url"])
