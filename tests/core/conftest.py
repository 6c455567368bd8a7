# tests/core/conftest.py
import pytest
from bs4 import BeautifulSoup

from composer.controllers.convert_controller import build_converter
from composer.model import ConverterSettings
from composer.style.engine import StyleMode
from composer.style.sources import BaselineProvider, StaticBaselineProvider, StaticStyleSource, StyleSource


class FakeStyleSource(StyleSource):
    """Computed styles and live texts keyed by the element's id attribute."""

    def __init__(self, styles=None, texts=None, base_url="https://example.com/blog/"):
        self.styles = styles or {}
        self.texts = texts or {}
        self.base_url = base_url
        self.untruncated_calls = []

    def computed_style(self, element):
        return self.styles.get(element.get("id"), {})

    async def untruncated_text(self, element):
        self.untruncated_calls.append(element.get("id"))
        return self.texts.get(element.get("id"), self.text_content(element))


class FakeBaselineProvider(BaselineProvider):
    def __init__(self, snapshots=None, fail_open=False, fail_probe=()):
        self.snapshots = snapshots or {}
        self.fail_open = fail_open
        self.fail_probe = set(fail_probe)
        self.open_calls = 0
        self.probe_calls = []
        self.close_calls = 0

    async def open(self):
        self.open_calls += 1
        if self.fail_open:
            raise RuntimeError("no offscreen document")

    async def probe(self, tag):
        self.probe_calls.append(tag)
        if tag in self.fail_probe:
            raise RuntimeError(f"probe failed for {tag}")
        return dict(self.snapshots.get(tag, {}))

    async def close(self):
        self.close_calls += 1


@pytest.fixture
def make_body():
    """Parses an HTML fragment and returns the <body> element wrapping it."""
    def _make(fragment: str):
        soup = BeautifulSoup(f"<html><body>{fragment}</body></html>", "html.parser")
        return soup.body
    return _make


@pytest.fixture
def fake_source_cls():
    return FakeStyleSource


@pytest.fixture
def fake_provider_cls():
    return FakeBaselineProvider


@pytest.fixture
def static_converter():
    """TreeConverter over the static host, as the CLI builds it for local files."""
    def _build(mode=StyleMode.UA_DIFF_PLUS_INHERITED, base_url="https://example.com/blog/", **settings):
        source = StaticStyleSource(base_url=base_url)
        return build_converter(source, StaticBaselineProvider(), ConverterSettings(style_mode=mode, **settings))
    return _build
