# tests/core/test_style_deriver.py
import asyncio
import json
import logging

import pytest

from composer.style.baseline import BaselineCache
from composer.style.deriver import StyleDeriver, inline_styles
from composer.style.engine import StyleMode, StyleResolutionEngine
from composer.style.trace import StyleTrace


@pytest.fixture
def deriver_for(fake_source_cls, fake_provider_cls):
    def _build(styles=None, snapshots=None, mode=StyleMode.ALL, trace=None):
        source = fake_source_cls(styles)
        engine = StyleResolutionEngine(source, BaselineCache(fake_provider_cls(snapshots)), mode=mode)
        return StyleDeriver(engine, source, trace)
    return _build


def derive(deriver, element):
    return asyncio.run(deriver.derive(element))


def test_only_default_breakpoint_is_filled(deriver_for, make_body):
    body = make_body('<span id="s">x</span>')
    styles = derive(deriver_for({"s": {"color": "red"}}), body.span)
    assert styles.default == {"color": "red"}
    assert styles.tablet == {}
    assert styles.mobile == {}


class TestLayering:
    def test_image_exception_beats_computed(self, deriver_for, make_body):
        body = make_body('<img id="i" src="a.png">')
        styles = derive(deriver_for({"i": {"max-width": "none"}}), body.img)
        assert styles.default["maxWidth"] == "100%"

    def test_inline_beats_exception(self, deriver_for, make_body):
        body = make_body('<img id="i" src="a.png" style="max-width: 50%">')
        styles = derive(deriver_for({"i": {"max-width": "none"}}), body.img)
        assert styles.default["maxWidth"] == "50%"

    def test_paragraph_forced_inline_block(self, deriver_for, make_body):
        body = make_body('<p id="p">x</p>')
        styles = derive(deriver_for({"p": {"display": "block"}}), body.p)
        assert styles.default["display"] == "inline-block"

    def test_heading_forced_block(self, deriver_for, make_body):
        body = make_body('<h2 id="h">x</h2>')
        styles = derive(deriver_for({"h": {"display": "inline"}}), body.h2)
        assert styles.default["display"] == "block"


class TestButtons:
    def test_reset_without_border_class(self, deriver_for, make_body):
        body = make_body('<button id="b">Go</button>')
        styles = derive(deriver_for(), body.button).default
        assert styles["backgroundColor"] == "transparent"
        assert styles["backgroundImage"] == "none"
        assert styles["border"] == "unset"

    def test_border_class_keeps_border(self, deriver_for, make_body):
        body = make_body('<button id="b" class="border rounded">Go</button>')
        styles = derive(deriver_for(), body.button).default
        assert "border" not in styles
        assert styles["borderStyle"] == "solid"


class TestContainers:
    @pytest.mark.parametrize("cls, opacity", [("bg-opacity-50", "0.5"), ("bg-opacity-100", "1"),
                                              ("bg-opacity-5", "0.05")])
    def test_bg_opacity(self, deriver_for, make_body, cls, opacity):
        body = make_body(f'<div class="{cls}"><span>x</span></div>')
        assert derive(deriver_for(), body.div).default["opacity"] == opacity

    def test_border_prefixed_class_resets_border(self, deriver_for, make_body):
        body = make_body('<div class="border-2 border-gray-200"><span>x</span></div>')
        assert derive(deriver_for(), body.div).default["border"] == "0 solid"


class TestGradients:
    def test_background_gradient(self, deriver_for, make_body):
        body = make_body('<div class="bg-gradient-to-r from-blue to-[#C3DFED]"><span>x</span></div>')
        styles = derive(deriver_for(), body.div).default
        assert styles["background"] == "linear-gradient(to right, #3b82f6, #C3DFED)"

    def test_border_gradient(self, deriver_for, make_body):
        body = make_body('<span class="border-gradient-to-b from-red to-green">x</span>')
        styles = derive(deriver_for(), body.span).default
        assert styles["borderImage"] == "linear-gradient(to bottom, #ef4444, #22c55e)"


class TestLists:
    UL_COMPUTED = {
        "display": "flex", "flex-direction": "column", "justify-content": "normal",
        "align-items": "center", "gap": "8px", "list-style-type": "none",
        "margin-top": "0px", "margin-bottom": "0px", "padding-left": "0px", "padding-right": "0px",
    }

    def test_list_styles_copied_even_when_default(self, deriver_for, make_body):
        """Ook waarden gelijk aan de baseline worden voor lijsten overgenomen."""
        body = make_body('<ul id="u"><li>a</li></ul>')
        deriver = deriver_for({"u": self.UL_COMPUTED}, {"ul": self.UL_COMPUTED}, StyleMode.UA_DIFF)
        styles = derive(deriver, body.ul).default
        assert styles["display"] == "flex"
        assert styles["flexDirection"] == "column"
        assert styles["alignItems"] == "center"
        assert styles["gap"] == "8px"
        assert styles["listStyleType"] == "none"
        assert styles["paddingLeft"] == "0px"

    def test_grid_list_copies_template(self, deriver_for, make_body):
        body = make_body('<nav id="n"><a href="/">a</a></nav>')
        computed = {"display": "grid", "grid-template-columns": "1fr 1fr", "flex-direction": "row"}
        styles = derive(deriver_for({"n": computed}), body.nav).default
        assert styles["gridTemplateColumns"] == "1fr 1fr"
        assert "flexDirection" in styles  # from the ALL-mode engine layer, not the list rule

    def test_list_item_copies_text_props(self, deriver_for, make_body):
        body = make_body('<ul><li id="l">a</li></ul>')
        computed = {"display": "list-item", "letter-spacing": "1px", "text-transform": "uppercase"}
        deriver = deriver_for({"l": computed}, {"li": computed}, StyleMode.UA_DIFF)
        styles = derive(deriver, body.li).default
        assert styles == {"display": "list-item", "letterSpacing": "1px", "textTransform": "uppercase"}


def test_failure_yields_empty_styles(deriver_for, make_body, monkeypatch, caplog):
    deriver = deriver_for()

    async def boom(element, mode=None, whitelist=None):
        raise RuntimeError("style lookup failed")

    monkeypatch.setattr(deriver.engine, "resolve", boom)
    body = make_body("<p>x</p>")
    with caplog.at_level(logging.ERROR):
        styles = derive(deriver, body.p)
    assert styles.default == {} and styles.tablet == {} and styles.mobile == {}
    assert "Error deriving styles" in caplog.text


def test_inline_styles_are_camel_cased(make_body):
    body = make_body('<div style="background-color: red; --brand: #fff; margin-top:4px">x</div>')
    assert inline_styles(body.div) == {"backgroundColor": "red", "--brand": "#fff", "marginTop": "4px"}


class TestTrace:
    def test_emits_json_record_for_traced_class(self, deriver_for, make_body, caplog):
        trace = StyleTrace(enabled=True, trace_classes=["nav-ul"])
        body = make_body('<ul id="u" class="nav-ul"><li>a</li></ul>')
        with caplog.at_level(logging.INFO, logger="composer.trace"):
            derive(deriver_for({"u": {"display": "flex", "gap": "4px"}}, trace=trace), body.ul)
        records = [r for r in caplog.records if r.name == "composer.trace"]
        assert len(records) == 1
        payload = json.loads(records[0].getMessage())
        assert payload["event"] == "list-style-exception"
        assert payload["tag"] == "ul"
        assert payload["computed"] == {"display": "flex", "gap": "4px"}

    def test_silent_when_disabled_or_filtered(self, deriver_for, make_body, caplog):
        body = make_body('<ul id="u" class="footer-ul"><li class="nav-li">a</li></ul>')
        with caplog.at_level(logging.INFO, logger="composer.trace"):
            derive(deriver_for(trace=StyleTrace(enabled=False)), body.ul)
            derive(deriver_for(trace=StyleTrace(enabled=True, trace_classes=["nav-ul"])), body.ul)
        assert not [r for r in caplog.records if r.name == "composer.trace"]

    def test_empty_filter_traces_every_list_element(self):
        trace = StyleTrace(enabled=True)
        assert trace.wants([])
        assert trace.wants(["anything"])
