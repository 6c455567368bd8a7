# tests/core/test_text_truncation.py
import asyncio

import pytest

from composer.dom.text import clean_text, direct_text_runs, full_text, has_truncation

FULL = "Lorem ipsum dolor sit amet, consectetur adipiscing elit"


@pytest.mark.parametrize("raw, expected", [
    ("  Hello.....  ", "Hello"),
    ("Read more...", "Read more"),
    ("Wait..", "Wait.."),
    ("Plain", "Plain"),
    ("   ", ""),
])
def test_clean_text(raw, expected):
    assert clean_text(raw) == expected


def test_clamped_text_is_read_untruncated(make_body, fake_source_cls):
    body = make_body('<p id="t" class="line-clamp-2">Lorem ipsum dolor sit amet...</p>')
    source = fake_source_cls(texts={"t": FULL})
    assert asyncio.run(full_text(body.p, source)) == FULL
    assert source.untruncated_calls == ["t"]


def test_untruncated_read_is_still_cleaned(make_body, fake_source_cls):
    body = make_body('<p id="t" class="truncate">Lorem...</p>')
    source = fake_source_cls(texts={"t": FULL + "..."})
    assert asyncio.run(full_text(body.p, source)) == FULL


def test_unclamped_text_uses_text_content(make_body, fake_source_cls):
    body = make_body('<p id="t">  Plain text...  </p>')
    source = fake_source_cls(texts={"t": FULL})
    assert asyncio.run(full_text(body.p, source)) == "Plain text"
    assert source.untruncated_calls == []


@pytest.mark.parametrize("fragment, computed, expected", [
    ('<p class="line-clamp-3">x</p>', {}, True),
    ('<p class="text-ellipsis">x</p>', {}, True),
    ('<p class="line-clamp">x</p>', {}, False),
    ('<p style="overflow: hidden">x</p>', {}, True),
    ('<p style="overflow-x: hidden">x</p>', {}, False),
    ('<p style="text-overflow:ellipsis">x</p>', {}, True),
    ("<p>x</p>", {"text-overflow": "ellipsis"}, True),
    ("<p>x</p>", {"-webkit-line-clamp": "3"}, True),
    ("<p>x</p>", {"-webkit-line-clamp": "none"}, False),
    ("<p>x</p>", {}, False),
])
def test_truncation_detection(make_body, fragment, computed, expected):
    assert has_truncation(make_body(fragment).p, computed) is expected


def test_direct_text_runs_skip_children_and_comments(make_body):
    body = make_body("<div>One<br>Two <b>bold</b> Three...<!-- note --></div>")
    assert direct_text_runs(body.div) == ["One", "Two", "Three"]
