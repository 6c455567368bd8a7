# tests/core/test_convert_controller.py
import asyncio
import json

import pytest

from composer.controllers.convert_controller import (
    ERROR_TYPE, RESPONSE_TYPE, ConversionSession, ConvertController, parse_mappings, response_message,
)
from composer.dom.models import ComponentMapping
from composer.errors import ConversionError


@pytest.fixture
def controller(static_converter):
    return ConvertController(static_converter())


PAGE = '<div data-figma-id="1:1"><p>Card body</p></div><p>Footer</p>'


def test_convert_page_stores_result(controller, make_body):
    node = asyncio.run(controller.convert_page(make_body(PAGE)))
    assert node.type == "box"
    assert len(node.children) == 2
    assert controller.session.last_result is node


def test_missing_root_raises(controller):
    with pytest.raises(ConversionError, match="No body element found"):
        asyncio.run(controller.convert_page(None))
    assert not controller.session.has_result()


def test_unconvertible_root_raises(controller, make_body):
    with pytest.raises(ConversionError, match="Failed to convert body element"):
        asyncio.run(controller.convert_page(make_body("<br>").br))


def test_unexpected_errors_are_wrapped(controller, make_body, monkeypatch):
    async def boom(element, mappings=(), tokens=None):
        raise KeyError("broken tree")

    monkeypatch.setattr(controller.converter, "convert", boom)
    with pytest.raises(ConversionError) as info:
        asyncio.run(controller.convert_page(make_body(PAGE)))
    assert isinstance(info.value.__cause__, KeyError)


def test_mapping_dicts_are_parsed(controller, make_body):
    mappings = [{"nodeIds": [{"nodeId": "1:1"}], "codeComponentName": "Card"}]
    node = asyncio.run(controller.convert_page(make_body(PAGE), mappings))
    assert node.children[0].type == "Card"


def test_parse_mappings_passes_models_through():
    model = ComponentMapping(code_component_name="X")
    parsed = parse_mappings([model, {"codeComponentName": "Y"}])
    assert parsed[0] is model
    assert parsed[1].code_component_name == "Y"
    assert parse_mappings(None) == []


class TestDeliver:
    def test_success_delivers_one_response(self, controller, make_body):
        sent = []
        node = asyncio.run(controller.convert_and_deliver(make_body(PAGE), sent.append))
        assert len(sent) == 1
        assert sent[0]["type"] == RESPONSE_TYPE
        assert sent[0]["data"] == node.to_dict()

    def test_failure_delivers_one_error(self, controller):
        sent = []
        assert asyncio.run(controller.convert_and_deliver(None, sent.append)) is None
        assert sent == [{"type": ERROR_TYPE, "error": "No body element found"}]

    def test_async_deliver_is_awaited(self, controller, make_body):
        sent = []

        async def deliver(message):
            await asyncio.sleep(0)
            sent.append(message["type"])

        asyncio.run(controller.convert_and_deliver(make_body(PAGE), deliver))
        assert sent == [RESPONSE_TYPE]

    def test_debug_export_written(self, controller, make_body, tmp_path):
        asyncio.run(controller.convert_and_deliver(
            make_body(PAGE), lambda message: None,
            page_url="https://example.com/", debug_export_dir=tmp_path,
        ))
        files = list(tmp_path.glob("example.com_root-*-studio.json"))
        assert len(files) == 1


def test_convert_and_export(controller, make_body, tmp_path):
    path = asyncio.run(controller.convert_and_export(make_body(PAGE), "https://example.com/shop", tmp_path))
    assert path.parent == tmp_path
    assert path.name.startswith("example.com_shop-")
    with open(path, encoding="utf-8") as f:
        assert json.load(f)["type"] == "box"


def test_session_keeps_only_latest():
    session = ConversionSession()
    assert not session.has_result()
    session.store("first")
    session.store("second")
    assert session.last_result == "second"
    session.clear()
    assert session.last_result is None


def test_response_message_wraps_tree(controller, make_body):
    node = asyncio.run(controller.convert_page(make_body("<p>x</p>")))
    assert response_message(node) == {"type": RESPONSE_TYPE, "data": node.to_dict()}
