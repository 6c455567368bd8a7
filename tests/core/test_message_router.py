# tests/core/test_message_router.py
import pytest

from composer.controllers.convert_controller import ConvertController
from composer.server.app import create_app
from composer.services.message_service import MessageHandler, REQUEST_TYPE, RESPONSE_TYPE

PARENT_HEADERS = {"Origin": "http://localhost:5173", "X-Composer-Source": "parent"}


@pytest.fixture
def client(static_converter, make_body):
    body = make_body("<main><h2>Docs</h2></main>")
    handler = MessageHandler(ConvertController(static_converter()), lambda: body)
    app = create_app(handler)
    app.config["TESTING"] = True
    return app.test_client()


def test_request_is_answered_with_tree(client):
    response = client.post("/api/messages", json={"type": REQUEST_TYPE}, headers=PARENT_HEADERS)
    assert response.status_code == 200
    data = response.get_json()
    assert data["type"] == RESPONSE_TYPE
    assert data["data"]["metadata"]["sourceInfo"]["tagName"] == "body"


def test_foreign_origin_gets_no_content(client):
    headers = {"Origin": "https://elsewhere.example", "X-Composer-Source": "parent"}
    response = client.post("/api/messages", json={"type": REQUEST_TYPE}, headers=headers)
    assert response.status_code == 204


def test_missing_parent_header_gets_no_content(client):
    response = client.post("/api/messages", json={"type": REQUEST_TYPE},
                           headers={"Origin": "http://localhost:5173"})
    assert response.status_code == 204


def test_non_json_body_is_ignored(client):
    response = client.post("/api/messages", data="not json", headers=PARENT_HEADERS)
    assert response.status_code == 204


def test_health_reports_cached_result(client):
    assert client.get("/api/health").get_json() == {"status": "ok", "hasResult": False}
    client.post("/api/messages", json={"type": REQUEST_TYPE}, headers=PARENT_HEADERS)
    assert client.get("/api/health").get_json() == {"status": "ok", "hasResult": True}


def test_handler_crash_returns_500(client, monkeypatch):
    handler = client.application.config["MESSAGE_HANDLER"]

    async def boom(message, origin, from_parent=True):
        raise RuntimeError("bridge down")

    monkeypatch.setattr(handler, "handle_message", boom)
    response = client.post("/api/messages", json={"type": REQUEST_TYPE}, headers=PARENT_HEADERS)
    assert response.status_code == 500
    assert response.get_json() == {"type": "html-to-json-error", "error": "bridge down"}
