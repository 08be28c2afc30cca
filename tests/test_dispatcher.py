from __future__ import annotations

import asyncio
import json
import logging

import httpx

from baklib_mcp.server.app_factory import build_dispatcher
from baklib_mcp.server.dispatcher import ToolDispatcher


def _payload(result: dict) -> dict:
    assert len(result["content"]) == 1
    assert result["content"][0]["type"] == "text"
    return json.loads(result["content"][0]["text"])


def test_unknown_tool_returns_error_without_io(registry, fake_client) -> None:
    dispatcher = ToolDispatcher(registry)

    result = asyncio.run(dispatcher.dispatch("nope", {}))

    assert result["isError"] is True
    assert _payload(result) == {"error": "Unknown tool: nope"}
    assert fake_client.calls == []


def test_success_is_pretty_printed_json(registry, fake_client) -> None:
    fake_client.response = {"data": {"id": "u1", "attributes": {"name": "张三"}}}
    dispatcher = ToolDispatcher(registry)

    result = asyncio.run(dispatcher.dispatch("user_get_current", None))

    assert "isError" not in result
    expected = {"success": True, "data": fake_client.response["data"], "full_response": fake_client.response}
    assert result["content"][0]["text"] == json.dumps(expected, indent=2, ensure_ascii=False)


def test_validation_failure_becomes_error_result(registry, fake_client) -> None:
    dispatcher = ToolDispatcher(registry, include_stack=False)

    result = asyncio.run(dispatcher.dispatch("kb_get_article", {"space_id": "s1"}))

    assert result["isError"] is True
    assert _payload(result) == {"error": "article_id is required"}
    assert fake_client.calls == []


def test_remote_error_includes_status_body_and_stack(settings) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(422, text="bad"))
    dispatcher = build_dispatcher(settings, transport=transport)

    result = asyncio.run(dispatcher.dispatch("kb_list_knowledge_bases", {"page": 1}))

    assert result["isError"] is True
    payload = _payload(result)
    assert "422" in payload["error"]
    assert "bad" in payload["error"]
    assert "BaklibAPIError" in payload["stack"]


def test_stack_can_be_omitted(settings) -> None:
    settings = settings.model_copy(
        update={"server": settings.server.model_copy(update={"include_stack": False})}
    )
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
    dispatcher = build_dispatcher(settings, transport=transport)

    result = asyncio.run(dispatcher.dispatch("user_get_current", {}))

    assert _payload(result) == {"error": "Baklib API error (500): boom"}


def test_upload_end_to_end(settings, tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "notes.md").write_text("# hi", encoding="utf-8")
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json={"data": {"id": "f1", "attributes": {"url": "https://cdn.baklib.test/notes.md"}}},
        )

    dispatcher = build_dispatcher(settings, transport=httpx.MockTransport(handler))

    result = asyncio.run(dispatcher.dispatch("dam_upload_entity", {"file_path": "notes.md"}))

    assert "isError" not in result
    payload = _payload(result)
    assert payload["success"] is True
    assert payload["id"] == "f1"
    assert payload["name"] == "notes.md"
    assert payload["type"] == "file"
    assert payload["size"] == 4
    assert payload["mime_type"] == "text/markdown"
    assert payload["url"] == "https://cdn.baklib.test/notes.md"
    assert payload["full_response"]["data"]["id"] == "f1"

    request = requests[0]
    assert request.method == "POST"
    assert request.url.path == "/api/v1/dam/files"
    assert request.headers["Authorization"] == "test-token"
    assert b'name="data[attributes][file]"; filename="notes.md"' in request.content


def test_upload_missing_file_is_reported(settings, tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={})

    dispatcher = build_dispatcher(settings, transport=httpx.MockTransport(handler))

    result = asyncio.run(dispatcher.dispatch("dam_upload_entity", {"file_path": "ghost.md"}))

    assert result["isError"] is True
    assert _payload(result)["error"].startswith("File not found: ")
    assert requests == []


def test_non_object_json_body_decodes_to_empty_list(settings) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
    dispatcher = build_dispatcher(settings, transport=transport)

    result = asyncio.run(dispatcher.dispatch("site_list_tags", {"site_id": "1"}))

    assert "isError" not in result
    assert _payload(result) == {"success": True, "data": [], "full_response": []}


def test_gateway_failure_is_logged_with_error_detail(settings, caplog) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
    dispatcher = build_dispatcher(settings, transport=transport)

    with caplog.at_level(logging.ERROR, logger="baklib_mcp.server.dispatcher"):
        result = asyncio.run(dispatcher.dispatch("user_get_current", {}))

    assert result["isError"] is True
    records = [record for record in caplog.records if record.name == "baklib_mcp.server.dispatcher"]
    assert records[-1].error_detail["error"] == "TRANSPORT_ERROR"
    assert "maintenance" in records[-1].error_detail["message"]
