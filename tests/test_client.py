from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from baklib_mcp.baklib.client import BaklibClient
from baklib_mcp.baklib.models import FilePart, MultipartBody
from baklib_mcp.errors import BaklibAPIError, BaklibTransportError


class Recorder:
    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


def _client(settings, recorder) -> BaklibClient:
    return BaklibClient(settings, transport=httpx.MockTransport(recorder))


def test_request_sends_raw_token_and_bracket_query(settings) -> None:
    recorder = Recorder(httpx.Response(200, json={"data": []}))
    client = _client(settings, recorder)

    result = asyncio.run(
        client.request(
            "GET",
            "/kb/spaces",
            params={"page[number]": 2, "page[size]": 25, "keywords": None},
        )
    )

    assert result == {"data": []}
    request = recorder.requests[0]
    assert request.method == "GET"
    assert request.url.host == "baklib.test"
    assert request.url.path == "/api/v1/kb/spaces"
    assert request.headers["Authorization"] == "test-token"
    assert request.url.params["page[number]"] == "2"
    assert request.url.params["page[size]"] == "25"
    assert "keywords" not in request.url.params


def test_request_serializes_false_query_values(settings) -> None:
    recorder = Recorder(httpx.Response(200, json={"data": []}))
    asyncio.run(_client(settings, recorder).request("GET", "/sites/1/pages", params={"deleted": False}))
    assert recorder.requests[0].url.params["deleted"] == "false"


def test_json_body_is_sent_with_json_content_type(settings) -> None:
    recorder = Recorder(httpx.Response(201, json={"data": {"id": "a1"}}))
    body = {"data": {"attributes": {"title": "标题"}}}

    result = asyncio.run(_client(settings, recorder).request("POST", "/kb/spaces/s1/articles", json_body=body))

    request = recorder.requests[0]
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == body
    assert result == {"data": {"id": "a1"}}


def test_extra_headers_cannot_replace_authorization(settings) -> None:
    recorder = Recorder(httpx.Response(200, json={"data": []}))
    asyncio.run(
        _client(settings, recorder).request(
            "GET",
            "/integrations",
            headers={"Authorization": "other", "x-organization-id": "7"},
        )
    )
    request = recorder.requests[0]
    assert request.headers["Authorization"] == "test-token"
    assert request.headers["x-organization-id"] == "7"


def test_multipart_body_uses_generated_boundary(settings) -> None:
    recorder = Recorder(httpx.Response(200, json={"data": {"id": "f1"}}))
    body = MultipartBody(
        fields={"data[type]": "dam_files"},
        files={"data[attributes][file]": FilePart("notes.md", b"# hi", "text/markdown")},
    )

    asyncio.run(_client(settings, recorder).request("POST", "/dam/files", multipart=body))

    request = recorder.requests[0]
    assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    assert b'name="data[type]"' in request.content
    assert b"dam_files" in request.content
    assert b'name="data[attributes][file]"; filename="notes.md"' in request.content
    assert b"Content-Type: text/markdown" in request.content
    assert b"# hi" in request.content


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(204),
        httpx.Response(200, headers={"Content-Length": "0"}),
    ],
)
def test_empty_response_is_success(settings, response) -> None:
    recorder = Recorder(response)
    result = asyncio.run(_client(settings, recorder).request("DELETE", "/dam/entities/1"))
    assert result == {"success": True}


def test_error_status_carries_status_and_body(settings) -> None:
    recorder = Recorder(httpx.Response(422, text="bad"))

    with pytest.raises(BaklibAPIError) as exc_info:
        asyncio.run(_client(settings, recorder).request("GET", "/user"))

    assert exc_info.value.status_code == 422
    assert exc_info.value.body == "bad"
    assert "422" in str(exc_info.value)
    assert "bad" in str(exc_info.value)


def test_invalid_json_raises_transport_error(settings) -> None:
    recorder = Recorder(httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(BaklibTransportError):
        asyncio.run(_client(settings, recorder).request("GET", "/user"))


def test_network_failure_is_wrapped(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = BaklibClient(settings, transport=httpx.MockTransport(handler))
    with pytest.raises(BaklibTransportError) as exc_info:
        asyncio.run(client.request("GET", "/user"))
    assert "connection refused" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_invalid_arguments_fail_before_io(settings) -> None:
    recorder = Recorder(httpx.Response(200, json={}))
    client = _client(settings, recorder)

    with pytest.raises(ValueError):
        asyncio.run(client.request("PUT", "/user"))
    with pytest.raises(ValueError):
        asyncio.run(
            client.request("POST", "/dam/files", json_body={"a": 1}, multipart=MultipartBody())
        )
    assert recorder.requests == []


def test_redirects_are_followed(settings) -> None:
    hosts: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        hosts.append(request.url.host)
        if request.url.host == "baklib.test":
            return httpx.Response(301, headers={"Location": "https://mirror.baklib.test/api/v1/kb/spaces"})
        return httpx.Response(200, json={"data": [{"id": "s1"}]})

    client = BaklibClient(settings, transport=httpx.MockTransport(handler))
    result = asyncio.run(client.request("GET", "/kb/spaces"))

    assert result == {"data": [{"id": "s1"}]}
    assert hosts == ["baklib.test", "mirror.baklib.test"]
