from __future__ import annotations

from typing import Any

import pytest

from baklib_mcp.baklib.models import MultipartBody
from baklib_mcp.config import Settings, get_settings
from baklib_mcp.tools import ToolContext, ToolRegistry, build_registry


class FakeClient:
    def __init__(self, response: dict[str, Any] | None = None, error: Exception | None = None) -> None:
        self.response = response if response is not None else {"data": {"id": "1"}}
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
        multipart: MultipartBody | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        self.calls.append(
            {
                "method": method,
                "path": path,
                "params": params,
                "json_body": json_body,
                "multipart": multipart,
                "headers": headers,
            }
        )
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings.model_validate(
        {"baklib": {"token": "test-token", "api_base": "https://baklib.test/api/v1"}}
    )


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def context(settings: Settings, fake_client: FakeClient) -> ToolContext:
    return ToolContext(settings=settings, client=fake_client)  # type: ignore[arg-type]


@pytest.fixture
def registry(context: ToolContext) -> ToolRegistry:
    return build_registry(context)
