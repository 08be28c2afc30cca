"""
HTTP API for MCP tools.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request, Response

from baklib_mcp.server.dispatcher import ToolDispatcher
from baklib_mcp.server.schema import (
    ToolArgumentsRequest,
    ToolCallRequest,
    ToolCallResponse,
    ToolListResponse,
)


SERVICE_NAME = "baklib-mcp-server"

router = APIRouter()


def _dispatcher(request: Request) -> ToolDispatcher:
    return request.app.state.dispatcher


@router.get("/")
async def root() -> dict[str, str]:
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/favicon.ico")
async def favicon() -> Response:
    return Response(status_code=204)


@router.get("/health")
async def health(request: Request) -> dict[str, Any]:
    return {"status": "ok", "tools_count": len(_dispatcher(request).registry)}


@router.get("/mcp/tools", response_model=ToolListResponse)
async def list_tools(request: Request) -> ToolListResponse:
    return ToolListResponse(tools=_dispatcher(request).list_tools())


@router.post(
    "/mcp/tools/call",
    response_model=ToolCallResponse,
    response_model_exclude_none=True,
)
async def call_tool(request: Request, payload: ToolCallRequest) -> ToolCallResponse:
    result = await _dispatcher(request).dispatch(payload.name, payload.arguments)
    return ToolCallResponse.model_validate(result)


@router.post(
    "/mcp/tools/{tool_name}",
    response_model=ToolCallResponse,
    response_model_exclude_none=True,
)
async def call_named_tool(
    tool_name: str,
    request: Request,
    payload: ToolArgumentsRequest,
) -> ToolCallResponse:
    result = await _dispatcher(request).dispatch(tool_name, payload.arguments)
    return ToolCallResponse.model_validate(result)
