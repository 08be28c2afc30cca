"""
MCP HTTP API schemas.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class ToolCallRequest(BaseModel):
    name: str
    arguments: dict[str, Any] | None = None


class ToolArgumentsRequest(BaseModel):
    arguments: dict[str, Any] | None = None


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolCallResponse(BaseModel):
    content: list[TextContent] = Field(default_factory=list)
    isError: bool | None = None


class ToolListResponse(BaseModel):
    tools: list[dict[str, Any]] = Field(default_factory=list)
