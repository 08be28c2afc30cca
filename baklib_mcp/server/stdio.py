"""
描述: MCP stdio 传输
主要功能:
    - 基于 mcp SDK 低层 Server 暴露工具列表与工具调用
    - 调用统一交给 ToolDispatcher, 本模块只做协议转换
"""

from __future__ import annotations

import logging
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from baklib_mcp import __version__
from baklib_mcp.server.dispatcher import ToolDispatcher


logger = logging.getLogger(__name__)

SERVER_NAME = "baklib-mcp-server"


class ToolCallFailed(Exception):
    """携带已格式化错误文本的异常, 由 SDK 转换为 isError 结果"""


def _text_of(result: dict[str, Any]) -> str:
    return "\n".join(item["text"] for item in result.get("content", []))


def create_server(dispatcher: ToolDispatcher) -> Server:
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=schema["name"],
                description=schema["description"],
                inputSchema=schema["inputSchema"],
            )
            for schema in dispatcher.list_tools()
        ]

    # 参数校验由工具自身完成, 保持错误信息一致
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        result = await dispatcher.dispatch(name, arguments)
        if result.get("isError"):
            raise ToolCallFailed(_text_of(result))
        return [types.TextContent(type="text", text=item["text"]) for item in result["content"]]

    return server


async def serve_stdio(dispatcher: ToolDispatcher) -> None:
    """在 stdin/stdout 上运行 MCP 会话, 直到客户端断开"""
    server = create_server(dispatcher)
    logger.info("Starting MCP stdio server", extra={"tools_count": len(dispatcher.registry)})
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
