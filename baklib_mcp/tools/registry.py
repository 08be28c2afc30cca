"""
描述: MCP 工具注册中心
主要功能:
    - 启动时根据端点目录一次性构建全部工具
    - 提供工具查找与元数据列表功能 (构建后只读)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from types import MappingProxyType
from typing import Any

from baklib_mcp.tools.base import BaseTool, ToolContext
from baklib_mcp.tools.catalog import ENDPOINTS, EndpointDescriptor
from baklib_mcp.tools.dam import DamUploadTool
from baklib_mcp.tools.resource import ResourceTool


logger = logging.getLogger(__name__)


# region 工具注册中心
class ToolRegistry:
    """工具注册中心, 名称唯一且区分大小写"""

    def __init__(self, tools: Iterable[BaseTool]) -> None:
        table: dict[str, BaseTool] = {}
        for tool in tools:
            if tool.name in table:
                raise ValueError(f"Tool {tool.name} already registered")
            table[tool.name] = tool
        self._tools = MappingProxyType(table)

    def get(self, name: str) -> BaseTool | None:
        """未知名称返回 None, 由调用方处理"""
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[dict[str, Any]]:
        """获取所有已注册工具的元数据"""
        return [tool.to_schema() for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
# endregion


# region 构建入口
def _tool_for(context: ToolContext, endpoint: EndpointDescriptor) -> BaseTool:
    if endpoint.action == "upload":
        return DamUploadTool(context, endpoint)
    return ResourceTool(context, endpoint)


def build_registry(
    context: ToolContext,
    endpoints: Sequence[EndpointDescriptor] = ENDPOINTS,
) -> ToolRegistry:
    """
    构建工具注册中心

    参数:
        context: 工具执行上下文
        endpoints: 端点目录, 默认全部端点

    返回:
        只读的 ToolRegistry; settings.tools.enabled 非空时只包含其中列出的工具
    """
    enabled = set(context.settings.tools.enabled)
    if enabled:
        unknown = sorted(enabled - {endpoint.name for endpoint in endpoints})
        if unknown:
            logger.warning("Enabled tools not found in catalog: %s", ", ".join(unknown))
        endpoints = [endpoint for endpoint in endpoints if endpoint.name in enabled]

    registry = ToolRegistry(_tool_for(context, endpoint) for endpoint in endpoints)
    logger.info("Tool registry built", extra={"tools_count": len(registry)})
    return registry
# endregion
