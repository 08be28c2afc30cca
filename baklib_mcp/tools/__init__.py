"""
描述: MCP 工具包入口。
主要功能:
    - 导出工具上下文、基类与注册中心构建函数
"""

from baklib_mcp.tools.base import BaseTool, ToolContext
from baklib_mcp.tools.registry import ToolRegistry, build_registry

__all__ = ["BaseTool", "ToolContext", "ToolRegistry", "build_registry"]
