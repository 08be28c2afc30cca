"""
描述: 工具调用调度器
主要功能:
    - 按名称查找工具并执行
    - 将成功结果与异常统一包装为 {content, isError} 响应
"""

from __future__ import annotations

import json
import logging
import time
import traceback
from typing import Any

from baklib_mcp.errors import BaklibAPIError, BaklibMCPError, ToolValidationError
from baklib_mcp.tools.registry import ToolRegistry
from baklib_mcp.utils.logger import tool_name_var


logger = logging.getLogger(__name__)


# region 响应格式化
def _text_content(payload: dict[str, Any]) -> list[dict[str, str]]:
    return [{"type": "text", "text": json.dumps(payload, indent=2, ensure_ascii=False, default=str)}]


def format_response(result: dict[str, Any]) -> dict[str, Any]:
    return {"content": _text_content(result)}


def format_error(message: str, stack: str | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"error": message}
    if stack:
        payload["stack"] = stack
    return {"content": _text_content(payload), "isError": True}
# endregion


# region 调度器
class ToolDispatcher:
    """
    工具调用调度器

    功能:
        - Lookup -> Validate & Invoke -> Completion, 每次调用互不影响
    """
    def __init__(self, registry: ToolRegistry, include_stack: bool = True) -> None:
        self._registry = registry
        self._include_stack = include_stack

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def list_tools(self) -> list[dict[str, Any]]:
        return self._registry.list_tools()

    async def dispatch(self, name: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        执行一次工具调用

        参数:
            name: 工具名称 (精确匹配)
            arguments: 参数字典, 可为 None

        返回:
            成功: {"content": [...]}; 失败: {"content": [...], "isError": True}
        """
        tool = self._registry.get(name)
        if tool is None:
            logger.warning("Unknown tool requested: %s", name)
            return format_error(f"Unknown tool: {name}")

        token = tool_name_var.set(name)
        started = time.perf_counter()
        try:
            result = await tool.run(arguments or {})
        except Exception as exc:
            self._log_failure(exc)
            stack = None
            if self._include_stack:
                stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            return format_error(str(exc), stack)
        else:
            logger.info(
                "Tool call completed",
                extra={"duration_ms": round((time.perf_counter() - started) * 1000, 2)},
            )
            return format_response(result)
        finally:
            tool_name_var.reset(token)

    @staticmethod
    def _log_failure(exc: Exception) -> None:
        if isinstance(exc, ToolValidationError):
            logger.warning("Tool arguments invalid: %s", exc)
        elif isinstance(exc, BaklibAPIError):
            logger.warning("Baklib API rejected call", extra={"status_code": exc.status_code})
        elif isinstance(exc, BaklibMCPError):
            logger.error("Tool call failed: %s", exc, extra={"error_detail": exc.to_dict()})
        else:
            logger.exception("Tool call failed unexpectedly")
# endregion
