"""
描述: MCP 工具基类定义
主要功能:
    - 定义 BaseTool 抽象基类 (参数校验、默认值、schema 输出)
    - 定义 ToolContext 上下文对象
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from baklib_mcp.baklib.client import BaklibClient
from baklib_mcp.baklib.encoders import is_supplied
from baklib_mcp.config import Settings
from baklib_mcp.errors import ToolValidationError
from baklib_mcp.tools.catalog import EndpointDescriptor


# region 工具上下文与基类
@dataclass(frozen=True)
class ToolContext:
    """工具执行上下文 (依赖注入)"""
    settings: Settings
    client: BaklibClient


class BaseTool(ABC):
    """MCP 工具抽象基类, 由端点描述驱动"""

    def __init__(self, context: ToolContext, endpoint: EndpointDescriptor) -> None:
        self.context = context
        self.endpoint = endpoint

    @property
    def name(self) -> str:
        return self.endpoint.name

    @property
    def description(self) -> str:
        return self.endpoint.description

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.endpoint.input_schema()

    def required_fields(self) -> list[str]:
        return [field.name for field in self.endpoint.fields if field.required]

    def validate(self, arguments: dict[str, Any] | None) -> dict[str, Any]:
        """
        校验并补全参数

        参数:
            arguments: 调用方传入的参数 (可能为 None)

        返回:
            补全默认值后的参数副本

        抛出:
            ToolValidationError: 缺少必填参数或取值不在枚举范围内
        """
        prepared = dict(arguments or {})
        missing = [name for name in self.required_fields() if not is_supplied(prepared.get(name))]
        if missing:
            raise ToolValidationError.missing_fields(self.name, missing)

        for field in self.endpoint.fields:
            value = prepared.get(field.name)
            if not is_supplied(value):
                if field.default is not None:
                    prepared[field.name] = field.default
                continue
            if field.enum is not None and value not in field.enum:
                allowed = ", ".join(field.enum)
                raise ToolValidationError(
                    f"{field.name} must be one of: {allowed}",
                    self.name,
                )
        return prepared

    def to_schema(self) -> dict[str, Any]:
        """返回工具 schema (用于工具发现)"""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }

    @abstractmethod
    async def run(self, arguments: dict[str, Any] | None) -> dict[str, Any]:
        """
        执行工具逻辑

        参数:
            arguments: 工具参数字典

        返回:
            调用结果字典 (success / data / meta / full_response)
        """
        raise NotImplementedError
# endregion
