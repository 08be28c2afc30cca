"""
描述: Baklib MCP Server 全局配置加载器
主要功能:
    - 统一管理 Server / Baklib API / 日志配置
    - 支持 YAML 文件加载与环境变量覆盖
    - 启动时校验访问凭证
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from baklib_mcp.errors import ConfigurationError


_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")

DEFAULT_API_BASE = "https://open.baklib.com/api/v1"


# region 基础配置模型
class ServerSettings(BaseModel):
    """服务监听配置"""
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "0.0.0.0"
    port: int = 8081
    include_stack: bool = True


class RequestSettings(BaseModel):
    # None 表示不设置超时, 请求挂起时调用方会一直等待
    timeout: float | None = None


class BaklibSettings(BaseModel):
    """Baklib 开放平台配置"""
    token: str = ""
    api_base: str = DEFAULT_API_BASE
    request: RequestSettings = Field(default_factory=RequestSettings)


class ToolsSettings(BaseModel):
    enabled: list[str] = Field(default_factory=list)


class LoggingSettings(BaseModel):
    """日志系统配置"""
    level: str = "INFO"
    format: str = "json"


class Settings(BaseModel):
    """MCP Server 配置聚合根"""
    server: ServerSettings = Field(default_factory=ServerSettings)
    baklib: BaklibSettings = Field(default_factory=BaklibSettings)
    tools: ToolsSettings = Field(default_factory=ToolsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
# endregion


# region 配置加载逻辑


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        def replace(match: re.Match[str]) -> str:
            expr = match.group(1)
            if ":-" in expr:
                key, default = expr.split(":-", 1)
                return os.getenv(key, default)
            return os.getenv(expr, "")

        return _ENV_PATTERN.sub(replace, value)
    if isinstance(value, list):
        return [_expand_env(item) for item in value]
    if isinstance(value, dict):
        return {key: _expand_env(val) for key, val in value.items()}
    return value


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return _expand_env(data)


def _set_nested(data: dict[str, Any], keys: list[str], value: Any) -> None:
    current = data
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value


def _parse_env_override(env_key: str, env_value: str) -> Any:
    if env_key == "MCP_TOOLS_ENABLED":
        return [item.strip() for item in env_value.split(",") if item.strip()]
    if env_key == "BAKLIB_API_BASE":
        return env_value.rstrip("/")
    return env_value


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    mapping = {
        "BAKLIB_TOKEN": ["baklib", "token"],
        "BAKLIB_API_BASE": ["baklib", "api_base"],
        "BAKLIB_REQUEST_TIMEOUT": ["baklib", "request", "timeout"],
        "MCP_TRANSPORT": ["server", "transport"],
        "MCP_HOST": ["server", "host"],
        "MCP_PORT": ["server", "port"],
        "MCP_TOOLS_ENABLED": ["tools", "enabled"],
        "LOG_LEVEL": ["logging", "level"],
        "LOG_FORMAT": ["logging", "format"],
    }
    for env_key, path in mapping.items():
        env_value = os.getenv(env_key)
        if env_value is not None and env_value != "":
            _set_nested(data, path, _parse_env_override(env_key, env_value))
    return data


def load_settings(config_path: str | None = None) -> Settings:
    path = Path(config_path or os.getenv("CONFIG_PATH", "config.yaml"))
    data = _load_yaml(path)
    data = _apply_env_overrides(data)
    return Settings.model_validate(data)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """获取单例配置对象"""
    return load_settings()


def ensure_credentials(settings: Settings) -> None:
    """
    校验访问凭证

    抛出:
        ConfigurationError: BAKLIB_TOKEN 未配置
    """
    if not settings.baklib.token.strip():
        raise ConfigurationError("BAKLIB_TOKEN environment variable must be set")
# endregion
