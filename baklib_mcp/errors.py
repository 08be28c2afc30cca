"""
异常处理模块

统一定义自定义异常类，便于工具调度层精确捕获和处理
"""

from __future__ import annotations

from typing import Any


# ============================================
# region 基础异常
# ============================================
class BaklibMCPError(Exception):
    """Baklib MCP 基础异常类"""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


class ConfigurationError(BaklibMCPError):
    """启动配置缺失 (例如 BAKLIB_TOKEN 未设置)"""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="CONFIG_ERROR")
# endregion
# ============================================


# ============================================
# region 工具参数异常
# ============================================
class ToolValidationError(BaklibMCPError):
    """工具参数校验失败 (在任何网络请求之前抛出)"""

    def __init__(self, message: str, tool_name: str, missing: list[str] | None = None) -> None:
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={"tool_name": tool_name, "missing": list(missing or [])},
        )
        self.tool_name = tool_name
        self.missing = list(missing or [])

    @classmethod
    def missing_fields(cls, tool_name: str, missing: list[str]) -> ToolValidationError:
        if len(missing) == 1:
            message = f"{missing[0]} is required"
        else:
            message = f"{', '.join(missing[:-1])} and {missing[-1]} are required"
        return cls(message, tool_name, missing)
# endregion
# ============================================


# ============================================
# region 上传源文件异常
# ============================================
class UploadSourceError(BaklibMCPError):
    """上传源文件不可用"""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message, code="UPLOAD_SOURCE_ERROR", details={"path": path})
        self.path = path


class UploadFileNotFoundError(UploadSourceError):
    """上传文件不存在"""

    def __init__(self, path: str) -> None:
        super().__init__(f"File not found: {path}", path)


class UploadNotAFileError(UploadSourceError):
    """路径存在但不是普通文件 (目录、socket、设备等)"""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path is not a file: {path}", path)
# endregion
# ============================================


# ============================================
# region 远端 API 异常
# ============================================
class BaklibAPIError(BaklibMCPError):
    """Baklib API 返回非 2xx 状态码"""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(
            f"Baklib API error ({status_code}): {body}",
            code="REMOTE_ERROR",
            details={"status_code": status_code, "body": body},
        )
        self.status_code = status_code
        self.body = body


class BaklibTransportError(BaklibMCPError):
    """网络层失败或响应体无法解析"""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="TRANSPORT_ERROR")
# endregion
# ============================================
