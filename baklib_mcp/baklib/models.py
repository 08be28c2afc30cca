"""
描述: Baklib API 请求/响应数据结构
主要功能:
    - 定义 multipart 请求体
    - 定义 JSON:API 信封类型别名
    - 定义编码器所需的参数字段接口
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol


# JSON:API 信封: 写入 {data: {type?, id?, attributes}}, 读取 {data: T | list[T], meta?}
Envelope = dict[str, Any]


class FieldBinding(Protocol):
    """参数字段: 名称、去向 (path / query / attribute / header / local) 与可选转换"""

    @property
    def name(self) -> str: ...

    @property
    def location(self) -> str: ...

    @property
    def wire_key(self) -> str: ...

    @property
    def coerce(self) -> Callable[[Any], Any] | None: ...


# region 请求体模型
@dataclass(frozen=True)
class FilePart:
    """multipart 中的单个文件字段"""
    file_name: str
    content: bytes
    media_type: str


@dataclass(frozen=True)
class MultipartBody:
    """
    multipart/form-data 请求体

    属性:
        fields: 普通表单字段 (字段名 -> 文本值)
        files: 文件字段 (字段名 -> FilePart)
    """
    fields: dict[str, str] = field(default_factory=dict)
    files: dict[str, FilePart] = field(default_factory=dict)

    def httpx_files(self) -> dict[str, tuple[str, bytes, str]]:
        return {
            name: (part.file_name, part.content, part.media_type)
            for name, part in self.files.items()
        }
# endregion
