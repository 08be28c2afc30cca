"""
描述: DAM 文件上传编码
主要功能:
    - 解析本地文件路径并推断媒体类型
    - 按 JSON:API 方括号字段 (data[type], data[attributes][file]) 打包 multipart
    - 按固定优先级从响应中提取 signed_id 与 url
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from baklib_mcp.baklib.models import Envelope, FilePart, MultipartBody
from baklib_mcp.errors import UploadFileNotFoundError, UploadNotAFileError


logger = logging.getLogger(__name__)


DEFAULT_MEDIA_TYPE = "application/octet-stream"

MIME_TYPES: dict[str, str] = {
    ".md": "text/markdown",
    ".txt": "text/plain",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".ppt": "application/vnd.ms-powerpoint",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    ".zip": "application/zip",
    ".mp4": "video/mp4",
    ".mp3": "audio/mpeg",
}

UPLOAD_RESOURCE_TYPE = "dam_files"
TYPE_FIELD = "data[type]"
FILE_FIELD = "data[attributes][file]"


# region 媒体类型
def infer_media_type(file_name: str) -> str:
    """根据扩展名推断媒体类型; 接受文件名或裸扩展名 (".png" / "png")"""
    suffix = Path(file_name).suffix
    if not suffix:
        bare = file_name.strip().lstrip(".")
        suffix = f".{bare}" if bare and "/" not in bare else ""
    return MIME_TYPES.get(suffix.lower(), DEFAULT_MEDIA_TYPE)
# endregion


# region 上传描述
@dataclass(frozen=True)
class UploadDescriptor:
    """单次上传的源文件信息 (不持久化)"""
    path: Path
    file_name: str
    media_type: str
    size: int


def resolve_upload_source(
    file_path: str,
    name: str | None = None,
    cwd: str | os.PathLike[str] | None = None,
) -> UploadDescriptor:
    """
    解析上传源文件

    参数:
        file_path: 本地路径, 相对路径基于当前工作目录
        name: 可选的文件名覆盖
        cwd: 相对路径的基准目录 (默认进程工作目录)

    抛出:
        UploadFileNotFoundError: 文件不存在
        UploadNotAFileError: 路径不是普通文件
    """
    path = Path(file_path)
    if not path.is_absolute():
        path = Path(cwd or os.getcwd()) / path
    path = Path(os.path.normpath(path))

    if not path.exists():
        raise UploadFileNotFoundError(str(path))
    if not path.is_file():
        raise UploadNotAFileError(str(path))

    file_name = name or path.name
    return UploadDescriptor(
        path=path,
        file_name=file_name,
        media_type=infer_media_type(file_name),
        size=path.stat().st_size,
    )


def encode_upload(
    descriptor: UploadDescriptor,
    content: bytes,
    resource_type: str = UPLOAD_RESOURCE_TYPE,
) -> MultipartBody:
    return MultipartBody(
        fields={TYPE_FIELD: resource_type},
        files={
            FILE_FIELD: FilePart(
                file_name=descriptor.file_name,
                content=content,
                media_type=descriptor.media_type,
            )
        },
    )
# endregion


# region 响应字段提取
Strategy = tuple[str, Callable[[Envelope], Any]]


def _dig(*keys: str) -> Callable[[Envelope], Any]:
    def extract(envelope: Envelope) -> Any:
        current: Any = envelope
        for key in keys:
            if not isinstance(current, dict):
                return None
            current = current.get(key)
        return current

    return extract


# 不同部署返回 signed_id 的位置不一致, 按顺序逐个尝试
SIGNED_ID_STRATEGIES: tuple[Strategy, ...] = (
    ("data.id", _dig("data", "id")),
    ("id", _dig("id")),
    ("signed_id", _dig("signed_id")),
    ("data.attributes.signed_id", _dig("data", "attributes", "signed_id")),
)

URL_STRATEGIES: tuple[Strategy, ...] = (
    ("data.attributes.url", _dig("data", "attributes", "url")),
    ("url", _dig("url")),
    ("data.url", _dig("data", "url")),
)


def extract_first(envelope: Envelope, strategies: Sequence[Strategy]) -> Any:
    """返回第一个存在的值; 全部缺失时返回 None"""
    for label, extractor in strategies:
        value = extractor(envelope)
        if value is not None and value != "":
            logger.debug("Extracted value from %s", label)
            return value
    logger.debug("No strategy matched: %s", ", ".join(label for label, _ in strategies))
    return None
# endregion
