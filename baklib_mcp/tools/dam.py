"""
描述: DAM 文件上传工具
主要功能:
    - 读取本地文件并以 multipart 上传到 /dam/files
    - 从响应中提取 signed_id 与访问地址
"""

from __future__ import annotations

import logging
from typing import Any

from baklib_mcp.baklib.upload import (
    SIGNED_ID_STRATEGIES,
    URL_STRATEGIES,
    encode_upload,
    extract_first,
    resolve_upload_source,
)
from baklib_mcp.tools.base import BaseTool


logger = logging.getLogger(__name__)


# region 上传工具
class DamUploadTool(BaseTool):
    """
    文件上传工具

    功能:
        - 上传本地文件到 Baklib 资源库
        - 返回可在知识库文章中引用的 signed_id
    """

    async def run(self, arguments: dict[str, Any] | None) -> dict[str, Any]:
        params = self.validate(arguments)
        descriptor = resolve_upload_source(params["file_path"], params.get("name"))
        content = descriptor.path.read_bytes()
        body = encode_upload(descriptor, content, resource_type=self.endpoint.resource_type or "dam_files")

        logger.debug(
            "Uploading file: %s (%.2f KB)",
            descriptor.file_name,
            len(content) / 1024,
        )
        envelope = await self.context.client.request(
            self.endpoint.method,
            self.endpoint.path,
            multipart=body,
        )
        return {
            "success": True,
            "id": extract_first(envelope, SIGNED_ID_STRATEGIES),
            "name": descriptor.file_name,
            "type": params["type"],
            "size": len(content),
            "mime_type": descriptor.media_type,
            "url": extract_first(envelope, URL_STRATEGIES),
            "full_response": envelope,
        }
# endregion
