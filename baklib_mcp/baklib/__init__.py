"""
描述: Baklib 开放平台接入层
主要功能:
    - HTTP 网关 (鉴权 / 编码 / 错误映射)
    - JSON:API 资源与文件上传编解码
"""

from baklib_mcp.baklib.client import BaklibClient

__all__ = ["BaklibClient"]
