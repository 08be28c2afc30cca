"""
描述: Baklib 开放平台 API 客户端
主要功能:
    - 封装 HTTP 请求与鉴权 (Authorization 直接携带 token, 无 Bearer 前缀)
    - 统一 JSON / multipart 请求体编码
    - 统一错误处理 (不做重试)
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from baklib_mcp.baklib.models import Envelope, MultipartBody
from baklib_mcp.config import Settings
from baklib_mcp.errors import BaklibAPIError, BaklibTransportError


logger = logging.getLogger(__name__)

ALLOWED_METHODS = frozenset({"GET", "POST", "PATCH", "DELETE"})


# region Baklib 客户端
class BaklibClient:
    """
    Baklib API 客户端

    功能:
        - 统一封装 API 请求
        - 每次调用独立建立连接, 不持有可变共享状态
    """
    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        初始化客户端

        参数:
            settings: 全局配置对象 (只读)
            transport: 可选的 httpx 传输层 (测试时注入 MockTransport)
        """
        self._settings = settings
        self._transport = transport

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
        multipart: MultipartBody | None = None,
        headers: dict[str, str] | None = None,
    ) -> Envelope:
        """
        执行 API 请求

        参数:
            method: HTTP 方法 (GET/POST/PATCH/DELETE)
            path: API 路径 (不含 Base URL)
            params: 查询参数, 值为 None 的项不发送
            json_body: JSON 请求体
            multipart: multipart 请求体 (与 json_body 互斥)
            headers: 额外请求头

        返回:
            响应 JSON 数据; 204 或空响应返回 {"success": True}

        抛出:
            BaklibAPIError: 非 2xx 状态码
            BaklibTransportError: 网络异常或响应不是合法 JSON
        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        if json_body is not None and multipart is not None:
            raise ValueError("json_body and multipart are mutually exclusive")

        url = f"{self._settings.baklib.api_base}{path}"
        query = {key: value for key, value in (params or {}).items() if value is not None}

        request_headers: dict[str, str] = {}
        if headers:
            request_headers.update(headers)
        request_headers["Authorization"] = self._settings.baklib.token

        content: str | None = None
        data: dict[str, str] | None = None
        files: dict[str, tuple[str, bytes, str]] | None = None
        if multipart is not None:
            # boundary 头由 httpx 生成
            data = dict(multipart.fields)
            files = multipart.httpx_files()
        elif json_body is not None:
            request_headers["Content-Type"] = "application/json"
            content = json.dumps(json_body, ensure_ascii=False)

        logger.debug("%s %s", method, url, extra={"query": query})

        try:
            async with httpx.AsyncClient(
                timeout=self._settings.baklib.request.timeout,
                trust_env=False,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    url,
                    params=query,
                    content=content,
                    data=data,
                    files=files,
                    headers=request_headers,
                )
        except httpx.HTTPError as exc:
            raise BaklibTransportError(f"{exc.__class__.__name__}: {exc}") from exc

        if not response.is_success:
            raise BaklibAPIError(response.status_code, response.text)

        if response.status_code == 204 or response.headers.get("content-length") == "0":
            return {"success": True}

        try:
            return response.json()
        except ValueError as exc:
            raise BaklibTransportError(
                f"Invalid JSON response ({response.status_code}): {response.text}"
            ) from exc
# endregion
