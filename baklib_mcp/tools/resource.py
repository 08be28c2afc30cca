"""
描述: 通用 JSON:API 资源工具
主要功能:
    - 按端点描述执行 get / list / create / update / delete
    - 写操作构造 JSON:API 信封, 读操作解码为统一结果
"""

from __future__ import annotations

from typing import Any

from baklib_mcp.baklib.encoders import (
    build_headers,
    build_query,
    collect_attributes,
    decode_deletion,
    decode_entity,
    decode_list,
    encode_envelope,
)
from baklib_mcp.tools.base import BaseTool


_WRITE_ACTIONS = frozenset({"create", "update"})


class ResourceTool(BaseTool):
    """get / list / create / update / delete on one endpoint."""

    async def run(self, arguments: dict[str, Any] | None) -> dict[str, Any]:
        endpoint = self.endpoint
        params = self.validate(arguments)

        json_body: dict[str, Any] | None = None
        if endpoint.action in _WRITE_ACTIONS:
            resource_id = None
            if endpoint.envelope_id_field:
                resource_id = str(params[endpoint.envelope_id_field])
            json_body = encode_envelope(
                collect_attributes(params, endpoint.fields),
                resource_type=endpoint.resource_type,
                resource_id=resource_id,
            )

        envelope = await self.context.client.request(
            endpoint.method,
            endpoint.path_for(params),
            params=build_query(params, endpoint.fields) or None,
            json_body=json_body,
            headers=build_headers(params, endpoint.fields) or None,
        )

        if endpoint.action == "list":
            return decode_list(envelope)
        if endpoint.action == "delete":
            return decode_deletion(envelope)
        return decode_entity(envelope)
