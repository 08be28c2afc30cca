"""
描述: JSON:API 资源编解码
主要功能:
    - 只收集调用方实际提供的参数, 构造 {data: {type?, id?, attributes}} 信封
    - 分页参数 page/per_page 转换为 page[number]/page[size]
    - 将响应信封解码为统一的调用结果
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from baklib_mcp.baklib.models import Envelope, FieldBinding


PAGINATION_KEYS = {
    "page": "page[number]",
    "per_page": "page[size]",
}


# region 参数收集
def is_supplied(value: Any) -> bool:
    """缺省、None 与空字符串视为未提供; False 与 0 视为已提供"""
    return value is not None and value != ""


def _coerced(field: FieldBinding, value: Any) -> Any:
    if field.coerce is not None:
        return field.coerce(value)
    return value


def collect_attributes(arguments: dict[str, Any], fields: Iterable[FieldBinding]) -> dict[str, Any]:
    """收集 attribute 字段; 未提供的字段整体省略而不是发送 null"""
    attributes: dict[str, Any] = {}
    for field in fields:
        if field.location != "attribute":
            continue
        value = arguments.get(field.name)
        if is_supplied(value):
            attributes[field.wire_key] = _coerced(field, value)
    return attributes


def build_query(arguments: dict[str, Any], fields: Iterable[FieldBinding]) -> dict[str, Any]:
    """收集 query 字段并翻译分页参数"""
    query: dict[str, Any] = {}
    for field in fields:
        if field.location != "query":
            continue
        value = arguments.get(field.name)
        if not is_supplied(value):
            continue
        key = PAGINATION_KEYS.get(field.name, field.wire_key)
        query[key] = _coerced(field, value)
    return query


def build_headers(arguments: dict[str, Any], fields: Iterable[FieldBinding]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for field in fields:
        if field.location != "header":
            continue
        value = arguments.get(field.name)
        if is_supplied(value):
            headers[field.wire_key] = str(value)
    return headers


def encode_envelope(
    attributes: dict[str, Any],
    resource_type: str | None = None,
    resource_id: str | None = None,
) -> Envelope:
    data: dict[str, Any] = {}
    if resource_type is not None:
        data["type"] = resource_type
    if resource_id is not None:
        data["id"] = resource_id
    data["attributes"] = attributes
    return {"data": data}
# endregion


# region 响应解码
def _envelope_data(envelope: Any) -> Any:
    # 响应体可能是合法 JSON 但不是对象 (例如 [] 或 null), 视为没有 data
    if isinstance(envelope, dict):
        return envelope.get("data")
    return None


def decode_entity(envelope: Envelope) -> dict[str, Any]:
    """单实体: data 原样透传 (实体不存在时为 None)"""
    return {
        "success": True,
        "data": _envelope_data(envelope),
        "full_response": envelope,
    }


def decode_list(envelope: Envelope) -> dict[str, Any]:
    """列表: 缺少 data 时返回空列表"""
    data = _envelope_data(envelope)
    result: dict[str, Any] = {
        "success": True,
        "data": data if data is not None else [],
    }
    if isinstance(envelope, dict) and "meta" in envelope:
        result["meta"] = envelope["meta"]
    result["full_response"] = envelope
    return result


def decode_deletion(envelope: Envelope) -> dict[str, Any]:
    return {"success": True, "full_response": envelope}
# endregion
