from __future__ import annotations

import json
import logging

from baklib_mcp.utils.logger import JsonFormatter, TextFormatter, tool_name_var


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("baklib_mcp.test", logging.INFO, __file__, 1, "Tool call %s", ("done",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_and_tool() -> None:
    token = tool_name_var.set("kb_get_article")
    try:
        payload = json.loads(JsonFormatter().format(_record(duration_ms=12.5)))
    finally:
        tool_name_var.reset(token)

    assert payload["message"] == "Tool call done"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "baklib_mcp.test"
    assert payload["tool"] == "kb_get_article"
    assert payload["duration_ms"] == 12.5


def test_text_formatter_without_tool() -> None:
    line = TextFormatter().format(_record())
    assert "INFO" in line
    assert line.endswith("baklib_mcp.test: Tool call done")
