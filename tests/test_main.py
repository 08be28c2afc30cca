from __future__ import annotations

import pytest

from baklib_mcp import main as entry


def test_missing_token_exits_with_status_one(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "missing.yaml"))
    monkeypatch.delenv("BAKLIB_TOKEN", raising=False)
    monkeypatch.setenv("MCP_TRANSPORT", "stdio")
    monkeypatch.setattr(entry, "load_dotenv", lambda: False)
    monkeypatch.setattr(entry, "setup_logging", lambda settings: None)

    with pytest.raises(SystemExit) as exc_info:
        entry.main()

    assert exc_info.value.code == 1
