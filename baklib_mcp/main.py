"""
描述: Baklib MCP Server 主入口
主要功能:
    - 加载 .env / 配置 / 日志
    - 启动前校验访问凭证, 缺失时以状态码 1 退出
    - 按配置选择 stdio 或 HTTP (uvicorn) 传输
"""

from __future__ import annotations

import asyncio
import logging
import sys

import uvicorn
from dotenv import load_dotenv

from baklib_mcp.config import get_settings
from baklib_mcp.errors import ConfigurationError
from baklib_mcp.server.app_factory import build_dispatcher, create_app
from baklib_mcp.server.stdio import serve_stdio
from baklib_mcp.utils.logger import setup_logging


logger = logging.getLogger(__name__)


def main() -> None:
    load_dotenv()
    settings = get_settings()
    setup_logging(settings.logging)

    # Windows 兼容性：在任何 asyncio 操作前设置策略
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    try:
        if settings.server.transport == "http":
            app = create_app(settings)
            logger.info(
                "Starting Baklib MCP Server on http://%s:%s",
                settings.server.host,
                settings.server.port,
            )
            uvicorn.run(app, host=settings.server.host, port=settings.server.port, log_level="info")
        else:
            dispatcher = build_dispatcher(settings)
            asyncio.run(serve_stdio(dispatcher))
    except ConfigurationError as exc:
        logger.critical("Fatal configuration error: %s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Baklib MCP Server stopped")


if __name__ == "__main__":
    main()
