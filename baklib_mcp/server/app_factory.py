"""Application factory for the Baklib MCP runtime."""

from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI

from baklib_mcp import __version__
from baklib_mcp.baklib.client import BaklibClient
from baklib_mcp.config import Settings, ensure_credentials, get_settings
from baklib_mcp.server.dispatcher import ToolDispatcher
from baklib_mcp.server.http import router as http_router
from baklib_mcp.tools import ToolContext, build_registry
from baklib_mcp.utils.logger import setup_logging


def build_dispatcher(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ToolDispatcher:
    """Wire client, tool registry and dispatcher from settings."""
    ensure_credentials(settings)
    context = ToolContext(settings=settings, client=BaklibClient(settings, transport=transport))
    registry = build_registry(context)
    return ToolDispatcher(registry, include_stack=settings.server.include_stack)


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create the FastAPI application serving the tool endpoints."""
    if settings is None:
        settings = get_settings()
        setup_logging(settings.logging)
    logger = logging.getLogger(__name__)

    dispatcher = build_dispatcher(settings, transport=transport)
    logger.info(
        "MCP server config loaded",
        extra={
            "api_base": settings.baklib.api_base,
            "tools_enabled_count": len(settings.tools.enabled),
        },
    )

    app = FastAPI(title="Baklib MCP Server", version=__version__)
    app.state.dispatcher = dispatcher
    app.include_router(http_router)
    return app
