"""Per-invocation serverless entry point.

Every request to ``/mcp`` gets a brand-new registry and ToolSession and is
served as stateless streamable HTTP, so nothing leaks between invocations.
``GET /`` and ``GET /health`` answer health probes.

Deployment shims only need::

    from coda_mcp.serverless import create_serverless_app
    app = create_serverless_app()
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from coda_mcp.client import CodaClient, DocumentClient
from coda_mcp.config import Settings
from coda_mcp.logger import Logger, session_logger
from coda_mcp.mcp_server import ToolSession, build_registry
from coda_mcp.web import QueryTokenGuard, create_health_router

MCP_PATH = "/mcp"


class StatelessMcpEndpoint:
    """ASGI endpoint: one request, one fresh session."""

    def __init__(
        self,
        settings: Settings,
        client: Optional[DocumentClient] = None,
        logger: Optional[Logger] = None,
    ):
        self.settings = settings
        self.client = client
        self.logger: Logger = logger or session_logger

    async def __call__(self, scope: Any, receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            return
        # Without an injected client, each invocation owns (and closes) its own
        owned_client = None
        client = self.client
        if client is None:
            owned_client = client = CodaClient.from_settings(self.settings, logger=self.logger)

        session = ToolSession(
            build_registry(client, logger=self.logger),
            name=self.settings.server_name,
            version=self.settings.server_version,
            logger=self.logger,
        )
        try:
            await session.handle_stateless_http(scope, receive, send)
        finally:
            if owned_client is not None:
                await owned_client.aclose()


def create_serverless_app(
    settings: Optional[Settings] = None,
    client: Optional[DocumentClient] = None,
    logger: Optional[Logger] = None,
) -> FastAPI:
    """Build the serverless ASGI app.

    Raises:
        ConfigurationError: If settings are not given and CODA_API_TOKEN is unset
    """
    logger = logger or session_logger
    settings = settings or Settings.from_env()

    app = FastAPI(title=settings.server_name, version=settings.server_version)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.include_router(create_health_router(settings, paths=("/", "/health")))

    endpoint = StatelessMcpEndpoint(settings, client=client, logger=logger)
    app.add_route(
        MCP_PATH,
        QueryTokenGuard(endpoint, settings.auth_token, logger=logger),
        methods=["GET", "POST", "DELETE"],
    )

    if not settings.auth_enabled:
        logger.warning("MCP_AUTH_TOKEN is not set: the MCP endpoint is open to anyone who can reach it")
    return app
