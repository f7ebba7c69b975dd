"""coda-mcp HTTP server - MCP over Server-Sent Events.

Long-running server that exposes:
- GET /health - health check (no tool dispatch)
- GET /sse - opens an MCP channel; one new ToolSession per connection
- POST /messages/?session_id=... - client-to-server messages for an open channel
- OAuth discovery stubs (only when enabled)

Opening a channel requires ``?token=`` when MCP_AUTH_TOKEN is configured.
"""

from __future__ import annotations

import contextlib
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI
from mcp.server.sse import SseServerTransport
from starlette.middleware.cors import CORSMiddleware

from coda_mcp.client import DocumentClient
from coda_mcp.config import Settings
from coda_mcp.logger import Logger, session_logger
from coda_mcp.mcp_server import ToolSession, build_registry
from coda_mcp.web import QueryTokenGuard, create_health_router, create_oauth_stub_router

MESSAGES_PATH = "/messages/"


class SseEndpoint:
    """ASGI endpoint that runs one MCP session for the lifetime of an SSE stream."""

    def __init__(self, server: "CodaMcpHttpServer"):
        self.server = server

    async def __call__(self, scope: Any, receive: Any, send: Any) -> None:
        await self.server.serve_sse(scope, receive, send)


class CodaMcpHttpServer:
    """FastAPI application serving MCP sessions over SSE."""

    def __init__(
        self,
        settings: Settings,
        client: DocumentClient,
        logger: Optional[Logger] = None,
        close_client: bool = True,
    ):
        """
        Initialize the HTTP server.

        Args:
            settings: Process configuration (auth token, OAuth stubs, identity)
            client: Remote document client shared by every session
            logger: Logger instance
            close_client: Close the client when the application shuts down
        """
        self.settings = settings
        self.client = client
        self.logger: Logger = logger or session_logger
        self.close_client = close_client
        self.sessions: Dict[str, ToolSession] = {}
        self.sse = SseServerTransport(MESSAGES_PATH)

        self.app = FastAPI(
            title=settings.server_name,
            version=settings.server_version,
            description="Coda documents and pages as MCP tools",
            lifespan=self._lifespan,
        )
        self._setup_routes()

        self.logger.info(
            "HTTP server initialized",
            auth_enabled=settings.auth_enabled,
            oauth_stubs=settings.oauth_stubs,
        )
        if not settings.auth_enabled:
            self.logger.warning(
                "MCP_AUTH_TOKEN is not set: MCP endpoints are open to anyone who can reach them"
            )

    @contextlib.asynccontextmanager
    async def _lifespan(self, app: FastAPI) -> AsyncIterator[None]:
        self.logger.info("HTTP server ready")
        try:
            yield
        finally:
            for session in list(self.sessions.values()):
                session.close()
            if self.close_client:
                aclose = getattr(self.client, "aclose", None)
                if aclose is not None:
                    await aclose()
            self.logger.info("HTTP server stopped")

    def _setup_routes(self) -> None:
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type", "Authorization"],
        )
        self.app.include_router(create_health_router(self.settings))
        if self.settings.oauth_stubs:
            self.app.include_router(create_oauth_stub_router())

        self.app.add_route(
            "/sse",
            QueryTokenGuard(SseEndpoint(self), self.settings.auth_token, logger=self.logger),
            methods=["GET"],
        )
        self.app.mount(MESSAGES_PATH, app=self.sse.handle_post_message)

    def new_session(self) -> ToolSession:
        registry = build_registry(self.client, logger=self.logger)
        return ToolSession(
            registry,
            name=self.settings.server_name,
            version=self.settings.server_version,
            logger=self.logger,
        )

    async def serve_sse(self, scope: Any, receive: Any, send: Any) -> None:
        session = self.new_session()
        self.sessions[session.session_id] = session
        self.logger.info("New SSE connection", session_id=session.session_id, active=len(self.sessions))
        try:
            async with self.sse.connect_sse(scope, receive, send) as (read_stream, write_stream):
                await session.run(read_stream, write_stream)
        finally:
            session.close()
            self.sessions.pop(session.session_id, None)
            self.logger.info("SSE connection closed", session_id=session.session_id, active=len(self.sessions))
