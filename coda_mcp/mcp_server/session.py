"""Per-connection MCP session.

A ``ToolSession`` binds one tool registry to one MCP channel:

    CONNECTING --run()--> OPEN --disconnect / close()--> CLOSED

Message framing and request/response correlation are handled by the MCP SDK:
requests on one session are served concurrently and every response carries
the JSON-RPC id of its request, which doubles as the correlation id.

Closing a session cancels its message loop. Remote calls still in flight are
abandoned at their next await point; nothing is rolled back on the remote side.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4

import anyio
from mcp.server import Server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from mcp.types import Tool

from coda_mcp.config import SERVER_NAME, SERVER_VERSION
from coda_mcp.exceptions import TransportFault
from coda_mcp.logger import Logger, session_logger
from coda_mcp.mcp_server.registry import ToolInvocation, ToolRegistry
from coda_mcp.mcp_server.tool_types import ToolResult


class SessionState(str, Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class ToolSession:
    """One client connection: a registry, an MCP server and a lifecycle."""

    def __init__(
        self,
        registry: ToolRegistry,
        name: str = SERVER_NAME,
        version: str = SERVER_VERSION,
        logger: Optional[Logger] = None,
    ):
        self.session_id = uuid4().hex
        self.registry = registry
        self.logger: Logger = logger or session_logger
        self.state = SessionState.CONNECTING
        self.server: Server = Server(name, version=version)
        self._cancel_scope: Optional[anyio.CancelScope] = None
        self._bind_handlers()

    def _bind_handlers(self) -> None:
        @self.server.list_tools()
        async def handle_list_tools() -> List[Tool]:
            return self.registry.list_tools()

        # The registry validates arguments itself
        @self.server.call_tool(validate_input=False)
        async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> ToolResult:
            invocation = ToolInvocation(
                tool_name=name,
                arguments=arguments or {},
                correlation_id=self._current_request_id(),
            )
            result = await self.invoke(invocation)
            if result is None:
                raise TransportFault(f"Session {self.session_id} is closed")
            return result

    def _current_request_id(self) -> Optional[Any]:
        try:
            return self.server.request_context.request_id
        except LookupError:
            return None

    @property
    def is_open(self) -> bool:
        return self.state is SessionState.OPEN

    def _open(self) -> None:
        if self.state is not SessionState.CONNECTING:
            raise RuntimeError(f"Session {self.session_id} cannot be opened from state {self.state.value}")
        self.registry.seal()
        self.state = SessionState.OPEN
        self.logger.info("Session opened", session_id=self.session_id, tools=len(self.registry))

    def close(self) -> None:
        """Close the session. Idempotent."""
        if self.state is SessionState.CLOSED:
            return
        self.state = SessionState.CLOSED
        if self._cancel_scope is not None:
            self._cancel_scope.cancel()
        self.logger.info("Session closed", session_id=self.session_id)

    async def invoke(self, invocation: ToolInvocation) -> Optional[ToolResult]:
        """Dispatch one invocation; returns None (dropped) once the session is closed."""
        if self.state is SessionState.CLOSED:
            self.logger.warning(
                "Dropping invocation on closed session",
                session_id=self.session_id,
                tool=invocation.tool_name,
                correlation_id=invocation.correlation_id,
            )
            return None
        return await self.registry.dispatch(invocation)

    def _transport_fault(self, exc: BaseException) -> None:
        fault = TransportFault(f"{type(exc).__name__}: {exc}")
        self.logger.error(
            "Transport fault, tearing down session",
            session_id=self.session_id,
            error=str(fault),
        )

    async def run(self, read_stream: Any, write_stream: Any) -> None:
        """Serve the MCP message loop on a duplex channel until it closes."""
        self._open()
        try:
            with anyio.CancelScope() as scope:
                self._cancel_scope = scope
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                    raise_exceptions=False,
                )
        except Exception as exc:
            self._transport_fault(exc)
        finally:
            self._cancel_scope = None
            self.close()

    async def handle_stateless_http(self, scope: Any, receive: Any, send: Any) -> None:
        """Serve exactly one streamable HTTP request with this session (serverless)."""
        manager = StreamableHTTPSessionManager(
            app=self.server,
            event_store=None,
            json_response=True,
            stateless=True,
        )
        self._open()
        try:
            with anyio.CancelScope() as cancel_scope:
                self._cancel_scope = cancel_scope
                async with manager.run():
                    await manager.handle_request(scope, receive, send)
        except Exception as exc:
            self._transport_fault(exc)
        finally:
            self._cancel_scope = None
            self.close()
