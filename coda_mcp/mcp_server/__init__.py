"""MCP tool server: registry, handlers and per-connection sessions."""

from coda_mcp.mcp_server.registry import ToolDefinition, ToolInvocation, ToolRegistry
from coda_mcp.mcp_server.responses import with_error_envelope
from coda_mcp.mcp_server.routing import TOOLS, build_registry
from coda_mcp.mcp_server.session import SessionState, ToolSession
from coda_mcp.mcp_server.tool_types import ToolResult

__all__ = [
    "TOOLS",
    "SessionState",
    "ToolDefinition",
    "ToolInvocation",
    "ToolRegistry",
    "ToolResult",
    "ToolSession",
    "build_registry",
    "with_error_envelope",
]
