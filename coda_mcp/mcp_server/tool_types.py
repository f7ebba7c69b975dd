from __future__ import annotations

from typing import Any, Awaitable, Callable

from mcp.types import CallToolResult

from coda_mcp.validation import ToolInput

# One text item plus the isError flag
ToolResult = CallToolResult
ToolHandler = Callable[[ToolInput], Awaitable[Any]]
EnvelopedHandler = Callable[[ToolInput], Awaitable[ToolResult]]
