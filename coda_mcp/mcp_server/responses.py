"""MCP tool result helpers.

This module holds the low-level helpers that turn handler outcomes into tool
results:
- JSON serialization of remote payloads
- success/error result formatting
- the error envelope applied to every handler at registration time
"""

from __future__ import annotations

import functools
import json
from typing import Any, Optional

from mcp.types import TextContent

from coda_mcp.logger import Logger, session_logger
from coda_mcp.mcp_server.tool_types import EnvelopedHandler, ToolHandler, ToolResult
from coda_mcp.validation import ToolInput


def _json_serializer(obj: Any) -> Any:
    """Custom JSON serializer for non-standard types."""
    # Handle Pydantic models
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json", by_alias=True)
    # Handle dataclasses and regular objects
    if hasattr(obj, "__dict__"):
        return obj.__dict__
    # Fallback
    return str(obj)


def _text(text: str) -> TextContent:
    return TextContent(type="text", text=text)


def _serialize(data: Any) -> str:
    if isinstance(data, str):
        return data
    return json.dumps(data, default=_json_serializer)


def _success(data: Any) -> ToolResult:
    return ToolResult(content=[_text(_serialize(data))], isError=False)


def _error(message: str) -> ToolResult:
    return ToolResult(content=[_text(message)], isError=True)


def failure_message(operation: str, cause: Any) -> str:
    if isinstance(cause, BaseException):
        cause = str(cause) or type(cause).__name__
    return f"Failed to {operation}: {cause}"


def with_error_envelope(
    operation: str, fn: ToolHandler, logger: Optional[Logger] = None
) -> EnvelopedHandler:
    """Wrap a handler so that it always produces exactly one tool result.

    The handler returns a plain value (text is passed through, anything else
    is serialized as JSON) or raises; any exception becomes an error result
    reading ``Failed to <operation>: <cause>``.
    """
    log: Logger = logger or session_logger

    @functools.wraps(fn)
    async def wrapper(payload: ToolInput) -> ToolResult:
        try:
            data = await fn(payload)
        except Exception as exc:
            log.error(
                "Tool operation failed",
                operation=operation,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return _error(failure_message(operation, exc))
        return _success(data)

    return wrapper
