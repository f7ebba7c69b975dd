"""Shared-secret query token check for the MCP channel endpoints.

This is a stub, not an authorization server: when ``MCP_AUTH_TOKEN`` is set,
opening a channel requires ``?token=<same value>``. When it is unset the
endpoints are open to anyone who can reach them; entry points log a warning
at startup but do not refuse to run.
"""

from __future__ import annotations

import hmac
from typing import Any, Optional

from starlette.requests import Request
from starlette.responses import JSONResponse

from coda_mcp.logger import Logger, session_logger

MISSING_TOKEN = "Unauthorized: Missing token query parameter"
INVALID_TOKEN = "Unauthorized: Invalid token"


def check_query_token(provided: Optional[str], expected: Optional[str]) -> Optional[str]:
    """Return an error message if the request must be rejected, else None."""
    if not expected:
        return None
    if not provided:
        return MISSING_TOKEN
    if not hmac.compare_digest(provided.encode(), expected.encode()):
        return INVALID_TOKEN
    return None


class QueryTokenGuard:
    """ASGI wrapper that rejects requests lacking the shared-secret token."""

    def __init__(self, app: Any, expected_token: Optional[str], logger: Optional[Logger] = None):
        self.app = app
        self.expected_token = expected_token
        self.logger: Logger = logger or session_logger

    async def __call__(self, scope: Any, receive: Any, send: Any) -> None:
        if scope["type"] == "http":
            request = Request(scope)
            error = check_query_token(request.query_params.get("token"), self.expected_token)
            if error:
                self.logger.warning("Rejected unauthenticated request", path=request.url.path, reason=error)
                await JSONResponse({"error": error}, status_code=401)(scope, receive, send)
                return
        await self.app(scope, receive, send)
