"""Errors raised while handling a tool invocation.

None of these escape a tool handler: the registry converts them into an
``isError`` tool result.
"""

from typing import Any, Dict, List, Optional

from coda_mcp.exceptions.base import CodaMcpError


class ValidationError(CodaMcpError):
    """Invocation arguments failed the tool's input schema."""

    default_code = "INVALID_ARGUMENTS"

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, details={"validation_errors": errors or []})
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, exc: Any) -> "ValidationError":
        """Build from a pydantic ``ValidationError``, one clause per violated field."""
        errors = exc.errors(include_url=False)
        clauses = []
        for error in errors:
            field = ".".join(str(part) for part in error["loc"]) or "arguments"
            clauses.append(f"{field}: {error['msg']}")
        return cls(
            "Invalid arguments: " + "; ".join(clauses),
            errors=[{"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in errors],
        )


class RemoteCallError(CodaMcpError):
    """The remote document API rejected the call or could not be reached."""

    default_code = "REMOTE_CALL_FAILED"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, details={"status_code": status_code} if status_code else None)
        self.status_code = status_code


class ContentUnavailableError(CodaMcpError):
    """A content export produced no usable result.

    The remote API does not say why, so the message stays generic.
    """

    default_code = "CONTENT_UNAVAILABLE"

    def __init__(self, message: str = "Unknown error occurred"):
        super().__init__(message)
