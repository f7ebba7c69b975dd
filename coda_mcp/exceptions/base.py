"""Base exception for coda-mcp.

Every domain error carries a machine-readable ``code``, a human-readable
``message`` and optional ``details`` so that callers (and calling assistants)
can decide how to recover.
"""

from typing import Any, Dict, Optional


class CodaMcpError(Exception):
    """Root of the coda-mcp exception hierarchy."""

    default_code = "CODA_MCP_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {"error_code": self.code, "message": self.message, "details": self.details}


class ConfigurationError(CodaMcpError):
    """Raised when required configuration is missing or malformed. Fatal at startup."""

    default_code = "CONFIGURATION_ERROR"


class RegistryError(CodaMcpError):
    """Raised when the tool registry is used incorrectly."""

    default_code = "REGISTRY_ERROR"
