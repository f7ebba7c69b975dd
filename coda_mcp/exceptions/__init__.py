"""Exception classes for coda-mcp.

All exceptions include messages written to be read by the calling assistant,
so that it can decide how to recover.
"""

from coda_mcp.exceptions.base import CodaMcpError, ConfigurationError, RegistryError
from coda_mcp.exceptions.session import DuplicateToolError, TransportFault
from coda_mcp.exceptions.tool import ContentUnavailableError, RemoteCallError, ValidationError

__all__ = [
    "CodaMcpError",
    "ConfigurationError",
    "RegistryError",
    "DuplicateToolError",
    "TransportFault",
    "ValidationError",
    "RemoteCallError",
    "ContentUnavailableError",
]
