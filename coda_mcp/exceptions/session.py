"""Session and transport exceptions."""

from coda_mcp.exceptions.base import CodaMcpError, RegistryError


class TransportFault(CodaMcpError):
    """The underlying channel disconnected or delivered a corrupt frame.

    Not reportable to the client; the session is torn down.
    """

    default_code = "TRANSPORT_FAULT"


class DuplicateToolError(RegistryError):
    """Raised when a tool name is registered twice."""

    def __init__(self, name: str):
        super().__init__(f"Tool '{name}' is already registered", details={"tool": name})
        self.name = name
