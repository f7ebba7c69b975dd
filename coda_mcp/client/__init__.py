"""Remote document API client."""

from coda_mcp.client.base import DocumentClient
from coda_mcp.client.coda import CodaClient

__all__ = ["DocumentClient", "CodaClient"]
