"""coda-mcp: Coda documents and pages as Model Context Protocol tools."""

from coda_mcp.config import SERVER_NAME, SERVER_VERSION

__version__ = SERVER_VERSION

__all__ = ["SERVER_NAME", "SERVER_VERSION", "__version__"]
