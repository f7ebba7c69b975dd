"""HTTP glue shared by the long-running and serverless entry points."""

from coda_mcp.web.auth import QueryTokenGuard, check_query_token
from coda_mcp.web.health import HealthResponse, create_health_router
from coda_mcp.web.oauth_stubs import create_oauth_stub_router

__all__ = [
    "HealthResponse",
    "QueryTokenGuard",
    "check_query_token",
    "create_health_router",
    "create_oauth_stub_router",
]
