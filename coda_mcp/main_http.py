"""Long-running HTTP entry point: MCP over SSE plus health and auth stubs."""

import argparse
import dataclasses
import sys

import uvicorn

from coda_mcp.client import CodaClient
from coda_mcp.config import Settings
from coda_mcp.exceptions import ConfigurationError
from coda_mcp.http_server import CodaMcpHttpServer
from coda_mcp.logger import Logger, session_logger

logger: Logger = session_logger


def main() -> None:
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        logger.error("FATAL: Configuration error", error=str(e))
        sys.exit(1)

    parser = argparse.ArgumentParser(
        description="coda-mcp HTTP Server - Coda documents and pages over MCP (SSE transport)"
    )
    parser.add_argument(
        "--host",
        type=str,
        default=settings.host,
        help="Host address to bind to (default: 0.0.0.0, or CODA_MCP_HOST env var)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help="Port number to listen on (default: 3000, or CODA_MCP_PORT / PORT env var)",
    )
    parser.add_argument(
        "--oauth-stubs",
        action="store_true",
        default=settings.oauth_stubs,
        help="Expose OAuth discovery stubs (no-op, for client compatibility only)",
    )
    args = parser.parse_args()

    settings = dataclasses.replace(
        settings, host=args.host, port=args.port, oauth_stubs=args.oauth_stubs
    )
    client = CodaClient.from_settings(settings, logger=logger)
    server = CodaMcpHttpServer(settings, client, logger=logger)

    try:
        logger.info(
            "Starting HTTP server",
            transport="SSE",
            mcp_endpoint=f"http://{args.host}:{args.port}/sse",
            **settings.summary(),
        )
        uvicorn.run(server.app, host=args.host, port=args.port)
        logger.info("HTTP server shutdown complete")
    except KeyboardInterrupt:
        logger.info("HTTP server stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error("Failed to start HTTP server", error=str(e), error_type=type(e).__name__)
        sys.exit(1)


if __name__ == "__main__":
    main()
