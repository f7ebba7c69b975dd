"""Standalone stdio entry point: one MCP session over stdin/stdout."""

import argparse
import asyncio
import sys

from mcp.server.stdio import stdio_server

from coda_mcp.client import CodaClient
from coda_mcp.config import Settings
from coda_mcp.exceptions import ConfigurationError
from coda_mcp.logger import Logger, session_logger
from coda_mcp.mcp_server import ToolSession, build_registry

logger: Logger = session_logger


async def serve_stdio(settings: Settings) -> None:
    async with CodaClient.from_settings(settings, logger=logger) as client:
        session = ToolSession(
            build_registry(client, logger=logger),
            name=settings.server_name,
            version=settings.server_version,
            logger=logger,
        )
        async with stdio_server() as (read_stream, write_stream):
            await session.run(read_stream, write_stream)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="coda-mcp - Coda documents and pages over MCP (stdio transport)"
    )
    parser.parse_args()

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        logger.error("FATAL: Configuration error", error=str(e))
        sys.exit(1)

    try:
        logger.info("Starting MCP server", transport="stdio", **settings.summary())
        asyncio.run(serve_stdio(settings))
        logger.info("MCP server shutdown complete")
    except KeyboardInterrupt:
        logger.info("Shutdown complete")
        sys.exit(0)
    except Exception as e:
        logger.error("Failed to run server", error=str(e), error_type=type(e).__name__)
        sys.exit(1)


if __name__ == "__main__":
    main()
