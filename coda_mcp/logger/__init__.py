"""
Logger module for coda-mcp

This module provides a small structured logging interface so that callers can
attach context as keyword arguments and swap in their own implementation.

Usage:
    from coda_mcp.logger import Logger, session_logger

    logger: Logger = session_logger
    logger.info("Tool invocation started", tool="list_pages")

    # Or implement your own
    class MyCustomLogger(Logger):
        def info(self, message: str, **kwargs):
            # Your custom implementation
            pass
"""

import logging
import os

from .base import Logger
from .console_logger import ConsoleLogger

# Shared logger instance for modules that just need basic console logging
session_logger: Logger = ConsoleLogger(
    level=logging.getLevelName(os.environ.get("CODA_MCP_LOG_LEVEL", "INFO").upper())
)

__all__ = [
    "Logger",
    "ConsoleLogger",
    "session_logger",
]
