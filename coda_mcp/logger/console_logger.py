"""Console logger backed by the standard logging module."""

import logging
import sys
from typing import Any, Union

from .base import Logger

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class ConsoleLogger(Logger):
    """Logger that writes ``message key=value ...`` lines to stderr.

    stdout is reserved for the stdio MCP channel, so this logger must never
    write there.
    """

    def __init__(self, name: str = "coda-mcp", level: Union[int, str] = logging.INFO):
        self._logger = logging.getLogger(name)
        if isinstance(level, str):
            # getLevelName returns "Level X" for unknown names
            level = logging.INFO
        self._logger.setLevel(level)
        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(_FORMAT))
            self._logger.addHandler(handler)
        self._logger.propagate = False

    @staticmethod
    def _format(message: str, kwargs: dict) -> str:
        if not kwargs:
            return message
        context = " ".join(f"{key}={value!r}" for key, value in kwargs.items())
        return f"{message} | {context}"

    def debug(self, message: str, **kwargs: Any) -> None:
        self._logger.debug(self._format(message, kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.info(self._format(message, kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(self._format(message, kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        self._logger.error(self._format(message, kwargs))

    def critical(self, message: str, **kwargs: Any) -> None:
        self._logger.critical(self._format(message, kwargs))
