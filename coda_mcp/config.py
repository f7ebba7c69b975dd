"""Centralized configuration for the coda-mcp service.

Configuration is read from the environment once, at startup, into an
immutable ``Settings`` instance which is then passed explicitly to the remote
client and the entry points.

# =============================================================================
# ENVIRONMENT VARIABLES REFERENCE
# =============================================================================
#
# Remote API
# ----------
# CODA_API_TOKEN: Bearer credential for the Coda REST API (required)
# CODA_API_BASE_URL: Base URL of the REST API (default: https://coda.io/apis/v1)
# CODA_REQUEST_TIMEOUT: Seconds allowed per remote call (default: 30)
# CODA_EXPORT_POLL_INTERVAL: Seconds between page export status polls (default: 1.0)
# CODA_EXPORT_POLL_ATTEMPTS: Maximum page export status polls (default: 30)
#
# HTTP Entry Points
# -----------------
# CODA_MCP_HOST: Host address to bind to (default: 0.0.0.0)
# CODA_MCP_PORT: Port to listen on (default: PORT, then 3000)
# MCP_AUTH_TOKEN: Shared secret expected in the ?token= query parameter.
#   When unset, the MCP endpoints are open to anyone who can reach them.
# CODA_MCP_OAUTH_STUBS: Set to 1/true to expose the OAuth discovery stubs
#
# Development
# -----------
# CODA_MCP_LOG_LEVEL: Logging verbosity (default: INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from coda_mcp.exceptions import ConfigurationError

SERVER_NAME = "coda-mcp"
SERVER_VERSION = "1.5.1"

DEFAULT_API_BASE_URL = "https://coda.io/apis/v1"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_EXPORT_POLL_INTERVAL = 1.0
DEFAULT_EXPORT_POLL_ATTEMPTS = 30

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got '{raw}'") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got '{raw}'")
    return value


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got '{raw}'")
    return value


@dataclass(frozen=True)
class Settings:
    """Process-wide, read-only configuration."""

    api_token: str
    api_base_url: str = DEFAULT_API_BASE_URL
    auth_token: Optional[str] = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    export_poll_interval: float = DEFAULT_EXPORT_POLL_INTERVAL
    export_poll_attempts: int = DEFAULT_EXPORT_POLL_ATTEMPTS
    oauth_stubs: bool = False
    server_name: str = SERVER_NAME
    server_version: str = SERVER_VERSION

    @property
    def auth_enabled(self) -> bool:
        return bool(self.auth_token)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ConfigurationError: If CODA_API_TOKEN is missing or a numeric
                variable cannot be parsed.
        """
        env = os.environ if env is None else env

        api_token = (env.get("CODA_API_TOKEN") or "").strip()
        if not api_token:
            raise ConfigurationError(
                "CODA_API_TOKEN is not set. Create an API token in your Coda account "
                "settings and export it before starting the server."
            )

        port_name = "CODA_MCP_PORT" if env.get("CODA_MCP_PORT") else "PORT"

        return cls(
            api_token=api_token,
            api_base_url=(env.get("CODA_API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/"),
            auth_token=env.get("MCP_AUTH_TOKEN") or None,
            host=env.get("CODA_MCP_HOST") or DEFAULT_HOST,
            port=_read_int(env, port_name, DEFAULT_PORT),
            request_timeout=_read_float(env, "CODA_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
            export_poll_interval=_read_float(
                env, "CODA_EXPORT_POLL_INTERVAL", DEFAULT_EXPORT_POLL_INTERVAL
            ),
            export_poll_attempts=_read_int(
                env, "CODA_EXPORT_POLL_ATTEMPTS", DEFAULT_EXPORT_POLL_ATTEMPTS
            ),
            oauth_stubs=(env.get("CODA_MCP_OAUTH_STUBS") or "").lower() in _TRUE_VALUES,
        )

    def summary(self) -> dict:
        """Configuration summary safe to log (no secrets)."""
        return {
            "api_base_url": self.api_base_url,
            "auth_enabled": self.auth_enabled,
            "host": self.host,
            "port": self.port,
            "request_timeout": self.request_timeout,
            "export_poll_interval": self.export_poll_interval,
            "export_poll_attempts": self.export_poll_attempts,
            "oauth_stubs": self.oauth_stubs,
        }
