"""Pytest configuration and fixtures

Provides shared fixtures for all tests: a call-counting stub of the remote
document API, registries and sessions bound to it, and test settings.
"""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from coda_mcp.config import Settings  # noqa: E402
from coda_mcp.mcp_server import ToolSession, build_registry  # noqa: E402
from stub_client import StubDocumentClient  # noqa: E402

TEST_API_TOKEN = "test-coda-api-token"
TEST_AUTH_TOKEN = "test-shared-secret"


@pytest.fixture
def stub_client():
    """Fresh in-memory remote client with call counters."""
    return StubDocumentClient()


@pytest.fixture
def registry(stub_client):
    """Registry with every tool bound to the stub client."""
    return build_registry(stub_client)


@pytest.fixture
def tool_session(registry):
    """Session in CONNECTING state, bound to the stub-backed registry."""
    return ToolSession(registry)


@pytest.fixture
def settings():
    """Settings with auth disabled and OAuth stubs off."""
    return Settings(api_token=TEST_API_TOKEN)


@pytest.fixture
def auth_settings():
    """Settings with the shared-secret query token enabled."""
    return Settings(api_token=TEST_API_TOKEN, auth_token=TEST_AUTH_TOKEN)
