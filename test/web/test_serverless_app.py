"""Tests for the serverless entry point"""

import pytest
from fastapi.testclient import TestClient

from coda_mcp.exceptions import ConfigurationError
from coda_mcp.serverless import MCP_PATH, create_serverless_app
from coda_mcp.web.auth import MISSING_TOKEN
from stub_client import RecordingLogger
from tool_cases import DOC_ID

MCP_HEADERS = {
    "Accept": "application/json, text/event-stream",
    "Content-Type": "application/json",
}


def _rpc(method, params, request_id=1):
    return {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}


@pytest.fixture
def app_client(settings, stub_client):
    return TestClient(create_serverless_app(settings, client=stub_client, logger=RecordingLogger()))


class TestHealth:
    @pytest.mark.parametrize("path", ["/", "/health"])
    def test_health_paths(self, app_client, path):
        response = app_client.get(path)

        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestConfiguration:
    def test_missing_api_token_fails_fast(self, monkeypatch):
        monkeypatch.delenv("CODA_API_TOKEN", raising=False)

        with pytest.raises(ConfigurationError):
            create_serverless_app(logger=RecordingLogger())

    def test_open_endpoint_warns(self, settings, stub_client):
        logger = RecordingLogger()

        create_serverless_app(settings, client=stub_client, logger=logger)

        assert any("MCP_AUTH_TOKEN" in message for message in logger.messages("warning"))


class TestMcpEndpoint:
    def test_token_required_when_configured(self, auth_settings, stub_client):
        client = TestClient(
            create_serverless_app(auth_settings, client=stub_client, logger=RecordingLogger())
        )

        response = client.post(MCP_PATH, json=_rpc("tools/list", {}), headers=MCP_HEADERS)

        assert response.status_code == 401
        assert response.json() == {"error": MISSING_TOKEN}
        assert stub_client.total_calls() == 0

    def test_tools_list(self, app_client):
        response = app_client.post(MCP_PATH, json=_rpc("tools/list", {}), headers=MCP_HEADERS)

        assert response.status_code == 200
        tools = response.json()["result"]["tools"]
        assert len(tools) == 10

    def test_tools_call(self, app_client, stub_client):
        stub_client.pages[(DOC_ID, "Intro")] = "first\nsecond"

        response = app_client.post(
            MCP_PATH,
            json=_rpc(
                "tools/call",
                {
                    "name": "peek_page",
                    "arguments": {"docId": DOC_ID, "pageIdOrName": "Intro", "numLines": 1},
                },
                request_id=7,
            ),
            headers=MCP_HEADERS,
        )

        body = response.json()
        assert body["id"] == 7
        assert body["result"]["isError"] is False
        assert body["result"]["content"][0]["text"] == "first"

    def test_authorized_tools_call(self, auth_settings, stub_client):
        client = TestClient(
            create_serverless_app(auth_settings, client=stub_client, logger=RecordingLogger())
        )

        response = client.post(
            MCP_PATH,
            params={"token": auth_settings.auth_token},
            json=_rpc("tools/call", {"name": "list_documents", "arguments": {}}),
            headers=MCP_HEADERS,
        )

        assert response.status_code == 200
        assert response.json()["result"]["isError"] is False
        assert stub_client.count("list_documents") == 1

    def test_each_request_gets_a_fresh_session(self, settings, stub_client):
        logger = RecordingLogger()
        client = TestClient(create_serverless_app(settings, client=stub_client, logger=logger))

        for request_id in (1, 2):
            client.post(MCP_PATH, json=_rpc("tools/list", {}, request_id), headers=MCP_HEADERS)

        opened = logger.find("Session opened")
        assert len(opened) == 2
        assert opened[0]["session_id"] != opened[1]["session_id"]
