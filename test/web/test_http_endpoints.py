"""Tests for the long-running HTTP server: health, channel auth and OAuth stubs"""

import dataclasses
from urllib.parse import parse_qs, urlparse

import anyio
import pytest
from fastapi.testclient import TestClient

from coda_mcp.http_server import CodaMcpHttpServer
from coda_mcp.web import check_query_token
from coda_mcp.web.auth import INVALID_TOKEN, MISSING_TOKEN
from stub_client import RecordingLogger


@pytest.fixture
def http_client(auth_settings, stub_client):
    server = CodaMcpHttpServer(auth_settings, stub_client, logger=RecordingLogger())
    return TestClient(server.app)


@pytest.fixture
def oauth_client(settings, stub_client):
    server = CodaMcpHttpServer(
        dataclasses.replace(settings, oauth_stubs=True), stub_client, logger=RecordingLogger()
    )
    return TestClient(server.app)


class TestQueryToken:
    def test_no_expected_token_allows_everything(self):
        assert check_query_token(None, None) is None
        assert check_query_token("anything", "") is None

    def test_missing_token(self):
        assert check_query_token(None, "secret") == MISSING_TOKEN
        assert check_query_token("", "secret") == MISSING_TOKEN

    def test_wrong_token(self):
        assert check_query_token("guess", "secret") == INVALID_TOKEN

    def test_matching_token(self):
        assert check_query_token("secret", "secret") is None


class TestHealth:
    def test_health_ok(self, http_client, stub_client):
        response = http_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "server": "coda-mcp", "version": "1.5.1"}
        assert stub_client.total_calls() == 0

    def test_health_needs_no_token(self, http_client):
        assert http_client.get("/health").status_code == 200


class TestSseAuth:
    def test_missing_token_rejected(self, http_client):
        response = http_client.get("/sse")

        assert response.status_code == 401
        assert response.json() == {"error": MISSING_TOKEN}

    def test_invalid_token_rejected(self, http_client, auth_settings):
        response = http_client.get("/sse", params={"token": "not-" + auth_settings.auth_token})

        assert response.status_code == 401
        assert response.json() == {"error": INVALID_TOKEN}

    def test_rejection_creates_no_session(self, auth_settings, stub_client):
        server = CodaMcpHttpServer(auth_settings, stub_client, logger=RecordingLogger())

        TestClient(server.app).get("/sse")

        assert server.sessions == {}


class TestStartupWarnings:
    def test_open_endpoints_warn(self, settings, stub_client):
        logger = RecordingLogger()

        CodaMcpHttpServer(settings, stub_client, logger=logger)

        assert any("MCP_AUTH_TOKEN" in message for message in logger.messages("warning"))

    def test_configured_token_does_not_warn(self, auth_settings, stub_client):
        logger = RecordingLogger()

        CodaMcpHttpServer(auth_settings, stub_client, logger=logger)

        assert logger.messages("warning") == []


class TestOAuthStubs:
    def test_disabled_by_default(self, http_client):
        assert http_client.get("/.well-known/oauth-authorization-server").status_code == 404
        assert http_client.post("/register").status_code == 404

    def test_discovery_metadata(self, oauth_client):
        metadata = oauth_client.get("/.well-known/oauth-authorization-server").json()

        assert metadata["issuer"] == "https://testserver"
        assert metadata["token_endpoint"] == "https://testserver/token"
        assert metadata["code_challenge_methods_supported"] == ["S256"]

        resource = oauth_client.get("/.well-known/oauth-protected-resource").json()
        assert resource["authorization_servers"] == ["https://testserver"]

    def test_register_issues_client_id(self, oauth_client):
        response = oauth_client.post("/register", json={"client_name": "assistant"})

        assert response.status_code == 201
        assert response.json()["client_id"].startswith("client_")

    def test_authorize_redirects_with_code_and_state(self, oauth_client):
        response = oauth_client.get(
            "/authorize",
            params={"redirect_uri": "https://app.example.com/cb?x=1", "state": "xyz"},
            follow_redirects=False,
        )

        assert response.status_code == 302
        location = urlparse(response.headers["location"])
        query = parse_qs(location.query)
        assert location.netloc == "app.example.com"
        assert query["state"] == ["xyz"]
        assert query["x"] == ["1"]
        assert query["code"][0].startswith("auth_code_")

    def test_authorize_requires_redirect_and_state(self, oauth_client):
        response = oauth_client.get("/authorize", params={"state": "xyz"}, follow_redirects=False)

        assert response.status_code == 400
        assert response.json() == {"error": "invalid_request"}

    @pytest.mark.parametrize("body_kind", ["data", "json"])
    def test_token_exchange(self, oauth_client, body_kind):
        fields = {"grant_type": "authorization_code", "code": "auth_code_1"}

        response = oauth_client.post("/token", **{body_kind: fields})

        body = response.json()
        assert response.status_code == 200
        assert body["token_type"] == "Bearer"
        assert body["expires_in"] == 3600

    def test_token_json_rejects_other_grants(self, oauth_client):
        response = oauth_client.post("/token", json={"grant_type": "client_credentials"})

        assert response.status_code == 400
        assert response.json() == {"error": "unsupported_grant_type"}

    def test_token_malformed_json(self, oauth_client):
        response = oauth_client.post(
            "/token", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "invalid_request"}

    def test_token_rejects_other_grants(self, oauth_client):
        response = oauth_client.post("/token", data={"grant_type": "password"})

        assert response.status_code == 400
        assert response.json() == {"error": "unsupported_grant_type"}


class TestSseChannel:
    @pytest.mark.asyncio
    async def test_session_registered_while_stream_open(self, settings, stub_client):
        server = CodaMcpHttpServer(settings, stub_client, logger=RecordingLogger())
        endpoint_sent = anyio.Event()
        disconnect = anyio.Event()
        seen = {}

        scope = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": "GET",
            "scheme": "http",
            "path": "/sse",
            "raw_path": b"/sse",
            "root_path": "",
            "query_string": b"",
            "headers": [(b"host", b"testserver"), (b"accept", b"text/event-stream")],
            "client": ("127.0.0.1", 50000),
            "server": ("testserver", 80),
        }

        async def receive():
            await disconnect.wait()
            return {"type": "http.disconnect"}

        async def send(message):
            if message["type"] == "http.response.body" and b"endpoint" in message.get("body", b""):
                seen["body"] = message["body"]
                seen["sessions"] = list(server.sessions)
                endpoint_sent.set()

        with anyio.fail_after(5):
            async with anyio.create_task_group() as tg:
                tg.start_soon(server.serve_sse, scope, receive, send)
                await endpoint_sent.wait()
                disconnect.set()

        assert len(seen["sessions"]) == 1
        assert b"/messages/?session_id=" in seen["body"]
        assert server.sessions == {}
