"""
OAuth discovery stubs.

Some MCP clients probe OAuth metadata (RFC 9728 / RFC 8414) and dynamic
client registration (RFC 7591) before connecting. These endpoints exist only
so such clients can complete their handshake:

- nothing is stored or verified; codes and tokens are random opaque strings
- the MCP endpoints never consult them

They are disabled unless explicitly enabled (``--oauth-stubs`` or
``CODA_MCP_OAUTH_STUBS=1``). Real access control is the shared-secret query
token (see ``coda_mcp.web.auth``).
"""

import secrets
import time
from typing import Any, Dict, Optional
from urllib.parse import urlencode, urlparse, urlunparse, parse_qsl

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse

ACCESS_TOKEN_TTL_SECONDS = 3600


def _opaque(prefix: str) -> str:
    return f"{prefix}_{int(time.time())}_{secrets.token_urlsafe(12)}"


def _base_url(request: Request) -> str:
    return f"https://{request.headers.get('host', request.url.netloc)}"


async def _read_token_request(request: Request) -> Optional[Dict[str, Any]]:
    """Token request fields from a JSON or form body; None if the body is malformed."""
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() == "application/json":
        try:
            body = await request.json()
        except ValueError:
            return None
        return body if isinstance(body, dict) else None
    form = await request.form()
    return dict(form)


def create_oauth_stub_router() -> APIRouter:
    router = APIRouter(tags=["OAuth Stubs"])

    @router.get("/.well-known/oauth-protected-resource")
    async def protected_resource_metadata(request: Request) -> dict:
        base_url = _base_url(request)
        return {"resource": base_url, "authorization_servers": [base_url]}

    @router.get("/.well-known/oauth-authorization-server")
    async def authorization_server_metadata(request: Request) -> dict:
        base_url = _base_url(request)
        return {
            "issuer": base_url,
            "authorization_endpoint": f"{base_url}/authorize",
            "token_endpoint": f"{base_url}/token",
            "registration_endpoint": f"{base_url}/register",
            "response_types_supported": ["code"],
            "grant_types_supported": ["authorization_code", "refresh_token"],
            "code_challenge_methods_supported": ["S256"],
        }

    @router.post("/register", status_code=201)
    async def register_client() -> dict:
        return {"client_id": _opaque("client"), "client_id_issued_at": int(time.time())}

    @router.get("/authorize")
    async def authorize(
        redirect_uri: Optional[str] = None,
        state: Optional[str] = None,
    ):
        # Auto-approves; PKCE challenge is not recorded
        if not redirect_uri or not state:
            return JSONResponse({"error": "invalid_request"}, status_code=400)
        parts = urlparse(redirect_uri)
        query = parse_qsl(parts.query) + [("code", _opaque("auth_code")), ("state", state)]
        return RedirectResponse(urlunparse(parts._replace(query=urlencode(query))), status_code=302)

    @router.post("/token")
    async def token(request: Request):
        # Clients send either JSON or form-encoded bodies
        fields = await _read_token_request(request)
        if fields is None:
            return JSONResponse({"error": "invalid_request"}, status_code=400)
        grant_type = fields.get("grant_type")
        code = fields.get("code")
        if grant_type != "authorization_code":
            return JSONResponse({"error": "unsupported_grant_type"}, status_code=400)
        if not code:
            return JSONResponse({"error": "invalid_request"}, status_code=400)
        return {
            "access_token": _opaque("access"),
            "token_type": "Bearer",
            "expires_in": ACCESS_TOKEN_TTL_SECONDS,
            "refresh_token": _opaque("refresh"),
        }

    return router
