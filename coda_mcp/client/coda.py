"""httpx-based client for the Coda REST API (v1)."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from coda_mcp.client.base import DocumentClient
from coda_mcp.config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_EXPORT_POLL_ATTEMPTS,
    DEFAULT_EXPORT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    Settings,
)
from coda_mcp.exceptions import RemoteCallError
from coda_mcp.logger import Logger, session_logger


def _segment(value: str) -> str:
    # Page names may contain spaces and slashes
    return quote(value, safe="")


def _describe_http_error(response: httpx.Response) -> str:
    """Render a remote error response as ``HTTP <status>: <reason> - <message>``."""
    description = f"HTTP {response.status_code}: {response.reason_phrase}"
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        description += f" - {body['message']}"
    elif response.text:
        description += f" - {response.text[:200]}"
    return description


class CodaClient(DocumentClient):
    """Client for the Coda REST API.

    One instance is created per process with a fixed credential and shared by
    every session. Every call is bounded by ``timeout``.
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        export_poll_interval: float = DEFAULT_EXPORT_POLL_INTERVAL,
        export_poll_attempts: int = DEFAULT_EXPORT_POLL_ATTEMPTS,
        logger: Optional[Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.export_poll_interval = export_poll_interval
        self.export_poll_attempts = export_poll_attempts
        self.logger: Logger = logger or session_logger
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {api_token}"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        logger: Optional[Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "CodaClient":
        return cls(
            api_token=settings.api_token,
            base_url=settings.api_base_url,
            timeout=settings.request_timeout,
            export_poll_interval=settings.export_poll_interval,
            export_poll_attempts=settings.export_poll_attempts,
            logger=logger,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "CodaClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _send(self, request: httpx.Request) -> httpx.Response:
        try:
            response = await self._http.send(request)
        except httpx.TimeoutException as exc:
            raise RemoteCallError(f"Request to {request.url.path} timed out") from exc
        except httpx.HTTPError as exc:
            raise RemoteCallError(f"{type(exc).__name__}: {exc}") from exc
        if response.is_error:
            self.logger.warning(
                "Remote API error",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
            )
            raise RemoteCallError(_describe_http_error(response), status_code=response.status_code)
        return response

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        if params:
            params = {key: value for key, value in params.items() if value is not None}
        request = self._http.build_request(method, path, params=params or None, json=json)
        response = await self._send(request)
        if not response.content:
            return None
        return response.json()

    def _page_path(self, doc_id: str, page_id_or_name: str) -> str:
        return f"/docs/{_segment(doc_id)}/pages/{_segment(page_id_or_name)}"

    async def list_documents(self, query: Optional[str] = None) -> Dict[str, Any]:
        return await self._request("GET", "/docs", params={"query": query})

    async def list_pages(
        self, doc_id: str, limit: Optional[int] = None, page_token: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self._request(
            "GET",
            f"/docs/{_segment(doc_id)}/pages",
            params={"limit": limit, "pageToken": page_token},
        )

    async def create_page(
        self,
        doc_id: str,
        name: str,
        content: Optional[str] = None,
        parent_page_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "name": name,
            "pageContent": {
                "type": "canvas",
                "canvasContent": {"format": "markdown", "content": content},
            },
        }
        if parent_page_id is not None:
            body["parentPageId"] = parent_page_id
        return await self._request("POST", f"/docs/{_segment(doc_id)}/pages", json=body)

    async def get_page(self, doc_id: str, page_id_or_name: str) -> Dict[str, Any]:
        return await self._request("GET", self._page_path(doc_id, page_id_or_name))

    async def get_page_content_export(self, doc_id: str, page_id_or_name: str) -> Optional[str]:
        """Run a markdown export job for the page and return its content.

        The export is asynchronous on the remote side: submit, poll the status
        until it completes or fails, then download the result from the
        pre-signed link. Returns None when the export fails, has no link, or
        does not finish within the polling budget.
        """
        page_path = self._page_path(doc_id, page_id_or_name)
        job = await self._request("POST", f"{page_path}/export", json={"outputFormat": "markdown"})
        request_id = (job or {}).get("id")
        if not request_id:
            self.logger.warning("Export request returned no id", doc_id=doc_id, page=page_id_or_name)
            return None

        for attempt in range(1, self.export_poll_attempts + 1):
            status = await self._request("GET", f"{page_path}/export/{_segment(request_id)}") or {}
            state = status.get("status")
            if state == "complete":
                download_link = status.get("downloadLink")
                if not download_link:
                    return None
                return await self._download(download_link)
            if state == "failed":
                self.logger.warning(
                    "Page export failed",
                    doc_id=doc_id,
                    page=page_id_or_name,
                    error=status.get("error"),
                )
                return None
            self.logger.debug("Page export pending", request_id=request_id, attempt=attempt)
            await asyncio.sleep(self.export_poll_interval)

        self.logger.warning(
            "Page export did not complete",
            doc_id=doc_id,
            page=page_id_or_name,
            attempts=self.export_poll_attempts,
        )
        return None

    async def _download(self, url: str) -> str:
        request = self._http.build_request("GET", url)
        # Pre-signed storage URL; the API credential must not be forwarded
        request.headers.pop("Authorization", None)
        response = await self._send(request)
        return response.text

    async def update_page(
        self, doc_id: str, page_id_or_name: str, patch: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self._request("PUT", self._page_path(doc_id, page_id_or_name), json=patch)

    async def resolve_link(self, url: str) -> Dict[str, Any]:
        return await self._request("GET", "/resolveBrowserLink", params={"url": url})
