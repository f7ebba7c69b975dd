"""Document-level tool handlers."""

from __future__ import annotations

from typing import Any, Dict

from coda_mcp.client import DocumentClient
from coda_mcp.validation import ListDocumentsInput, ResolveLinkInput


async def list_documents(client: DocumentClient, payload: ListDocumentsInput) -> Dict[str, Any]:
    return await client.list_documents(query=payload.query)


async def resolve_link(client: DocumentClient, payload: ResolveLinkInput) -> Dict[str, Any]:
    """Resolve a browser URL to the ids of the doc/page/table it points at."""
    return await client.resolve_link(payload.url)
