"""Page tool handlers."""

from __future__ import annotations

import re
from typing import Any, Dict

from coda_mcp.client import DocumentClient
from coda_mcp.exceptions import ContentUnavailableError
from coda_mcp.validation import (
    CreatePageInput,
    DuplicatePageInput,
    GetPageContentInput,
    ListPagesInput,
    PageContentInput,
    PeekPageInput,
    RenamePageInput,
)

# The remote API rejects pages with empty content
EMPTY_PAGE_CONTENT = " "

_LINE_BREAK = re.compile(r"\r?\n")


def _content_update(insertion_mode: str, content: str) -> Dict[str, Any]:
    return {
        "contentUpdate": {
            "insertionMode": insertion_mode,
            "canvasContent": {"format": "markdown", "content": content},
        }
    }


async def read_page_content(client: DocumentClient, doc_id: str, page_id_or_name: str) -> str:
    """Export a page as markdown.

    Raises:
        ContentUnavailableError: If the export produced nothing
    """
    content = await client.get_page_content_export(doc_id, page_id_or_name)
    if content is None:
        raise ContentUnavailableError()
    return content


async def list_pages(client: DocumentClient, payload: ListPagesInput) -> Dict[str, Any]:
    # A continuation token encodes its own page size
    limit = None if payload.next_page_token else payload.limit
    return await client.list_pages(
        payload.doc_id, limit=limit, page_token=payload.next_page_token or None
    )


async def create_page(client: DocumentClient, payload: CreatePageInput) -> Dict[str, Any]:
    return await client.create_page(
        payload.doc_id,
        payload.name,
        content=payload.content if payload.content is not None else EMPTY_PAGE_CONTENT,
        parent_page_id=payload.parent_page_id,
    )


async def get_page_content(client: DocumentClient, payload: GetPageContentInput) -> str:
    return await read_page_content(client, payload.doc_id, payload.page_id_or_name)


async def replace_page_content(client: DocumentClient, payload: PageContentInput) -> Dict[str, Any]:
    return await client.update_page(
        payload.doc_id, payload.page_id_or_name, _content_update("replace", payload.content)
    )


async def append_page_content(client: DocumentClient, payload: PageContentInput) -> Dict[str, Any]:
    return await client.update_page(
        payload.doc_id, payload.page_id_or_name, _content_update("append", payload.content)
    )


async def duplicate_page(client: DocumentClient, payload: DuplicatePageInput) -> Dict[str, Any]:
    """Copy a page's content into a new page.

    Not atomic: the content is read first and the page is created only if the
    read succeeded, so a failure never leaves a partial page behind.
    """
    content = await read_page_content(client, payload.doc_id, payload.page_id_or_name)
    return await client.create_page(
        payload.doc_id, payload.new_name, content=content or EMPTY_PAGE_CONTENT
    )


async def rename_page(client: DocumentClient, payload: RenamePageInput) -> Dict[str, Any]:
    return await client.update_page(
        payload.doc_id, payload.page_id_or_name, {"name": payload.new_name}
    )


async def peek_page(client: DocumentClient, payload: PeekPageInput) -> str:
    content = await read_page_content(client, payload.doc_id, payload.page_id_or_name)
    lines = _LINE_BREAK.split(content)
    return "\n".join(lines[: payload.num_lines])
