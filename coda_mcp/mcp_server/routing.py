"""Tool catalog and registry construction for the MCP server."""

from __future__ import annotations

import functools
from typing import List, NamedTuple, Optional, Type

from coda_mcp.client import DocumentClient
from coda_mcp.logger import Logger
from coda_mcp.mcp_server.registry import ToolRegistry
from coda_mcp.mcp_server.tool_types import ToolHandler
from coda_mcp.mcp_server.tools import documents, pages
from coda_mcp.validation import (
    CreatePageInput,
    DuplicatePageInput,
    GetPageContentInput,
    ListDocumentsInput,
    ListPagesInput,
    PageContentInput,
    PeekPageInput,
    RenamePageInput,
    ResolveLinkInput,
    ToolInput,
)


class ToolSpec(NamedTuple):
    name: str
    operation: str
    description: str
    input_model: Type[ToolInput]
    handler: ToolHandler


TOOLS: List[ToolSpec] = [
    ToolSpec(
        "list_documents",
        "list documents",
        "List or search available documents. Returns document ids, names and links; "
        "use a document id with the page tools.",
        ListDocumentsInput,
        documents.list_documents,
    ),
    ToolSpec(
        "list_pages",
        "list pages",
        "List pages in a document with pagination. When the response contains a "
        "nextPageToken, call again with that token to get the next page of results "
        "(limit is ignored when a token is given).",
        ListPagesInput,
        pages.list_pages,
    ),
    ToolSpec(
        "create_page",
        "create page",
        "Create a page in a document, optionally under a parent page, with optional "
        "markdown content.",
        CreatePageInput,
        pages.create_page,
    ),
    ToolSpec(
        "get_page_content",
        "get page content",
        "Get the content of a page as markdown.",
        GetPageContentInput,
        pages.get_page_content,
    ),
    ToolSpec(
        "replace_page_content",
        "replace page content",
        "Replace the content of a page with new markdown content. The previous "
        "content is overwritten.",
        PageContentInput,
        pages.replace_page_content,
    ),
    ToolSpec(
        "append_page_content",
        "append page content",
        "Append new markdown content to the end of a page.",
        PageContentInput,
        pages.append_page_content,
    ),
    ToolSpec(
        "duplicate_page",
        "duplicate page",
        "Duplicate a page: copies its markdown content into a new page with the given name.",
        DuplicatePageInput,
        pages.duplicate_page,
    ),
    ToolSpec(
        "rename_page",
        "rename page",
        "Rename a page. The page content is not changed.",
        RenamePageInput,
        pages.rename_page,
    ),
    ToolSpec(
        "peek_page",
        "peek page",
        "Peek at the beginning of a page: returns only its first numLines lines of markdown.",
        PeekPageInput,
        pages.peek_page,
    ),
    ToolSpec(
        "resolve_link",
        "resolve link",
        "Resolve metadata given a browser link to a Coda object (doc, page, table...).",
        ResolveLinkInput,
        documents.resolve_link,
    ),
]


def build_registry(client: DocumentClient, logger: Optional[Logger] = None) -> ToolRegistry:
    """Build a fresh registry with every tool bound to ``client``.

    Called once per session so that sessions never share a registry.
    """
    registry = ToolRegistry(logger=logger)
    for spec in TOOLS:
        registry.register(
            spec.name,
            spec.description,
            spec.input_model,
            functools.partial(spec.handler, client),
            operation=spec.operation,
        )
    return registry
