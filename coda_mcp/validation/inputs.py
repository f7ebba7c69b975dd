"""Input models for MCP server tools.

Field names are snake_case in Python and camelCase on the wire; the JSON
schema advertised to clients is generated from these models.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PAGE_LIMIT = 25


class ToolInput(BaseModel):
    """Common configuration for tool inputs."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PageInput(ToolInput):
    """Base for tools that address a single page."""

    doc_id: str = Field(alias="docId", description="The ID of the document that contains the page")
    page_id_or_name: str = Field(alias="pageIdOrName", description="The ID or name of the page")


class ListDocumentsInput(ToolInput):
    """Input for list_documents.

    Args:
        query: Optional search filter for document names
    """

    query: Optional[str] = Field(
        default=None, description="The query to search for documents by - optional"
    )


class ListPagesInput(ToolInput):
    """Input for list_pages.

    Args:
        doc_id: Document to list pages from
        limit: Page size (positive integer); ignored when next_page_token is given
        next_page_token: Continuation token from a previous call
    """

    doc_id: str = Field(alias="docId", description="The ID of the document to list pages from")
    limit: int = Field(
        default=DEFAULT_PAGE_LIMIT,
        gt=0,
        strict=True,
        description="The number of pages to return - optional, defaults to 25",
    )
    next_page_token: Optional[str] = Field(
        default=None,
        alias="nextPageToken",
        description="The token needed to get the next page of results - optional",
    )


class CreatePageInput(ToolInput):
    """Input for create_page."""

    doc_id: str = Field(alias="docId", description="The ID of the document to create the page in")
    name: str = Field(description="The name of the page to create")
    content: Optional[str] = Field(
        default=None, description="The markdown content of the page to create - optional"
    )
    parent_page_id: Optional[str] = Field(
        default=None,
        alias="parentPageId",
        description="The ID of the parent page to create this page under - optional",
    )


class GetPageContentInput(PageInput):
    """Input for get_page_content."""


class PageContentInput(PageInput):
    """Input for replace_page_content and append_page_content."""

    content: str = Field(description="The markdown content to write")


class DuplicatePageInput(PageInput):
    """Input for duplicate_page."""

    new_name: str = Field(alias="newName", description="The name of the new page")


class RenamePageInput(PageInput):
    """Input for rename_page."""

    new_name: str = Field(alias="newName", description="The new name of the page")


class PeekPageInput(PageInput):
    """Input for peek_page.

    Args:
        num_lines: Number of leading lines to return (positive integer)
    """

    num_lines: int = Field(
        alias="numLines",
        gt=0,
        strict=True,
        description="The number of lines to return from the start of the page",
    )


class ResolveLinkInput(ToolInput):
    """Input for resolve_link."""

    url: str = Field(description="The browser URL of a Coda object to resolve")
