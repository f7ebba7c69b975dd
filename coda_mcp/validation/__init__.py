"""Tool input validation models."""

from coda_mcp.validation.inputs import (
    DEFAULT_PAGE_LIMIT,
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

__all__ = [
    "DEFAULT_PAGE_LIMIT",
    "ToolInput",
    "ListDocumentsInput",
    "ListPagesInput",
    "CreatePageInput",
    "GetPageContentInput",
    "PageContentInput",
    "DuplicatePageInput",
    "RenamePageInput",
    "PeekPageInput",
    "ResolveLinkInput",
]
