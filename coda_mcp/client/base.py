"""Base interface for the remote document API client

Defines the operations the tool handlers need from the remote document
service. Production code uses ``CodaClient``; tests substitute stubs.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class DocumentClient(ABC):
    """Abstract base class for remote document API clients"""

    @abstractmethod
    async def list_documents(self, query: Optional[str] = None) -> Dict[str, Any]:
        """
        List documents visible to the credential

        Args:
            query: Optional search filter applied by the remote service

        Returns:
            Raw document list payload

        Raises:
            RemoteCallError: If the remote call fails
        """

    @abstractmethod
    async def list_pages(
        self, doc_id: str, limit: Optional[int] = None, page_token: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        List pages of a document

        Args:
            doc_id: Document identifier
            limit: Maximum number of pages to return (remote default when None)
            page_token: Continuation token from a previous listing

        Returns:
            Raw page list payload, including ``nextPageToken`` when more pages exist
        """

    @abstractmethod
    async def create_page(
        self,
        doc_id: str,
        name: str,
        content: Optional[str] = None,
        parent_page_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a canvas page with markdown content

        Returns:
            Remote acknowledgement payload (contains the new page id)
        """

    @abstractmethod
    async def get_page(self, doc_id: str, page_id_or_name: str) -> Dict[str, Any]:
        """Return page metadata."""

    @abstractmethod
    async def get_page_content_export(self, doc_id: str, page_id_or_name: str) -> Optional[str]:
        """
        Export a page's content as markdown

        Returns:
            The markdown text, or None if the export failed or never completed
        """

    @abstractmethod
    async def update_page(
        self, doc_id: str, page_id_or_name: str, patch: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Update page metadata and/or content

        Args:
            doc_id: Document identifier
            page_id_or_name: Page identifier or name
            patch: Request body, e.g. ``{"name": ...}`` or ``{"contentUpdate": {...}}``
        """

    @abstractmethod
    async def resolve_link(self, url: str) -> Dict[str, Any]:
        """Resolve a browser URL to the identifiers of the object it points at."""
