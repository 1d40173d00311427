"""
Port interface for reading documents from the document store.

Implementations: GoogleDriveDocumentStore, InMemoryDocumentStore (adapters/)
"""

from __future__ import annotations

from typing import Iterator, Optional, Protocol, runtime_checkable

from domain.models import DocumentSummary, ExportEndpoint, ExportFormat


@runtime_checkable
class DocumentStorePort(Protocol):
    """Abstract interface for document listing and content access."""

    def has_listing_access(self) -> bool:
        """Probe whether the document listing capability is usable.

        Returns:
            True when ``list_documents`` can be called.
        """
        ...

    def is_scope_accessible(self, scope: str) -> bool:
        """Check whether a named container (folder) can be opened."""
        ...

    def list_documents(self, scope: Optional[str] = None) -> Iterator[DocumentSummary]:
        """Lazily iterate document metadata.

        Iteration order is defined by the store and is stable for one scan.

        Args:
            scope: Optional container restricting the listing.

        Raises:
            ExternalServiceError: If listing fails.
        """
        ...

    def get_document_text(self, document_id: str) -> str:
        """Read the full body text through the native structured API.

        Raises:
            ExternalServiceError: If the document cannot be opened.
        """
        ...

    def fetch_export(
        self,
        document_id: str,
        export_format: ExportFormat,
        endpoint: ExportEndpoint = ExportEndpoint.PRIMARY,
    ) -> str:
        """Fetch an exported rendition of a document.

        Args:
            document_id: Store identifier.
            export_format: ``text`` or ``html``.
            endpoint: Which of the two independent export endpoints to use.

        Raises:
            ExternalServiceError: If the export request fails.
        """
        ...
