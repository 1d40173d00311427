"""
Port interface for structured document mutation.

Implementations: GoogleDocsWriter, InMemoryDocumentStore (adapters/)
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from domain.models import DocumentBlock


@runtime_checkable
class DocumentWriterPort(Protocol):
    """Abstract interface for reading and inserting typed document blocks."""

    def read_blocks(self, document_id: str) -> List[DocumentBlock]:
        """Return the document body as an ordered list of typed blocks.

        Raises:
            ExternalServiceError: If the document cannot be read.
        """
        ...

    def insert_blocks(
        self,
        document_id: str,
        index: Optional[int],
        blocks: List[DocumentBlock],
    ) -> None:
        """Insert blocks before block position ``index``.

        Args:
            document_id: Target document.
            index: Block position to insert before; ``None`` appends.
            blocks: Blocks to insert, in order.

        Raises:
            ExternalServiceError: If the update fails.
        """
        ...
