"""
In-memory workspace adapters for local development and tests.

Implements CalendarPort, DocumentStorePort, DocumentWriterPort, MailerPort and
FlagStorePort with plain Python containers.

NOT for production — no persistence across restarts.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from core_transcripts.formatting.email_body import EmailMessage
from domain.models import (
    DocumentBlock,
    DocumentSummary,
    ExportEndpoint,
    ExportFormat,
    MeetingDescriptor,
)
from shared_utils.constants import LogScope
from shared_utils.error_handler import ExternalServiceError
from shared_utils.logging_utils import get_scoped_logger


logger = get_scoped_logger(LogScope.ADAPTER)


class InMemoryCalendarAdapter:
    """Calendar holding a fixed list of events."""

    def __init__(self, events: Optional[Iterable[MeetingDescriptor]] = None) -> None:
        self._events: List[MeetingDescriptor] = list(events or [])
        self.requested_windows: List[Tuple[datetime, datetime]] = []

    def add_event(self, event: MeetingDescriptor) -> None:
        self._events.append(event)

    def list_events(self, start: datetime, end: datetime) -> List[MeetingDescriptor]:
        self.requested_windows.append((start, end))
        events = [e for e in self._events if start <= e.start_time <= end]
        return sorted(events, key=lambda e: e.start_time)


class InMemoryDocumentStore:
    """Document store and writer over dicts.

    Listing order is insertion order. ``yielded_ids`` records every document
    handed out by ``list_documents``.
    """

    def __init__(self, listing_available: bool = True) -> None:
        self.listing_available = listing_available
        self._summaries: Dict[str, DocumentSummary] = {}
        self._parents: Dict[str, Optional[str]] = {}
        self._folders: Set[str] = set()
        self._native: Dict[str, str] = {}
        self._exports: Dict[Tuple[str, ExportEndpoint, ExportFormat], str] = {}
        self._blocks: Dict[str, List[DocumentBlock]] = {}
        self.yielded_ids: List[str] = []

    # ------------------------------------------------------------------
    # Seeding helpers
    # ------------------------------------------------------------------

    def add_folder(self, folder_id: str) -> None:
        self._folders.add(folder_id)

    def add_document(
        self,
        document_id: str,
        name: str,
        last_modified: datetime,
        text: Optional[str] = None,
        folder_id: Optional[str] = None,
    ) -> DocumentSummary:
        summary = DocumentSummary(id=document_id, name=name, last_modified=last_modified)
        self._summaries[document_id] = summary
        self._parents[document_id] = folder_id
        if text is not None:
            self._native[document_id] = text
        return summary

    def set_text(self, document_id: str, text: str) -> None:
        self._native[document_id] = text

    def set_export(
        self,
        document_id: str,
        export_format: ExportFormat,
        content: str,
        endpoint: ExportEndpoint = ExportEndpoint.PRIMARY,
    ) -> None:
        self._exports[(document_id, endpoint, export_format)] = content

    def set_blocks(self, document_id: str, blocks: List[DocumentBlock]) -> None:
        self._blocks[document_id] = list(blocks)

    # ------------------------------------------------------------------
    # DocumentStorePort implementation
    # ------------------------------------------------------------------

    def has_listing_access(self) -> bool:
        return self.listing_available

    def is_scope_accessible(self, scope: str) -> bool:
        return scope in self._folders

    def list_documents(self, scope: Optional[str] = None) -> Iterator[DocumentSummary]:
        if not self.listing_available:
            raise ExternalServiceError("InMemoryDocumentStore", "listing disabled")
        for document_id, summary in list(self._summaries.items()):
            if scope and self._parents.get(document_id) != scope:
                continue
            self.yielded_ids.append(document_id)
            yield summary

    def get_document_text(self, document_id: str) -> str:
        if document_id not in self._native:
            raise ExternalServiceError("InMemoryDocumentStore", f"no native text for {document_id}")
        return self._native[document_id]

    def fetch_export(
        self,
        document_id: str,
        export_format: ExportFormat,
        endpoint: ExportEndpoint = ExportEndpoint.PRIMARY,
    ) -> str:
        key = (document_id, endpoint, export_format)
        if key not in self._exports:
            raise ExternalServiceError("InMemoryDocumentStore", f"no {export_format.value} export for {document_id}")
        return self._exports[key]

    # ------------------------------------------------------------------
    # DocumentWriterPort implementation
    # ------------------------------------------------------------------

    def read_blocks(self, document_id: str) -> List[DocumentBlock]:
        return list(self._blocks.get(document_id, []))

    def insert_blocks(
        self,
        document_id: str,
        index: Optional[int],
        blocks: List[DocumentBlock],
    ) -> None:
        body = self._blocks.setdefault(document_id, [])
        position = len(body) if index is None else min(index, len(body))
        body[position:position] = list(blocks)
        logger.info("inmemory_blocks_inserted", document_id=document_id, index=position, blocks=len(blocks))


class InMemoryMailer:
    """Collects sent messages in ``sent``."""

    def __init__(self) -> None:
        self.sent: List[EmailMessage] = []

    def send_email(
        self,
        to: List[str],
        subject: str,
        plain_body: str,
        html_body: Optional[str] = None,
    ) -> None:
        self.sent.append(EmailMessage(to=list(to), subject=subject, plain_body=plain_body, html_body=html_body))


class InMemoryFlagStore:
    """Dict-backed FlagStorePort."""

    def __init__(self) -> None:
        self._flags: Dict[str, Set[str]] = {}

    def get_flag(self, key: str) -> Set[str]:
        return set(self._flags.get(key, set()))

    def set_flag(self, key: str, values: Iterable[str]) -> None:
        self._flags[key] = set(values)

    def delete_flag(self, key: str) -> None:
        self._flags.pop(key, None)
