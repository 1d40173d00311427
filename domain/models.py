"""
Pure domain models for the pod meeting digest.

These models contain NO Google or AWS dependencies. They represent the core
concepts that flow through ports, the matching core, and services.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared_utils.constants import Defaults, TranscriptPatterns


def _as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so calendar and store times compare."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class MatchMode(str, Enum):
    """Secondary name-pattern policy for transcript matching."""

    STRICT = "strict"
    FLEXIBLE = "flexible"


class ExportFormat(str, Enum):
    """Export formats offered by the document store."""

    TEXT = "text"
    HTML = "html"


class ExportEndpoint(str, Enum):
    """Independent export endpoints of the document store."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


# ---------------------------------------------------------------------------
# Calendar / document store records
# ---------------------------------------------------------------------------


class MeetingDescriptor(BaseModel):
    """A calendar event, immutable once read from the calendar."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    start_time: datetime
    end_time: datetime
    description: str = ""
    attendee_emails: Tuple[str, ...] = ()

    @field_validator("start_time", "end_time")
    @classmethod
    def _ensure_aware(cls, v: datetime) -> datetime:
        return _as_utc(v)

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Optional[str]) -> str:
        return v or ""


class DocumentSummary(BaseModel):
    """Lightweight document metadata used for matching (no content)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    last_modified: datetime

    @field_validator("last_modified")
    @classmethod
    def _ensure_aware(cls, v: datetime) -> datetime:
        return _as_utc(v)


class MatchCandidate(BaseModel):
    """A document that passed the name filters and lies inside the search window."""

    model_config = ConfigDict(frozen=True)

    document: DocumentSummary
    time_delta_ms: int = Field(ge=0)

    @classmethod
    def for_meeting(cls, document: DocumentSummary, meeting: MeetingDescriptor) -> "MatchCandidate":
        """Build a candidate with ``|lastModified - startTime|`` in milliseconds."""
        delta = abs(document.last_modified - meeting.start_time)
        return cls(document=document, time_delta_ms=delta // timedelta(milliseconds=1))

    @property
    def hours_difference(self) -> float:
        return self.time_delta_ms / 3_600_000


class CandidateScan(BaseModel):
    """Outcome of one pass over the document listing for a meeting.

    ``candidates`` keeps encounter order, so the first minimum wins ties.
    """

    meeting_id: str
    scope: Optional[str] = None
    window_start: datetime
    window_end: datetime
    candidates: List[MatchCandidate] = []
    title_matches: List[str] = []
    documents_processed: int = 0
    early_exit: bool = False
    cap_reached: bool = False

    def best(self) -> Optional[MatchCandidate]:
        """Candidate with the smallest time delta; first encountered on ties."""
        if not self.candidates:
            return None
        return min(self.candidates, key=lambda c: c.time_delta_ms)


class MeetingRecord(BaseModel):
    """A relevant, unprocessed meeting paired with its resolved transcript."""

    model_config = ConfigDict(frozen=True)

    meeting: MeetingDescriptor
    transcript: str

    @property
    def id(self) -> str:
        return self.meeting.id

    @property
    def title(self) -> str:
        return self.meeting.title


# ---------------------------------------------------------------------------
# Structured document content
# ---------------------------------------------------------------------------


class BlockKind(str, Enum):
    """Typed blocks of a target document body."""

    HEADING_2 = "HEADING_2"
    HEADING_3 = "HEADING_3"
    HEADING_4 = "HEADING_4"
    PARAGRAPH = "PARAGRAPH"
    BULLET = "BULLET"
    HORIZONTAL_RULE = "HORIZONTAL_RULE"


class DocumentBlock(BaseModel):
    """One block of a document body: a heading, paragraph, bullet or rule."""

    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    text: str = ""

    @property
    def is_heading(self) -> bool:
        return self.kind in (BlockKind.HEADING_2, BlockKind.HEADING_3, BlockKind.HEADING_4)


# ---------------------------------------------------------------------------
# Run reporting
# ---------------------------------------------------------------------------


class ProcessingFailure(BaseModel):
    """A meeting whose processing failed during a run."""

    meeting_id: str
    title: str
    error_code: str
    message: str


class RunReport(BaseModel):
    """Counts and failures of one scheduled run."""

    started_at: str = ""  # ISO 8601
    completed_at: str = ""  # ISO 8601
    discovered: int = 0
    succeeded: int = 0
    failed: int = 0
    failures: List[ProcessingFailure] = []
    aborted: bool = False
    error_message: Optional[str] = None


class ConfigurationReport(BaseModel):
    """Result of validating the configuration."""

    errors: List[str] = []
    warnings: List[str] = []

    @property
    def is_valid(self) -> bool:
        return not self.errors


# ---------------------------------------------------------------------------
# Immutable option bundles (built from Settings, passed to constructors)
# ---------------------------------------------------------------------------


class MatchOptions(BaseModel):
    """Options for TranscriptMatcher."""

    model_config = ConfigDict(frozen=True)

    transcript_search_days: int = Field(default=Defaults.TRANSCRIPT_SEARCH_DAYS, ge=0)
    meet_recordings_folder_id: Optional[str] = None
    match_mode: MatchMode = MatchMode.STRICT
    custom_patterns: Tuple[str, ...] = TranscriptPatterns.DEFAULT_CUSTOM_PATTERNS
    max_documents_scanned: int = Field(default=Defaults.MAX_DOCUMENTS_SCANNED, ge=1)
    early_exit_hours: float = Field(default=Defaults.EARLY_EXIT_HOURS, ge=0)

    @property
    def search_radius(self) -> timedelta:
        return timedelta(days=self.transcript_search_days)

    @property
    def early_exit_ms(self) -> int:
        return int(self.early_exit_hours * 3_600_000)


class DiscoveryOptions(BaseModel):
    """Options for MeetingDiscoverer."""

    model_config = ConfigDict(frozen=True)

    meeting_titles: Tuple[str, ...] = ()
    fallback_keywords: Tuple[str, ...] = TranscriptPatterns.DEFAULT_CUSTOM_PATTERNS
    lookback_days: int = Field(default=Defaults.LOOKBACK_DAYS, ge=0)


class DigestOptions(BaseModel):
    """Options for MeetingProcessor (documents, truncation, email)."""

    model_config = ConfigDict(frozen=True)

    okr_document_id: str = ""
    weekly_summary_doc_id: str = ""
    transcript_archive_doc_id: str = ""
    weekly_summary_section: str = Defaults.WEEKLY_SUMMARY_SECTION
    max_input_chars: int = Field(default=Defaults.MAX_INPUT_CHARS, ge=1)
    pod_leader_email: str = ""
    email_subject_prefix: str = Defaults.EMAIL_SUBJECT_PREFIX
    email_all_participants: bool = False
    display_timezone: str = Defaults.DISPLAY_TIMEZONE
    detailed_summary_prompt: Optional[str] = None
    concise_summary_prompt: Optional[str] = None
