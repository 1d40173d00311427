"""
Per-meeting processing.

Flow:  OKR context → header + truncation → detailed & concise summaries →
weekly digest entry → archive entry → summary email.

Depends only on ports. Any failure surfaces as an AppException so the
orchestrator can count it against the meeting.
"""

from __future__ import annotations

from typing import List

from core_transcripts.formatting.dates import long_label, short_label
from core_transcripts.formatting.email_body import build_summary_email
from core_transcripts.formatting.summary_blocks import (
    archive_blocks,
    find_section_insert_index,
    missing_sections,
    section_header_block,
    weekly_entry_blocks,
)
from core_transcripts.prompts import build_concise_prompt, build_detailed_prompt, build_transcript_input
from domain.models import DigestOptions, DocumentBlock, MeetingDescriptor, MeetingRecord
from ports.document_store import DocumentStorePort
from ports.document_writer import DocumentWriterPort
from ports.llm_provider import LLMProviderPort
from ports.mailer import MailerPort
from shared_utils.constants import Defaults, LogScope
from shared_utils.error_handler import AppException, MeetingProcessingError, SummarizationError
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.PROCESSING)


class MeetingProcessor:
    """Summarizes one meeting and distributes the results."""

    def __init__(
        self,
        llm_provider: LLMProviderPort,
        document_store: DocumentStorePort,
        document_writer: DocumentWriterPort,
        mailer: MailerPort,
        options: DigestOptions,
    ) -> None:
        self._llm = llm_provider
        self._documents = document_store
        self._writer = document_writer
        self._mailer = mailer
        self._options = options

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def process(self, record: MeetingRecord) -> None:
        """Run the full pipeline for ``record``.

        Raises:
            AppException: ModelError / SummarizationError / ExternalServiceError
                as raised, anything else wrapped in MeetingProcessingError.
        """
        logger.info("meeting_processing_started", meeting_id=record.id, title=record.title)
        try:
            okr_context = self.load_okr_context()
            transcript_input = build_transcript_input(
                record.meeting,
                record.transcript,
                self._options.max_input_chars,
                self._options.display_timezone,
            )
            if len(record.transcript) > self._options.max_input_chars:
                logger.warning(
                    "transcript_truncated",
                    meeting_id=record.id,
                    chars=len(record.transcript),
                    max_chars=self._options.max_input_chars,
                )

            detailed = self._summarize(
                build_detailed_prompt(transcript_input, okr_context, self._options.detailed_summary_prompt),
                "detailed",
                record,
            )
            concise = self._summarize(
                build_concise_prompt(transcript_input, self._options.concise_summary_prompt),
                "concise",
                record,
            )

            self.update_weekly_summary(record.meeting, concise)
            self.update_transcript_archive(record)
            self.send_summary_email(record.meeting, detailed)
        except AppException:
            raise
        except Exception as exc:
            raise MeetingProcessingError(
                f"Processing failed: {exc}",
                meeting_id=record.id,
                context={"title": record.title},
            ) from exc

        logger.info("meeting_processing_completed", meeting_id=record.id, title=record.title)

    def load_okr_context(self) -> str:
        """Text of the OKR document, or the fixed placeholder when unreadable."""
        document_id = self._options.okr_document_id
        if not document_id:
            return Defaults.OKR_CONTEXT_UNAVAILABLE
        try:
            text = self._documents.get_document_text(document_id)
        except Exception as exc:
            logger.warning("okr_context_unavailable", document_id=document_id, error=str(exc))
            return Defaults.OKR_CONTEXT_UNAVAILABLE
        if not text or not text.strip():
            return Defaults.OKR_CONTEXT_UNAVAILABLE
        logger.info("okr_context_loaded", chars=len(text))
        return text

    def update_weekly_summary(self, meeting: MeetingDescriptor, concise_summary: str) -> None:
        """Insert a dated entry into the weekly digest section."""
        document_id = self._options.weekly_summary_doc_id
        section = self._options.weekly_summary_section
        existing = self._writer.read_blocks(document_id)
        index, header_found = find_section_insert_index(existing, section)

        entry: List[DocumentBlock] = weekly_entry_blocks(
            meeting.title,
            short_label(meeting.start_time, self._options.display_timezone),
            concise_summary,
        )
        missing = missing_sections(entry)
        if missing:
            logger.warning("concise_summary_sections_missing", meeting_id=meeting.id, missing=missing)

        if not header_found:
            logger.info("weekly_section_created", document_id=document_id, section=section)
            entry = [section_header_block(section), *entry]
            index = None

        self._writer.insert_blocks(document_id, index, entry)
        logger.info(
            "weekly_summary_updated",
            meeting_id=meeting.id,
            document_id=document_id,
            index=index,
            blocks=len(entry),
        )

    def update_transcript_archive(self, record: MeetingRecord) -> None:
        """Append the untruncated transcript to the archive document."""
        document_id = self._options.transcript_archive_doc_id
        blocks = archive_blocks(
            record.title,
            long_label(record.meeting.start_time, self._options.display_timezone),
            record.transcript,
        )
        self._writer.insert_blocks(document_id, None, blocks)
        logger.info("transcript_archived", meeting_id=record.id, chars=len(record.transcript))

    def send_summary_email(self, meeting: MeetingDescriptor, detailed_summary: str) -> None:
        message = build_summary_email(meeting, detailed_summary, self._options)
        if not message.to:
            logger.warning("email_no_recipients", meeting_id=meeting.id)
            return
        self._mailer.send_email(message.to, message.subject, message.plain_body, message.html_body)
        logger.info("summary_email_sent", meeting_id=meeting.id, recipients=len(message.to))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _summarize(self, prompt: str, kind: str, record: MeetingRecord) -> str:
        text = self._llm.generate(prompt)
        if not text or not text.strip():
            raise SummarizationError(
                f"Empty {kind} summary",
                context={"meeting_id": record.id, "kind": kind},
            )
        logger.info("summary_generated", meeting_id=record.id, kind=kind, chars=len(text))
        return text
