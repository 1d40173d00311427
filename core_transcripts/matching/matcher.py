"""
Transcript matching.

Given a calendar event, find the single best transcript document in an
unordered, unindexed document collection:

    1. pick the listing scope (configured folder if accessible, else everything)
    2. window = meeting start +/- transcript_search_days
    3. stream at most ``max_documents_scanned`` documents
    4. keep documents whose name starts with the meeting title and satisfies
       the pattern policy, and whose last modification lies in the window
    5. stop early on a candidate within ``early_exit_hours`` of the start
    6. choose the smallest time delta (first encountered on ties)
    7. resolve the winner's content

When the listing capability is unavailable the description fallback is used.
"""

from __future__ import annotations

from itertools import islice
from typing import List, Optional

from core_transcripts.content.resolver import DocumentContentResolver
from core_transcripts.matching.fallback import DescriptionFallback
from core_transcripts.matching.name_patterns import NamePatternPolicy, explain_name_match, policy_for
from domain.models import CandidateScan, MatchCandidate, MatchOptions, MeetingDescriptor
from ports.document_store import DocumentStorePort
from shared_utils.constants import LogScope
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.MATCHING)


class TranscriptMatcher:
    """Finds and resolves the transcript belonging to a meeting."""

    def __init__(
        self,
        document_store: DocumentStorePort,
        resolver: DocumentContentResolver,
        options: MatchOptions,
        fallback: Optional[DescriptionFallback] = None,
        policy: Optional[NamePatternPolicy] = None,
    ) -> None:
        self._store = document_store
        self._resolver = resolver
        self._options = options
        self._fallback = fallback or DescriptionFallback(resolver)
        self._policy = policy or policy_for(options)

    @property
    def policy(self) -> NamePatternPolicy:
        return self._policy

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def find_transcript(self, meeting: MeetingDescriptor) -> Optional[str]:
        """Return the resolved transcript text for ``meeting``, or None.

        No match, an unresolvable winner and a failing listing all yield None;
        the caller skips the meeting.
        """
        if not meeting.title.strip():
            logger.warning("meeting_title_blank", meeting_id=meeting.id)
            return None

        if not self._listing_available():
            logger.warning("document_listing_unavailable", meeting_id=meeting.id, title=meeting.title)
            return self._fallback.extract(meeting)

        try:
            scan = self.scan_candidates(meeting)
        except Exception as exc:
            logger.error(
                "transcript_scan_failed",
                meeting_id=meeting.id,
                title=meeting.title,
                error=str(exc),
            )
            return None

        best = scan.best()
        if best is None:
            logger.info(
                "no_transcript_candidates",
                meeting_id=meeting.id,
                title=meeting.title,
                policy=self._policy.describe(),
                documents_processed=scan.documents_processed,
                title_matches=len(scan.title_matches),
            )
            return None

        logger.info(
            "transcript_best_match",
            meeting_id=meeting.id,
            document_id=best.document.id,
            document_name=best.document.name,
            hours_difference=round(best.hours_difference, 1),
            candidates=len(scan.candidates),
        )
        return self._resolver.resolve(best.document.id)

    def scan_candidates(self, meeting: MeetingDescriptor) -> CandidateScan:
        """Stream the listing and collect candidates for ``meeting``.

        Raises:
            Exception: Whatever the document store raises while listing.
        """
        scope = self._resolve_scope()
        radius = self._options.search_radius
        window_start = meeting.start_time - radius
        window_end = meeting.start_time + radius
        cap = self._options.max_documents_scanned

        candidates: List[MatchCandidate] = []
        title_matches: List[str] = []
        processed = 0
        early_exit = False

        logger.info(
            "transcript_scan_started",
            meeting_id=meeting.id,
            title=meeting.title,
            scope=scope or "all",
            window_start=window_start.isoformat(),
            window_end=window_end.isoformat(),
            policy=self._policy.describe(),
        )

        for document in islice(self._store.list_documents(scope), cap):
            processed += 1
            verdict = explain_name_match(meeting.title, document.name, self._policy)

            if verdict.starts_with_title:
                title_matches.append(document.name)
                logger.debug(
                    "document_title_prefix_match",
                    document_name=document.name,
                    matches_pattern=verdict.matches_pattern,
                )

            if not verdict.accepted:
                continue

            if document.last_modified < window_start:
                logger.info(
                    "document_skipped_too_old",
                    document_name=document.name,
                    last_modified=document.last_modified.isoformat(),
                )
                continue

            if document.last_modified > window_end:
                logger.info(
                    "document_skipped_too_new",
                    document_name=document.name,
                    last_modified=document.last_modified.isoformat(),
                )
                continue

            candidate = MatchCandidate.for_meeting(document, meeting)
            candidates.append(candidate)
            logger.info(
                "transcript_candidate_found",
                document_name=document.name,
                last_modified=document.last_modified.isoformat(),
                time_delta_ms=candidate.time_delta_ms,
            )

            if candidate.time_delta_ms <= self._options.early_exit_ms:
                early_exit = True
                logger.info(
                    "early_exit_close_match",
                    document_name=document.name,
                    hours_difference=round(candidate.hours_difference, 1),
                )
                break

        cap_reached = not early_exit and processed >= cap
        if cap_reached:
            logger.warning("scan_cap_reached", documents_processed=processed, cap=cap)

        logger.info(
            "transcript_scan_completed",
            meeting_id=meeting.id,
            documents_processed=processed,
            title_matches=len(title_matches),
            candidates=len(candidates),
        )

        return CandidateScan(
            meeting_id=meeting.id,
            scope=scope,
            window_start=window_start,
            window_end=window_end,
            candidates=candidates,
            title_matches=title_matches,
            documents_processed=processed,
            early_exit=early_exit,
            cap_reached=cap_reached,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _listing_available(self) -> bool:
        try:
            return bool(self._store.has_listing_access())
        except Exception as exc:
            logger.warning("listing_probe_failed", error=str(exc))
            return False

    def _resolve_scope(self) -> Optional[str]:
        folder = self._options.meet_recordings_folder_id
        if not folder:
            return None
        try:
            if self._store.is_scope_accessible(folder):
                return folder
            logger.warning("listing_scope_inaccessible", scope=folder)
        except Exception as exc:
            logger.warning("listing_scope_inaccessible", scope=folder, error=str(exc))
        return None
