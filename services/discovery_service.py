"""
Meeting discovery.

Lists calendar events in ``[now - lookback_days, now + 1 day]``, drops events
that are already processed or not relevant, and pairs the rest with a
transcript from TranscriptMatcher. Events without a transcript are skipped,
not failed, and are retried on the next run.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple

from core_transcripts.formatting.dates import short_label
from core_transcripts.matching.matcher import TranscriptMatcher
from domain.models import DiscoveryOptions, MeetingRecord
from ports.calendar import CalendarPort
from services.processed_registry import ProcessedMeetingRegistry
from shared_utils.constants import LogScope
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.DISCOVERY)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MeetingDiscoverer:
    """Finds relevant, unprocessed meetings that have a transcript."""

    def __init__(
        self,
        calendar: CalendarPort,
        matcher: TranscriptMatcher,
        registry: ProcessedMeetingRegistry,
        options: DiscoveryOptions,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._calendar = calendar
        self._matcher = matcher
        self._registry = registry
        self._options = options
        self._clock = clock or _utc_now

    def discovery_window(self) -> Tuple[datetime, datetime]:
        now = self._clock()
        return now - timedelta(days=self._options.lookback_days), now + timedelta(days=1)

    def is_relevant(self, title: str) -> bool:
        """Case-insensitive substring match on the configured titles.

        With no titles configured, the fallback keywords are used instead.
        """
        keywords = self._options.meeting_titles or self._options.fallback_keywords
        title_lower = title.lower()
        return any(k.lower() in title_lower for k in keywords if k)

    def discover(self) -> List[MeetingRecord]:
        """Return meeting records ready for processing.

        Raises:
            ExternalServiceError: If the calendar or flag store is unreachable.
        """
        start, end = self.discovery_window()
        events = self._calendar.list_events(start, end)
        processed = self._registry.snapshot()

        logger.info(
            "discovery_started",
            window_start=start.isoformat(),
            window_end=end.isoformat(),
            events=len(events),
            already_processed=len(processed),
        )

        records: List[MeetingRecord] = []
        for event in events:
            if event.id in processed:
                logger.debug("meeting_already_processed", meeting_id=event.id)
                continue

            if not self.is_relevant(event.title):
                logger.info("meeting_skipped_irrelevant", meeting_id=event.id, title=event.title)
                continue

            transcript = self._matcher.find_transcript(event)
            if not transcript:
                logger.info(
                    "meeting_skipped_no_transcript",
                    meeting_id=event.id,
                    title=event.title,
                    date=short_label(event.start_time),
                )
                continue

            records.append(MeetingRecord(meeting=event, transcript=transcript))

        logger.info("discovery_completed", meetings=len(records))
        return records
