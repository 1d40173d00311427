"""
Description-based transcript extraction.

Used when the document listing capability is unavailable. Only data already
present on the calendar event is consulted, in three tiers:

    a) a long description is the transcript itself
    b) a linked document in the description resolves to enough text
    c) an indicator word appears and the description is moderately long

Tier (a) and (c) are length heuristics; a long agenda can be mistaken for a
transcript.
"""

from __future__ import annotations

import re
from typing import Optional

from core_transcripts.content.resolver import DocumentContentResolver
from domain.models import MeetingDescriptor
from shared_utils.constants import ContentLimits, LogScope, TranscriptPatterns
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.MATCHING)

DOC_LINK: re.Pattern = re.compile(TranscriptPatterns.DOC_LINK_REGEX)


class DescriptionFallback:
    """Extracts a transcript from a meeting's own description."""

    def __init__(self, resolver: DocumentContentResolver) -> None:
        self._resolver = resolver

    def extract(self, meeting: MeetingDescriptor) -> Optional[str]:
        """Apply the three tiers in order.

        Args:
            meeting: Calendar event.

        Returns:
            Transcript text, or None when every tier declines.
        """
        description = meeting.description

        if len(description) > ContentLimits.DESCRIPTION_AS_TRANSCRIPT:
            logger.info(
                "fallback_long_description",
                meeting_id=meeting.id,
                chars=len(description),
            )
            return description

        for document_id in DOC_LINK.findall(description):
            logger.info("fallback_linked_document", meeting_id=meeting.id, document_id=document_id)
            content = self._resolver.resolve(document_id)
            if content and len(content) > ContentLimits.LINKED_DOCUMENT_MIN:
                logger.info(
                    "fallback_linked_document_resolved",
                    meeting_id=meeting.id,
                    document_id=document_id,
                    chars=len(content),
                )
                return content

        search_text = f"{meeting.title} {description}".lower()
        has_indicator = any(word in search_text for word in TranscriptPatterns.FALLBACK_INDICATORS)
        if has_indicator and len(description) > ContentLimits.INDICATOR_DESCRIPTION_MIN:
            logger.info("fallback_indicator_description", meeting_id=meeting.id, chars=len(description))
            return description

        logger.info("fallback_exhausted", meeting_id=meeting.id)
        return None
