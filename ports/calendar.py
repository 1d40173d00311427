"""
Port interface for calendar read access.

Implementations: GoogleCalendarAdapter, InMemoryCalendarAdapter (adapters/)
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Protocol, runtime_checkable

from domain.models import MeetingDescriptor


@runtime_checkable
class CalendarPort(Protocol):
    """Abstract interface for listing calendar events."""

    def list_events(self, start: datetime, end: datetime) -> List[MeetingDescriptor]:
        """List events overlapping ``[start, end]``.

        Args:
            start: Window start (timezone-aware).
            end: Window end (timezone-aware).

        Returns:
            Events ordered by start time.

        Raises:
            ExternalServiceError: If the calendar is unreachable.
        """
        ...
