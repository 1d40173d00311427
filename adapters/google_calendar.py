"""
Google Calendar adapter.

Implements CalendarPort with the Calendar v3 API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from googleapiclient.errors import HttpError

from adapters.google_auth import build_service
from domain.models import MeetingDescriptor
from shared_utils.constants import LogScope
from shared_utils.error_handler import ExternalServiceError
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.ADAPTER)


class GoogleCalendarAdapter:
    """Calendar v3 implementation of CalendarPort."""

    def __init__(
        self,
        credentials: Any = None,
        calendar_id: str = "primary",
        calendar_service: Optional[Any] = None,
    ) -> None:
        self._calendar_id = calendar_id
        self._service = calendar_service or build_service("calendar", "v3", credentials)

    def list_events(self, start: datetime, end: datetime) -> List[MeetingDescriptor]:
        """List single (expanded) events between ``start`` and ``end``."""
        events: List[MeetingDescriptor] = []
        request_kwargs: Dict[str, Any] = {
            "calendarId": self._calendar_id,
            "timeMin": start.isoformat(),
            "timeMax": end.isoformat(),
            "singleEvents": True,
            "orderBy": "startTime",
        }
        try:
            while True:
                response = self._service.events().list(**request_kwargs).execute()
                for item in response.get("items", []):
                    if item.get("status") == "cancelled":
                        continue
                    events.append(self._to_descriptor(item))
                page_token = response.get("nextPageToken")
                if not page_token:
                    break
                request_kwargs["pageToken"] = page_token
        except HttpError as exc:
            logger.error("calendar_list_failed", calendar_id=self._calendar_id, error=str(exc))
            raise ExternalServiceError("Google Calendar", f"Failed to list events: {exc}") from exc

        logger.info("calendar_events_listed", calendar_id=self._calendar_id, count=len(events))
        return events

    @staticmethod
    def _event_time(value: Dict[str, str]) -> str:
        # All-day events carry only a date; treat them as midnight UTC.
        if "dateTime" in value:
            return value["dateTime"]
        return f"{value['date']}T00:00:00+00:00"

    @classmethod
    def _to_descriptor(cls, item: Dict[str, Any]) -> MeetingDescriptor:
        attendees = tuple(a["email"] for a in item.get("attendees", []) if a.get("email"))
        return MeetingDescriptor(
            id=item["id"],
            title=item.get("summary", ""),
            start_time=cls._event_time(item["start"]),
            end_time=cls._event_time(item["end"]),
            description=item.get("description", ""),
            attendee_emails=attendees,
        )
