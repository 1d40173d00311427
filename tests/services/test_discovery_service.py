"""
Tests for services.discovery_service.MeetingDiscoverer.

The matcher is mocked; calendar and flag store are in-memory.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from adapters.in_memory_workspace import InMemoryCalendarAdapter, InMemoryFlagStore
from conftest import MEETING_START, make_meeting
from domain.models import DiscoveryOptions
from services.discovery_service import MeetingDiscoverer
from services.processed_registry import ProcessedMeetingRegistry

NOW = MEETING_START + timedelta(hours=13)


@pytest.fixture()
def matcher() -> MagicMock:
    mock = MagicMock()
    mock.find_transcript.side_effect = lambda meeting: f"transcript of {meeting.id}"
    return mock


@pytest.fixture()
def registry(flag_store: InMemoryFlagStore) -> ProcessedMeetingRegistry:
    return ProcessedMeetingRegistry(flag_store)


def _discoverer(calendar, matcher, registry, **options) -> MeetingDiscoverer:
    opts = {"meeting_titles": ("Pod Weekly Sync", "Retro")}
    opts.update(options)
    return MeetingDiscoverer(calendar, matcher, registry, DiscoveryOptions(**opts), clock=lambda: NOW)


class TestDiscoveryWindow:
    def test_window(self, calendar, matcher, registry) -> None:
        start, end = _discoverer(calendar, matcher, registry, lookback_days=3).discovery_window()
        assert start == NOW - timedelta(days=3)
        assert end == NOW + timedelta(days=1)


class TestIsRelevant:
    def test_substring_case_insensitive(self, calendar, matcher, registry) -> None:
        discoverer = _discoverer(calendar, matcher, registry)
        assert discoverer.is_relevant("[Team] POD WEEKLY SYNC")
        assert discoverer.is_relevant("Sprint retro")
        assert not discoverer.is_relevant("1:1 with Bob")

    def test_fallback_keywords_without_titles(self, calendar, matcher, registry) -> None:
        discoverer = _discoverer(calendar, matcher, registry, meeting_titles=(), fallback_keywords=("notes",))
        assert discoverer.is_relevant("Design notes review")
        assert not discoverer.is_relevant("Pod Weekly Sync")


class TestDiscover:
    def test_returns_records_for_relevant_meetings(self, matcher, registry) -> None:
        calendar = InMemoryCalendarAdapter([
            make_meeting(id="sync"),
            make_meeting(id="lunch", title="Team lunch"),
        ])

        records = _discoverer(calendar, matcher, registry).discover()

        assert [r.id for r in records] == ["sync"]
        assert records[0].transcript == "transcript of sync"
        matcher.find_transcript.assert_called_once()

    def test_processed_meetings_skipped_before_matching(self, matcher, registry) -> None:
        calendar = InMemoryCalendarAdapter([make_meeting(id="sync")])
        registry.mark("sync")

        assert _discoverer(calendar, matcher, registry).discover() == []
        matcher.find_transcript.assert_not_called()

    def test_meetings_without_transcript_skipped(self, matcher, registry) -> None:
        calendar = InMemoryCalendarAdapter([make_meeting(id="a"), make_meeting(id="b")])
        matcher.find_transcript.side_effect = lambda m: None if m.id == "a" else "text"

        assert [r.id for r in _discoverer(calendar, matcher, registry).discover()] == ["b"]

    def test_events_outside_window_not_listed(self, matcher, registry) -> None:
        old = make_meeting(id="old", start_time=NOW - timedelta(days=10))
        calendar = InMemoryCalendarAdapter([old])

        assert _discoverer(calendar, matcher, registry).discover() == []
        assert calendar.requested_windows[0] == (NOW - timedelta(days=3), NOW + timedelta(days=1))

    def test_calendar_failure_propagates(self, matcher, registry) -> None:
        calendar = MagicMock()
        calendar.list_events.side_effect = RuntimeError("calendar down")
        with pytest.raises(RuntimeError, match="calendar down"):
            _discoverer(calendar, matcher, registry).discover()
