"""
Root conftest.py: shared fixtures for the entire test suite.

Guidelines:
    • No __init__.py in test sub-directories (avoids shadowing root packages).
    • pytest.ini_options lives in pyproject.toml with pythonpath=["."].
    • Markers: integration.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict
from unittest.mock import MagicMock

import pytest

from adapters.in_memory_workspace import (
    InMemoryCalendarAdapter,
    InMemoryDocumentStore,
    InMemoryFlagStore,
    InMemoryMailer,
)
from domain.models import DigestOptions, MatchOptions, MeetingDescriptor, MeetingRecord


# ---------------------------------------------------------------------------
# Marker registration
# ---------------------------------------------------------------------------

def pytest_configure(config):
    config.addinivalue_line("markers", "integration: mark test as integration test")


# ---------------------------------------------------------------------------
# Minimal required settings kwargs for Settings(**BASE_SETTINGS_KWARGS)
# ---------------------------------------------------------------------------

BASE_SETTINGS_KWARGS: Dict[str, str] = {
    "environment": "development",
    "llm_provider": "gemini",
    "gemini_api_key": "test-key",
}


@pytest.fixture()
def base_settings_kwargs() -> Dict[str, str]:
    """Provide the minimal kwargs needed to instantiate ``Settings``."""
    return {**BASE_SETTINGS_KWARGS}


# ---------------------------------------------------------------------------
# Sample meeting fixtures
# ---------------------------------------------------------------------------

MEETING_START = datetime(2025, 9, 23, 17, 0, tzinfo=timezone.utc)

SAMPLE_TRANSCRIPT_TEXT = (
    "Alice: Hello everyone, welcome to the weekly sync.\n"
    "Bob: Thanks Alice. I finished the API refactoring yesterday.\n"
    "Alice: Great, any blockers?\n"
    "Bob: No blockers. I'll finish the tests today.\n"
    "Carol: The deployment pipeline is green again.\n"
)

SAMPLE_CONCISE_SUMMARY = (
    "**Highlights:**\n"
    "* API refactoring finished\n"
    "\n"
    "**Low Lights:**\n"
    "* Pipeline was red for two days\n"
    "\n"
    "**Main Outcomes:**\n"
    "1. Tests land today\n"
    "\n"
    "**Decisions:**\n"
    "* Keep the weekly cadence\n"
)

SAMPLE_DETAILED_SUMMARY = "```html\n<h2>Executive Overview</h2>\n<p>Good week.</p>\n```"


def make_meeting(**overrides) -> MeetingDescriptor:
    """MeetingDescriptor for "Pod Weekly Sync" on 2025-09-23 17:00 UTC."""
    fields = {
        "id": "evt-1",
        "title": "Pod Weekly Sync",
        "start_time": MEETING_START,
        "end_time": MEETING_START + timedelta(hours=1),
        "description": "",
        "attendee_emails": ("alice@example.com", "bob@example.com"),
    }
    fields.update(overrides)
    return MeetingDescriptor(**fields)


@pytest.fixture()
def meeting() -> MeetingDescriptor:
    return make_meeting()


@pytest.fixture()
def meeting_record(meeting: MeetingDescriptor) -> MeetingRecord:
    return MeetingRecord(meeting=meeting, transcript=SAMPLE_TRANSCRIPT_TEXT)


@pytest.fixture()
def match_options() -> MatchOptions:
    return MatchOptions()


@pytest.fixture()
def digest_options() -> DigestOptions:
    return DigestOptions(
        okr_document_id="okr-doc",
        weekly_summary_doc_id="weekly-doc",
        transcript_archive_doc_id="archive-doc",
        pod_leader_email="lead@example.com",
    )


# ---------------------------------------------------------------------------
# In-memory adapters and mocks
# ---------------------------------------------------------------------------

@pytest.fixture()
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture()
def calendar() -> InMemoryCalendarAdapter:
    return InMemoryCalendarAdapter()


@pytest.fixture()
def mailer() -> InMemoryMailer:
    return InMemoryMailer()


@pytest.fixture()
def flag_store() -> InMemoryFlagStore:
    return InMemoryFlagStore()


@pytest.fixture()
def mock_llm_provider() -> MagicMock:
    """LLM mock answering the detailed prompt with HTML and the concise one with bullets."""
    mock = MagicMock()

    def _generate(prompt: str, context=None) -> str:
        if "<h2>Executive Overview</h2>" in prompt:
            return SAMPLE_DETAILED_SUMMARY
        return SAMPLE_CONCISE_SUMMARY

    mock.generate.side_effect = _generate
    return mock
