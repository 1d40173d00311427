"""
Unit tests for domain models.

Validates pure domain types with no Google or AWS dependencies.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from domain.models import (
    BlockKind,
    CandidateScan,
    ConfigurationReport,
    DocumentBlock,
    DocumentSummary,
    MatchCandidate,
    MatchMode,
    MatchOptions,
    MeetingDescriptor,
    MeetingRecord,
    RunReport,
)


START = datetime(2025, 9, 23, 17, 0, tzinfo=timezone.utc)


def _meeting(**overrides) -> MeetingDescriptor:
    fields = {
        "id": "evt-1",
        "title": "Pod Weekly Sync",
        "start_time": START,
        "end_time": START + timedelta(hours=1),
    }
    fields.update(overrides)
    return MeetingDescriptor(**fields)


def _doc(doc_id: str, offset: timedelta) -> DocumentSummary:
    return DocumentSummary(id=doc_id, name=f"{doc_id} - Transcript", last_modified=START + offset)


class TestMeetingDescriptor:
    def test_naive_times_become_utc(self) -> None:
        meeting = _meeting(start_time=datetime(2025, 9, 23, 17, 0), end_time=datetime(2025, 9, 23, 18, 0))
        assert meeting.start_time.tzinfo == timezone.utc
        assert meeting.start_time == START

    def test_none_description_is_empty(self) -> None:
        assert _meeting(description=None).description == ""

    def test_defaults(self) -> None:
        meeting = _meeting()
        assert meeting.description == ""
        assert meeting.attendee_emails == ()

    def test_frozen(self) -> None:
        meeting = _meeting()
        with pytest.raises(ValidationError):
            meeting.title = "Other"


class TestMatchCandidate:
    def test_delta_is_absolute_milliseconds(self) -> None:
        before = MatchCandidate.for_meeting(_doc("a", -timedelta(minutes=30)), _meeting())
        after = MatchCandidate.for_meeting(_doc("b", timedelta(minutes=30)), _meeting())
        assert before.time_delta_ms == after.time_delta_ms == 30 * 60 * 1000

    def test_hours_difference(self) -> None:
        candidate = MatchCandidate.for_meeting(_doc("a", timedelta(hours=3)), _meeting())
        assert candidate.hours_difference == pytest.approx(3.0)

    def test_negative_delta_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MatchCandidate(document=_doc("a", timedelta()), time_delta_ms=-1)


class TestCandidateScan:
    def _scan(self, candidates) -> CandidateScan:
        return CandidateScan(
            meeting_id="evt-1",
            window_start=START - timedelta(days=1),
            window_end=START + timedelta(days=1),
            candidates=candidates,
        )

    def test_best_none_when_empty(self) -> None:
        assert self._scan([]).best() is None

    def test_best_picks_smallest_delta(self) -> None:
        far = MatchCandidate.for_meeting(_doc("far", timedelta(hours=5)), _meeting())
        near = MatchCandidate.for_meeting(_doc("near", timedelta(hours=1)), _meeting())
        assert self._scan([far, near]).best().document.id == "near"

    def test_best_first_encountered_on_tie(self) -> None:
        first = MatchCandidate.for_meeting(_doc("first", timedelta(hours=1)), _meeting())
        second = MatchCandidate.for_meeting(_doc("second", -timedelta(hours=1)), _meeting())
        assert self._scan([first, second]).best().document.id == "first"


class TestMeetingRecord:
    def test_delegates_id_and_title(self) -> None:
        record = MeetingRecord(meeting=_meeting(), transcript="text")
        assert record.id == "evt-1"
        assert record.title == "Pod Weekly Sync"


class TestDocumentBlock:
    @pytest.mark.parametrize("kind", [BlockKind.HEADING_2, BlockKind.HEADING_3, BlockKind.HEADING_4])
    def test_headings(self, kind: BlockKind) -> None:
        assert DocumentBlock(kind=kind, text="x").is_heading

    @pytest.mark.parametrize("kind", [BlockKind.PARAGRAPH, BlockKind.BULLET, BlockKind.HORIZONTAL_RULE])
    def test_non_headings(self, kind: BlockKind) -> None:
        assert not DocumentBlock(kind=kind).is_heading


class TestReports:
    def test_configuration_report_validity(self) -> None:
        assert ConfigurationReport(warnings=["w"]).is_valid
        assert not ConfigurationReport(errors=["e"]).is_valid

    def test_run_report_defaults(self) -> None:
        report = RunReport()
        assert report.discovered == report.succeeded == report.failed == 0
        assert report.failures == []
        assert not report.aborted


class TestMatchOptions:
    def test_defaults(self) -> None:
        options = MatchOptions()
        assert options.match_mode == MatchMode.STRICT
        assert options.max_documents_scanned == 500
        assert options.early_exit_ms == 2 * 3_600_000

    def test_search_radius(self) -> None:
        assert MatchOptions(transcript_search_days=3).search_radius == timedelta(days=3)

    def test_mode_from_string(self) -> None:
        assert MatchOptions(match_mode="flexible").match_mode is MatchMode.FLEXIBLE

    def test_frozen(self) -> None:
        options = MatchOptions()
        with pytest.raises(ValidationError):
            options.transcript_search_days = 5
