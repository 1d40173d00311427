"""
Tests for shared_utils.constants.

Validates enum membership and the constants that other modules rely on.
"""

from shared_utils.constants import (
    ContentLimits,
    Defaults,
    Environment,
    ErrorCode,
    GoogleEndpoints,
    LLMProvider,
    TranscriptPatterns,
    WorkerAction,
)


class TestEnums:
    def test_environment(self) -> None:
        assert len(Environment) == 6
        assert Environment.DEV.value == "dev"

    def test_llm_provider(self) -> None:
        assert {p.value for p in LLMProvider} == {"gemini", "openai", "bedrock"}

    def test_worker_action(self) -> None:
        assert {a.value for a in WorkerAction} == {"run", "validate", "reset"}

    def test_error_codes_are_strings(self) -> None:
        assert all(isinstance(code.value, str) for code in ErrorCode)


class TestMatchingConstants:
    def test_defaults(self) -> None:
        assert Defaults.MAX_DOCUMENTS_SCANNED == 500
        assert Defaults.TRANSCRIPT_SEARCH_DAYS == 7
        assert Defaults.EARLY_EXIT_HOURS == 2.0
        assert Defaults.MAX_INPUT_CHARS == 100_000

    def test_fallback_thresholds(self) -> None:
        assert ContentLimits.DESCRIPTION_AS_TRANSCRIPT == 500
        assert ContentLimits.LINKED_DOCUMENT_MIN == 100
        assert ContentLimits.INDICATOR_DESCRIPTION_MIN == 200

    def test_summary_sections(self) -> None:
        assert TranscriptPatterns.SUMMARY_SECTIONS == ("Highlights", "Low Lights", "Main Outcomes", "Decisions")

    def test_export_urls_have_placeholder(self) -> None:
        for url in (
            GoogleEndpoints.DOCS_EXPORT_TEXT,
            GoogleEndpoints.DOCS_EXPORT_HTML,
            GoogleEndpoints.DRIVE_EXPORT_TEXT,
            GoogleEndpoints.DRIVE_EXPORT_HTML,
        ):
            assert "{document_id}" in url
