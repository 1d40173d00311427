"""
Tests for shared_utils.di_container.

Tests singleton behaviour, lazy initialisation, reset(), and the adapter and
service accessors. External dependencies (providers, Google and AWS adapters)
are mocked or replaced with in-memory adapters.
"""

from unittest.mock import MagicMock, patch

import pytest

from adapters.in_memory_workspace import (
    InMemoryCalendarAdapter,
    InMemoryDocumentStore,
    InMemoryFlagStore,
    InMemoryMailer,
)
from adapters.json_flag_store import JsonFlagStoreAdapter
from conftest import BASE_SETTINGS_KWARGS
from core_transcripts.matching.matcher import TranscriptMatcher
from services.orchestration_service import Orchestrator
from services.processed_registry import ProcessedMeetingRegistry
from shared_utils.config_loader import Settings
from shared_utils.di_container import DIContainer, get_di_container


# ---------------------------------------------------------------------------
# Ensure each test gets a fresh singleton
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _reset_singleton():
    """Reset the DIContainer singleton before and after each test."""
    DIContainer._instance = None
    yield
    DIContainer._instance = None


def _container(**overrides) -> DIContainer:
    container = DIContainer()
    container.reset()
    container._settings = Settings(**{**BASE_SETTINGS_KWARGS, **overrides})
    return container


# ---------------------------------------------------------------------------
# Singleton behaviour
# ---------------------------------------------------------------------------


class TestSingleton:
    def test_same_instance(self) -> None:
        assert DIContainer() is DIContainer()

    def test_get_di_container_returns_singleton(self) -> None:
        c1 = get_di_container()
        c2 = get_di_container()
        assert c1 is c2
        assert isinstance(c1, DIContainer)


class TestReset:
    def test_reset_clears_everything(self) -> None:
        container = DIContainer()
        container._llm_provider = "fake"
        container._document_store = "fake"
        container._flag_store = "fake"
        container._orchestrator = "fake"

        container.reset()

        assert container._llm_provider is None
        assert container._document_store is None
        assert container._flag_store is None
        assert container._orchestrator is None
        assert container._settings is None


# ---------------------------------------------------------------------------
# Provider accessor
# ---------------------------------------------------------------------------


class TestLLMProvider:
    @patch("shared_utils.di_container.LLMProviderFactory.create", return_value=MagicMock())
    def test_returns_same_instance(self, mock_create) -> None:
        container = _container()
        assert container.get_llm_provider() is container.get_llm_provider()
        mock_create.assert_called_once_with(container._settings)

    @patch("shared_utils.di_container.LLMProviderFactory.create", side_effect=RuntimeError("fail"))
    def test_raises_on_factory_error(self, mock_create) -> None:
        with pytest.raises(RuntimeError, match="LLM provider initialization failed"):
            _container().get_llm_provider()


# ---------------------------------------------------------------------------
# Adapter accessors
# ---------------------------------------------------------------------------


class TestAdapters:
    @patch("adapters.google_auth.load_credentials")
    def test_google_credentials_loaded_once(self, mock_load) -> None:
        container = _container(google_credentials_file="/secrets/sa.json", google_delegated_user="lead@example.com")
        assert container.get_google_credentials() is container.get_google_credentials()
        mock_load.assert_called_once_with("/secrets/sa.json", "lead@example.com")

    @patch("adapters.google_calendar.GoogleCalendarAdapter")
    def test_calendar(self, mock_adapter) -> None:
        container = _container(calendar_id="team@example.com")
        container._google_credentials = "creds"

        assert container.get_calendar() is mock_adapter.return_value
        mock_adapter.assert_called_once_with(credentials="creds", calendar_id="team@example.com")

    @patch("adapters.google_drive_store.GoogleDriveDocumentStore")
    @patch("adapters.google_docs_writer.GoogleDocsWriter")
    def test_document_store_and_writer(self, mock_writer, mock_store) -> None:
        container = _container()
        container._google_credentials = "creds"

        assert container.get_document_store() is mock_store.return_value
        assert container.get_document_writer() is mock_writer.return_value
        mock_store.assert_called_once_with(credentials="creds")

    @patch("adapters.ses_mailer.SesMailerAdapter")
    def test_mailer(self, mock_mailer) -> None:
        container = _container(email_sender="digest@example.com", aws_region="eu-west-1", aws_endpoint_url="")
        container.get_mailer()
        mock_mailer.assert_called_once_with(sender="digest@example.com", region="eu-west-1", endpoint_url="")

    def test_json_flag_store_when_no_table(self, tmp_path) -> None:
        container = _container(flag_store_path=str(tmp_path / "flags.json"))
        assert isinstance(container.get_flag_store(), JsonFlagStoreAdapter)

    @patch("adapters.dynamo_flag_store.DynamoFlagStoreAdapter")
    def test_dynamo_flag_store_when_table_set(self, mock_dynamo) -> None:
        container = _container(flag_store_table_name="PodFlags", aws_region="eu-west-2", aws_endpoint_url="")
        assert container.get_flag_store() is mock_dynamo.return_value
        mock_dynamo.assert_called_once_with(table_name="PodFlags", region="eu-west-2", endpoint_url="")


# ---------------------------------------------------------------------------
# Service accessors
# ---------------------------------------------------------------------------


class TestServices:
    def test_registry_uses_configured_key(self) -> None:
        container = _container(processed_meetings_key="POD_A")
        container._flag_store = InMemoryFlagStore()

        registry = container.get_registry()

        assert isinstance(registry, ProcessedMeetingRegistry)
        assert registry.key == "POD_A"

    def test_matcher_uses_match_options(self) -> None:
        container = _container(transcript_match_mode="flexible", custom_transcript_patterns=["recap"])
        container._document_store = InMemoryDocumentStore()

        matcher = container.get_matcher()

        assert isinstance(matcher, TranscriptMatcher)
        assert "recap" in matcher.policy.describe()

    def test_orchestrator_wiring(self) -> None:
        container = _container(pod_leader_email="lead@example.com")
        store = InMemoryDocumentStore()
        container._calendar = InMemoryCalendarAdapter()
        container._document_store = store
        container._document_writer = store
        container._mailer = InMemoryMailer()
        container._flag_store = InMemoryFlagStore()
        container._llm_provider = MagicMock()

        orchestrator = container.get_orchestrator()

        assert isinstance(orchestrator, Orchestrator)
        assert orchestrator is container.get_orchestrator()
        report = orchestrator.run()
        assert report.discovered == 0
        assert not report.aborted
