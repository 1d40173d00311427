"""
Dependency injection container for managing application dependencies.
Centralizes adapter, provider and service creation with lazy singletons.
"""

from typing import Any, Optional
import logging

from core_transcripts.providers import LLMProviderBase
from core_transcripts.providers.factory import LLMProviderFactory
from shared_utils.config_loader import Settings, get_settings
from shared_utils.constants import LogScope


logger = logging.getLogger(__name__)


class DIContainer:
    """Singleton dependency injection container."""

    _instance: Optional['DIContainer'] = None
    _settings: Optional[Settings] = None
    _google_credentials: Optional[Any] = None
    _llm_provider: Optional[LLMProviderBase] = None

    _calendar: Optional[object] = None
    _document_store: Optional[object] = None
    _document_writer: Optional[object] = None
    _mailer: Optional[object] = None
    _flag_store: Optional[object] = None
    _registry: Optional[object] = None
    _matcher: Optional[object] = None
    _discoverer: Optional[object] = None
    _processor: Optional[object] = None
    _orchestrator: Optional[object] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def reset(self):
        """Reset container (useful for testing)."""
        self._settings = None
        self._google_credentials = None
        self._llm_provider = None
        self._calendar = None
        self._document_store = None
        self._document_writer = None
        self._mailer = None
        self._flag_store = None
        self._registry = None
        self._matcher = None
        self._discoverer = None
        self._processor = None
        self._orchestrator = None

    def get_settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def get_llm_provider(self) -> LLMProviderBase:
        """Get or create LLM provider (lazy singleton).

        Raises:
            RuntimeError: If provider initialization fails.
        """
        if self._llm_provider is None:
            logger.info(
                "Initializing LLM provider",
                extra={"scope": LogScope.CONFIG}
            )
            try:
                self._llm_provider = LLMProviderFactory.create(self.get_settings())
            except Exception as e:
                logger.error(
                    "Failed to initialize LLM provider",
                    extra={"scope": LogScope.CONFIG, "error": str(e)}
                )
                raise RuntimeError(f"LLM provider initialization failed: {e}") from e

        return self._llm_provider

    # ------------------------------------------------------------------
    # Adapter accessors
    # ------------------------------------------------------------------

    def get_google_credentials(self):
        if self._google_credentials is None:
            from adapters.google_auth import load_credentials

            settings = self.get_settings()
            self._google_credentials = load_credentials(
                settings.google_credentials_file,
                settings.google_delegated_user,
            )
        return self._google_credentials

    def get_calendar(self):
        """Get or create GoogleCalendarAdapter (lazy singleton)."""
        if self._calendar is None:
            from adapters.google_calendar import GoogleCalendarAdapter

            self._calendar = GoogleCalendarAdapter(
                credentials=self.get_google_credentials(),
                calendar_id=self.get_settings().calendar_id,
            )
            logger.info("Initialized GoogleCalendarAdapter")
        return self._calendar

    def get_document_store(self):
        """Get or create GoogleDriveDocumentStore (lazy singleton)."""
        if self._document_store is None:
            from adapters.google_drive_store import GoogleDriveDocumentStore

            self._document_store = GoogleDriveDocumentStore(credentials=self.get_google_credentials())
            logger.info("Initialized GoogleDriveDocumentStore")
        return self._document_store

    def get_document_writer(self):
        """Get or create GoogleDocsWriter (lazy singleton)."""
        if self._document_writer is None:
            from adapters.google_docs_writer import GoogleDocsWriter

            self._document_writer = GoogleDocsWriter(credentials=self.get_google_credentials())
            logger.info("Initialized GoogleDocsWriter")
        return self._document_writer

    def get_mailer(self):
        """Get or create SesMailerAdapter (lazy singleton)."""
        if self._mailer is None:
            from adapters.ses_mailer import SesMailerAdapter

            settings = self.get_settings()
            self._mailer = SesMailerAdapter(
                sender=settings.email_sender,
                region=settings.aws_region,
                endpoint_url=settings.aws_endpoint_url,
            )
            logger.info("Initialized SesMailerAdapter")
        return self._mailer

    def get_flag_store(self):
        """Get or create the flag store (lazy singleton).

        Uses JsonFlagStoreAdapter when FLAG_STORE_TABLE_NAME is empty (local
        dev), and DynamoFlagStoreAdapter otherwise.
        """
        if self._flag_store is None:
            settings = self.get_settings()
            if not settings.flag_store_table_name:
                from adapters.json_flag_store import JsonFlagStoreAdapter
                self._flag_store = JsonFlagStoreAdapter(path=settings.flag_store_path)
                logger.info("Initialized JsonFlagStoreAdapter (local dev)")
            else:
                from adapters.dynamo_flag_store import DynamoFlagStoreAdapter
                self._flag_store = DynamoFlagStoreAdapter(
                    table_name=settings.flag_store_table_name,
                    region=settings.aws_region,
                    endpoint_url=settings.aws_endpoint_url,
                )
                logger.info("Initialized DynamoFlagStoreAdapter")
        return self._flag_store

    # ------------------------------------------------------------------
    # Core and service accessors
    # ------------------------------------------------------------------

    def get_registry(self):
        """Get or create ProcessedMeetingRegistry (lazy singleton)."""
        if self._registry is None:
            from services.processed_registry import ProcessedMeetingRegistry

            self._registry = ProcessedMeetingRegistry(
                flag_store=self.get_flag_store(),
                key=self.get_settings().processed_meetings_key,
            )
        return self._registry

    def get_matcher(self):
        """Get or create TranscriptMatcher (lazy singleton)."""
        if self._matcher is None:
            from core_transcripts.content.resolver import DocumentContentResolver
            from core_transcripts.matching.matcher import TranscriptMatcher

            store = self.get_document_store()
            self._matcher = TranscriptMatcher(
                document_store=store,
                resolver=DocumentContentResolver(store),
                options=self.get_settings().match_options(),
            )
            logger.info("Initialized TranscriptMatcher")
        return self._matcher

    def get_discoverer(self):
        """Get or create MeetingDiscoverer (lazy singleton)."""
        if self._discoverer is None:
            from services.discovery_service import MeetingDiscoverer

            self._discoverer = MeetingDiscoverer(
                calendar=self.get_calendar(),
                matcher=self.get_matcher(),
                registry=self.get_registry(),
                options=self.get_settings().discovery_options(),
            )
            logger.info("Initialized MeetingDiscoverer")
        return self._discoverer

    def get_processor(self):
        """Get or create MeetingProcessor (lazy singleton)."""
        if self._processor is None:
            from services.processing_service import MeetingProcessor

            self._processor = MeetingProcessor(
                llm_provider=self.get_llm_provider(),
                document_store=self.get_document_store(),
                document_writer=self.get_document_writer(),
                mailer=self.get_mailer(),
                options=self.get_settings().digest_options(),
            )
            logger.info("Initialized MeetingProcessor")
        return self._processor

    def get_orchestrator(self):
        """Get or create Orchestrator (lazy singleton)."""
        if self._orchestrator is None:
            from services.orchestration_service import Orchestrator

            self._orchestrator = Orchestrator(
                discoverer=self.get_discoverer(),
                processor=self.get_processor(),
                registry=self.get_registry(),
                mailer=self.get_mailer(),
                pod_leader_email=self.get_settings().pod_leader_email,
            )
            logger.info("Initialized Orchestrator")
        return self._orchestrator


# Global singleton instance
_container = DIContainer()


def get_di_container() -> DIContainer:
    """Get global DI container instance."""
    return _container
