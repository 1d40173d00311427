from pydantic_settings import BaseSettings
from pydantic import field_validator, ConfigDict
from functools import lru_cache
from typing import List, Optional
import json
import logging

import boto3

from domain.models import DigestOptions, DiscoveryOptions, MatchMode, MatchOptions
from shared_utils.constants import Defaults, LLMProvider, ModelIDs, TranscriptPatterns

logger = logging.getLogger(__name__)


def get_secret_from_aws(secret_name: str, region: str = Defaults.AWS_REGION, field: str = "api_key") -> str:
    """Fetch an API key from AWS Secrets Manager.

    Args:
        secret_name: Name of the secret in Secrets Manager
        region: AWS region
        field: JSON field holding the key inside the secret

    Returns:
        Secret value or empty string if fetch fails
    """
    try:
        client = boto3.client("secretsmanager", region_name=region)
        response = client.get_secret_value(SecretId=secret_name)
        if "SecretString" in response:
            secret = json.loads(response["SecretString"])
            return secret.get(field, "")
        return ""
    except Exception as e:
        logger.warning(f"Could not fetch secret from Secrets Manager: {e}")
        return ""


class Settings(BaseSettings):
    """Application configuration with environment variable precedence.

    Precedence: 1) Environment Variables > 2) .env file > 3) Class defaults

    Frozen after construction; components receive the option bundles built by
    ``match_options()``, ``discovery_options()`` and ``digest_options()``.
    """
    app_name: str = "Pod Meeting Digest"
    environment: str
    log_level: str = Defaults.LOG_LEVEL

    # Discovery
    meeting_titles: List[str] = []
    lookback_days: int = Defaults.LOOKBACK_DAYS
    calendar_id: str = "primary"

    # Transcript matching
    transcript_search_days: int = Defaults.TRANSCRIPT_SEARCH_DAYS
    meet_recordings_folder_id: Optional[str] = None
    transcript_match_mode: str = MatchMode.STRICT.value
    custom_transcript_patterns: List[str] = list(TranscriptPatterns.DEFAULT_CUSTOM_PATTERNS)
    max_documents_scanned: int = Defaults.MAX_DOCUMENTS_SCANNED

    # Target documents
    okr_document_id: str = ""
    weekly_summary_doc_id: str = ""
    transcript_archive_doc_id: str = ""
    weekly_summary_section: str = Defaults.WEEKLY_SUMMARY_SECTION

    # Team
    pod_name: str = ""
    pod_leader_email: str = ""
    display_timezone: str = Defaults.DISPLAY_TIMEZONE

    # Email
    email_subject_prefix: str = Defaults.EMAIL_SUBJECT_PREFIX
    email_all_participants: bool = False
    email_sender: str = ""

    # LLM Configuration
    llm_provider: str = LLMProvider.GEMINI.value
    llm_secret_name: Optional[str] = None
    llm_temperature: float = Defaults.LLM_TEMPERATURE
    gemini_api_key: Optional[str] = None
    gemini_model: str = ModelIDs.GEMINI_FLASH
    gemini_max_output_tokens: int = Defaults.MAX_OUTPUT_TOKENS
    gemini_max_input_chars: int = Defaults.MAX_INPUT_CHARS
    openai_api_key: Optional[str] = None
    openai_llm_model_id: str = ModelIDs.OPENAI_GPT_4O_MINI
    bedrock_region: str = Defaults.AWS_REGION
    bedrock_llm_model_id: str = ModelIDs.BEDROCK_CLAUDE_3_HAIKU
    detailed_summary_prompt: Optional[str] = None
    concise_summary_prompt: Optional[str] = None

    # Google Workspace
    google_credentials_file: str = ""
    google_delegated_user: Optional[str] = None

    # Idempotency store
    processed_meetings_key: str = Defaults.PROCESSED_MEETINGS_KEY
    flag_store_table_name: str = ""
    flag_store_path: str = Defaults.FLAG_STORE_PATH

    # AWS
    aws_region: str = Defaults.AWS_REGION
    aws_endpoint_url: str = ""

    model_config = ConfigDict(env_file=".env", case_sensitive=False, extra="ignore", frozen=True)

    @field_validator('llm_provider')
    @classmethod
    def validate_llm_provider(cls, v: str) -> str:
        """Validate LLM provider is supported."""
        valid_providers = {p.value for p in LLMProvider}
        if v.lower() not in valid_providers:
            raise ValueError(f"llm_provider must be one of {valid_providers}, got {v}")
        return v.lower()

    @field_validator('transcript_match_mode')
    @classmethod
    def validate_match_mode(cls, v: str) -> str:
        """Validate transcript match mode is strict or flexible."""
        valid_modes = {m.value for m in MatchMode}
        if v.lower() not in valid_modes:
            raise ValueError(f"transcript_match_mode must be one of {valid_modes}, got {v}")
        return v.lower()

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is recognized."""
        valid_envs = {"development", "staging", "production", "dev", "stage", "prod"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}, got {v}")
        return v.lower()

    @field_validator('lookback_days', 'transcript_search_days', 'max_documents_scanned', 'gemini_max_input_chars')
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Reject negative windows and limits."""
        if v < 0:
            raise ValueError(f"value must be >= 0, got {v}")
        return v

    def llm_api_key(self) -> Optional[str]:
        """API key of the selected LLM provider (Bedrock uses IAM, so None)."""
        if self.llm_provider == LLMProvider.GEMINI.value:
            return self.gemini_api_key
        if self.llm_provider == LLMProvider.OPENAI.value:
            return self.openai_api_key
        return None

    def match_options(self) -> MatchOptions:
        return MatchOptions(
            transcript_search_days=self.transcript_search_days,
            meet_recordings_folder_id=self.meet_recordings_folder_id or None,
            match_mode=MatchMode(self.transcript_match_mode),
            custom_patterns=tuple(self.custom_transcript_patterns),
            max_documents_scanned=max(self.max_documents_scanned, 1),
        )

    def discovery_options(self) -> DiscoveryOptions:
        return DiscoveryOptions(
            meeting_titles=tuple(self.meeting_titles),
            fallback_keywords=tuple(self.custom_transcript_patterns),
            lookback_days=self.lookback_days,
        )

    def digest_options(self) -> DigestOptions:
        return DigestOptions(
            okr_document_id=self.okr_document_id,
            weekly_summary_doc_id=self.weekly_summary_doc_id,
            transcript_archive_doc_id=self.transcript_archive_doc_id,
            weekly_summary_section=self.weekly_summary_section,
            max_input_chars=max(self.gemini_max_input_chars, 1),
            pod_leader_email=self.pod_leader_email,
            email_subject_prefix=self.email_subject_prefix,
            email_all_participants=self.email_all_participants,
            display_timezone=self.display_timezone,
            detailed_summary_prompt=self.detailed_summary_prompt,
            concise_summary_prompt=self.concise_summary_prompt,
        )


@lru_cache()
def get_settings() -> Settings:
    """Load and cache application settings.

    If ``LLM_SECRET_NAME`` is set and the selected provider has no API key,
    the key is fetched from AWS Secrets Manager.

    Returns:
        Validated Settings instance

    Raises:
        ValueError: If required settings are missing or invalid
    """
    settings = Settings()

    if settings.llm_secret_name and not settings.llm_api_key():
        secret_key = get_secret_from_aws(settings.llm_secret_name, settings.aws_region)
        if secret_key:
            key_field = f"{settings.llm_provider}_api_key"
            settings = settings.model_copy(update={key_field: secret_key})
            logger.debug("fetched_llm_key_from_secrets_manager")

    logger.info(
        "configuration_loaded environment=%s llm_provider=%s match_mode=%s meeting_titles=%d",
        settings.environment,
        settings.llm_provider,
        settings.transcript_match_mode,
        len(settings.meeting_titles),
    )

    return settings
