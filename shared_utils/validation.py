"""
Input and configuration validation.
"""

from typing import List
import re

from domain.models import ConfigurationReport, MatchMode
from shared_utils.config_loader import Settings
from shared_utils.constants import Defaults, LLMProvider, LogScope
from shared_utils.error_handler import ValidationError
from shared_utils.logging_utils import get_scoped_logger


logger = get_scoped_logger(LogScope.VALIDATION)


class InputValidator:
    """Utility class for input validation."""

    EMAIL_PATTERN: re.Pattern = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

    @staticmethod
    def validate_non_empty_string(value: str, field_name: str) -> str:
        """Validate non-empty string.

        Args:
            value: String to validate
            field_name: Name of field for error messages

        Returns:
            Validated string

        Raises:
            ValidationError: If validation fails
        """
        if not isinstance(value, str):
            raise ValidationError(f"{field_name} must be a string")

        if not value or not value.strip():
            raise ValidationError(f"{field_name} cannot be empty")

        return value.strip()

    @staticmethod
    def validate_email(value: str, field_name: str) -> str:
        """Validate an email address (shape only)."""
        value = InputValidator.validate_non_empty_string(value, field_name)
        if not InputValidator.EMAIL_PATTERN.match(value):
            raise ValidationError(f"{field_name} is not a valid email address")
        return value


def _check(errors: List[str], validator, *args) -> None:
    try:
        validator(*args)
    except ValidationError as e:
        errors.append(e.message)


def validate_configuration(settings: Settings) -> ConfigurationReport:
    """Check settings for missing or suspicious values before a run.

    Args:
        settings: Loaded settings

    Returns:
        ConfigurationReport with blocking errors and advisory warnings
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not settings.meeting_titles:
        errors.append("No meeting titles configured")

    _check(errors, InputValidator.validate_non_empty_string, settings.weekly_summary_doc_id, "weekly_summary_doc_id")
    _check(errors, InputValidator.validate_non_empty_string, settings.transcript_archive_doc_id, "transcript_archive_doc_id")
    _check(errors, InputValidator.validate_email, settings.pod_leader_email, "pod_leader_email")

    if settings.llm_provider != LLMProvider.BEDROCK.value and not settings.llm_api_key() and not settings.llm_secret_name:
        errors.append(f"API key for llm_provider '{settings.llm_provider}' not set")

    if not settings.okr_document_id:
        warnings.append("OKR document ID not set")

    if settings.lookback_days < 1 or settings.lookback_days > 30:
        warnings.append("lookback_days should be between 1 and 30")

    if settings.gemini_max_output_tokens > Defaults.MAX_OUTPUT_TOKENS:
        warnings.append(f"gemini_max_output_tokens exceeds the Gemini limit ({Defaults.MAX_OUTPUT_TOKENS})")

    if settings.transcript_match_mode == MatchMode.FLEXIBLE.value and not settings.custom_transcript_patterns:
        warnings.append("Flexible match mode with no custom transcript patterns matches nothing")

    report = ConfigurationReport(errors=errors, warnings=warnings)
    logger.info(
        "configuration_validated",
        errors=len(errors),
        warnings=len(warnings),
        valid=report.is_valid,
    )
    return report
