"""
Constants management.
Centralized configuration for all magic values, model IDs, and defaults.
"""

from enum import Enum
from typing import Final, Tuple


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    # Short aliases
    DEV = "dev"
    STAGE = "stage"
    PROD = "prod"


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    GEMINI = "gemini"
    OPENAI = "openai"
    BEDROCK = "bedrock"


class WorkerAction(str, Enum):
    """Actions accepted by the scheduled worker."""
    RUN = "run"
    VALIDATE = "validate"
    RESET = "reset"


# Model IDs
class ModelIDs:
    """Centralized model identifiers."""
    GEMINI_FLASH: Final[str] = "gemini-2.0-flash"
    OPENAI_GPT_4O_MINI: Final[str] = "gpt-4o-mini"
    BEDROCK_CLAUDE_3_HAIKU: Final[str] = "anthropic.claude-3-haiku-20240307-v1:0"


# Default values
class Defaults:
    """Defaults for matching, summarization and delivery."""
    LOOKBACK_DAYS: Final[int] = 3
    TRANSCRIPT_SEARCH_DAYS: Final[int] = 7
    MAX_DOCUMENTS_SCANNED: Final[int] = 500
    EARLY_EXIT_HOURS: Final[float] = 2.0
    MAX_INPUT_CHARS: Final[int] = 100_000
    MAX_OUTPUT_TOKENS: Final[int] = 8192
    LLM_TEMPERATURE: Final[float] = 0.7
    REQUEST_TIMEOUT: Final[float] = 60.0
    LOG_LEVEL: Final[str] = "INFO"
    AWS_REGION: Final[str] = "eu-west-2"
    DISPLAY_TIMEZONE: Final[str] = "UTC"
    PROCESSED_MEETINGS_KEY: Final[str] = "PROCESSED_MEETINGS"
    FLAG_STORE_PATH: Final[str] = "data/state/flags.json"
    WEEKLY_SUMMARY_SECTION: Final[str] = "POD Meetings"
    EMAIL_SUBJECT_PREFIX: Final[str] = "[Pod Update]"
    OKR_CONTEXT_UNAVAILABLE: Final[str] = "OKR context not available"


class ContentLimits:
    """Thresholds used when classifying and accepting extracted text."""
    MIN_TEXT_LENGTH: Final[int] = 10
    SIGNATURE_WINDOW: Final[int] = 100
    MIN_PRINTABLE_RATIO: Final[float] = 0.7
    # Legacy fallback thresholds (event description heuristics)
    DESCRIPTION_AS_TRANSCRIPT: Final[int] = 500
    LINKED_DOCUMENT_MIN: Final[int] = 100
    INDICATOR_DESCRIPTION_MIN: Final[int] = 200
    TRUNCATION_MARKER: Final[str] = "\n\n[TRANSCRIPT TRUNCATED]"
    BANNER_WIDTH: Final[int] = 80


class TranscriptPatterns:
    """Naming conventions and heuristics for transcript documents."""
    STRICT_SUFFIX: Final[str] = "notes by gemini"
    DEFAULT_CUSTOM_PATTERNS: Final[Tuple[str, ...]] = (
        "notes by gemini",
        "gemini notes",
        "meeting notes",
    )
    FALLBACK_INDICATORS: Final[Tuple[str, ...]] = (
        "transcript",
        "notes",
        "summary",
        "minutes",
        "meeting notes",
    )
    DOC_LINK_REGEX: Final[str] = r"https://docs\.google\.com/document/d/([a-zA-Z0-9_-]+)"
    # PDF, ZIP, PNG, GIF, JPEG (JFIF marker and SOI), BMP
    BINARY_SIGNATURES: Final[Tuple[str, ...]] = (
        "%PDF",
        "PK\x03\x04",
        "\x89PNG",
        "GIF8",
        "JFIF",
        "BM\x00\x00",
        "\xff\xd8\xff",
    )
    SUMMARY_SECTIONS: Final[Tuple[str, ...]] = (
        "Highlights",
        "Low Lights",
        "Main Outcomes",
        "Decisions",
    )
    LEGACY_SECTION_MARKER: Final[str] = "##"


class GoogleEndpoints:
    """Export URLs and API scopes for Google Workspace."""
    DOCS_EXPORT_TEXT: Final[str] = "https://docs.google.com/document/d/{document_id}/export?format=txt"
    DOCS_EXPORT_HTML: Final[str] = "https://docs.google.com/document/d/{document_id}/export?format=html"
    DRIVE_EXPORT_TEXT: Final[str] = "https://www.googleapis.com/drive/v3/files/{document_id}/export?mimeType=text/plain"
    DRIVE_EXPORT_HTML: Final[str] = "https://www.googleapis.com/drive/v3/files/{document_id}/export?mimeType=text/html"
    DOCUMENT_MIME_TYPE: Final[str] = "application/vnd.google-apps.document"
    FOLDER_MIME_TYPE: Final[str] = "application/vnd.google-apps.folder"
    SCOPES: Final[Tuple[str, ...]] = (
        "https://www.googleapis.com/auth/calendar.readonly",
        "https://www.googleapis.com/auth/drive.readonly",
        "https://www.googleapis.com/auth/documents",
    )


# Logging scopes
class LogScope:
    """Standardized logging scope names."""
    CONFIG = "config_loader"
    MATCHING = "matching"
    CONTENT = "content"
    DISCOVERY = "discovery"
    PROCESSING = "processing"
    ORCHESTRATION = "orchestration"
    WORKER = "worker"
    ADAPTER = "adapter"
    PROVIDER = "provider"
    VALIDATION = "validation"
    ERROR_HANDLER = "error_handler"


# Error codes
class ErrorCode(str, Enum):
    """Standardized error codes for consistency."""
    INVALID_CONFIG = "INVALID_CONFIG"
    INVALID_INPUT = "INVALID_INPUT"
    MODEL_NOT_AVAILABLE = "MODEL_NOT_AVAILABLE"
    SUMMARIZATION_FAILED = "SUMMARIZATION_FAILED"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    MEETING_PROCESSING_FAILED = "MEETING_PROCESSING_FAILED"


class EmailText:
    """Fixed wording for outgoing mail."""
    FOOTER: Final[str] = "This summary was automatically generated by the Pod Leader Automation system."
    CONTACT: Final[str] = "Questions? Contact {pod_leader_email}"
    ERROR_HEADER: Final[str] = "An error occurred in the Pod Leader Automation system:"
    ERROR_FOOTER: Final[str] = "Please check the worker logs for more details."
    RUN_FAILED_SUBJECT: Final[str] = "Daily Pod Automation Failed"
