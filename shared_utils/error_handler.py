"""
Structured error handling for the digest pipeline.

Every failure that crosses a port or service boundary is an AppException
carrying an ErrorCode and a context dict. The orchestrator records the code
on the run report; anything else is logged as unexpected.
"""

from typing import Optional, Dict, Any

from shared_utils.constants import ErrorCode, LogScope
from shared_utils.logging_utils import get_scoped_logger


class AppException(Exception):
    """Base exception for application errors."""

    def __init__(
        self,
        error_code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.error_code = error_code
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialisable form used in logs and run reports."""
        return {"error": {"code": self.error_code, "message": self.message, "context": self.context}}


class _CodedError(AppException):
    """AppException whose code is fixed by the subclass."""

    code: ErrorCode = ErrorCode.INVALID_INPUT

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(self.code.value, message, context)


class ValidationError(_CodedError):
    """Bad input value."""

    code = ErrorCode.INVALID_INPUT


class ConfigurationError(_CodedError):
    """Missing or inconsistent settings (keys, sender, credentials)."""

    code = ErrorCode.INVALID_CONFIG


class ModelError(_CodedError):
    """LLM provider unavailable, failing, or returning nothing."""

    code = ErrorCode.MODEL_NOT_AVAILABLE


class SummarizationError(_CodedError):
    """Summary generation returned nothing usable."""

    code = ErrorCode.SUMMARIZATION_FAILED


class ExternalServiceError(AppException):
    """Calendar, Drive, Docs, SES or DynamoDB call failed."""

    def __init__(self, service: str, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            ErrorCode.EXTERNAL_SERVICE_ERROR.value,
            f"{service} unavailable: {message}",
            {**(context or {}), "service": service},
        )


class MeetingProcessingError(AppException):
    """A step of the per-meeting pipeline failed (summaries, documents, email)."""

    def __init__(
        self,
        message: str,
        meeting_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        if meeting_id:
            ctx["meeting_id"] = meeting_id
        super().__init__(ErrorCode.MEETING_PROCESSING_FAILED.value, message, ctx)


def log_exception(
    exc: Exception,
    scope: str = LogScope.ERROR_HANDLER,
    logger: Optional[Any] = None,
    **context: Any,
) -> None:
    """Log ``exc`` as ``app_exception`` or ``unexpected_exception``.

    ``context`` is bound to the event (meeting_id, title, stage).
    """
    logger = logger or get_scoped_logger(scope)

    if isinstance(exc, AppException):
        logger.error(
            "app_exception",
            error_code=exc.error_code,
            message=exc.message,
            context=exc.context,
            **context,
        )
        return

    logger.error(
        "unexpected_exception",
        error_type=type(exc).__name__,
        message=str(exc),
        **context,
    )
