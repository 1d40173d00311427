"""
Centralized logging utilities with scoped loggers and decorators.
Provides structured logging with consistent field names across services.
"""

import functools
import logging
import sys
import time
from typing import Any, Callable
from enum import Enum

import structlog

from shared_utils.constants import Defaults, Environment, LogScope


_SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(environment: str = Environment.PRODUCTION.value, level: str = Defaults.LOG_LEVEL) -> None:
    """Configure structlog and the stdlib bridge for the worker process.

    Staging and production emit JSON lines; development gets the console renderer.

    Args:
        environment: Application environment name
        level: Root log level name
    """
    is_dev = environment in (Environment.DEVELOPMENT.value, Environment.DEV.value)
    renderer = structlog.dev.ConsoleRenderer() if is_dev else structlog.processors.JSONRenderer()

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level.upper())
    logging.getLogger().setLevel(level.upper())

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, renderer],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# JSON output until the worker calls configure_logging()
structlog.configure(
    processors=[*_SHARED_PROCESSORS, structlog.processors.JSONRenderer()],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def get_scoped_logger(scope: str) -> structlog.BoundLogger:
    """Get a scoped logger for a specific component.

    Args:
        scope: LogScope value (matching, content, discovery, processing, ...)

    Returns:
        Structured logger bound to scope.
    """
    logger = structlog.get_logger()
    return logger.bind(scope=scope)


class LogLevel(str, Enum):
    """Log level enumeration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def log_execution(scope: str = LogScope.ORCHESTRATION, level: str = LogLevel.INFO.value):
    """Decorator emitting ``<name>_start``, ``<name>_success`` and ``<name>_failed``.

    Failures are logged at error level and re-raised.

    Example:
        @log_execution(scope=LogScope.ORCHESTRATION)
        def run(self) -> RunReport:
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            logger = get_scoped_logger(scope).bind(func_name=func.__name__)
            emit = getattr(logger, level.lower(), logger.info)
            started = time.perf_counter()
            emit(f"{func.__name__}_start")

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"{func.__name__}_failed",
                    elapsed_seconds=round(time.perf_counter() - started, 3),
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise

            emit(
                f"{func.__name__}_success",
                elapsed_seconds=round(time.perf_counter() - started, 3),
                result_type=type(result).__name__,
            )
            return result

        return wrapper
    return decorator


class ContextualLogger:
    """Scoped logger carrying fixed context (a file path, a table name).

    Usage:
        log = ContextualLogger(LogScope.ADAPTER).bind(path=path)
        log.info("flag_saved", key=key)
    """

    def __init__(self, scope: str, **context: Any):
        self.scope = scope
        self.context = context
        self.logger = get_scoped_logger(scope).bind(**context)

    def bind(self, **context: Any) -> "ContextualLogger":
        return ContextualLogger(self.scope, **{**self.context, **context})

    def debug(self, event_name: str, **kwargs):
        self.logger.debug(event_name, **kwargs)

    def info(self, event_name: str, **kwargs):
        self.logger.info(event_name, **kwargs)

    def warning(self, event_name: str, **kwargs):
        self.logger.warning(event_name, **kwargs)

    def error(self, event_name: str, **kwargs):
        self.logger.error(event_name, **kwargs)

    def critical(self, event_name: str, **kwargs):
        self.logger.critical(event_name, **kwargs)
