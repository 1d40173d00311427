"""
Tests for shared_utils.logging_utils.

Covers configure_logging(), get_scoped_logger(), LogLevel enum, the
log_execution() decorator and ContextualLogger.
"""

import logging

import pytest

from shared_utils.constants import LogScope
from shared_utils.logging_utils import (
    ContextualLogger,
    LogLevel,
    configure_logging,
    get_scoped_logger,
    log_execution,
)


# ---------------------------------------------------------------------------
# configure_logging / get_scoped_logger
# ---------------------------------------------------------------------------


class TestConfigureLogging:
    @pytest.mark.parametrize("environment", ["development", "production"])
    def test_sets_root_level(self, environment: str) -> None:
        configure_logging(environment, "warning")
        assert logging.getLogger().level == logging.WARNING
        configure_logging(environment, "INFO")


class TestGetScopedLogger:
    def test_returns_bound_logger(self) -> None:
        logger = get_scoped_logger(LogScope.MATCHING)
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "error", None))

    def test_logging_does_not_raise(self) -> None:
        for scope in (LogScope.MATCHING, LogScope.CONTENT, LogScope.PROCESSING, LogScope.WORKER):
            get_scoped_logger(scope).info("test_event", key="value")


# ---------------------------------------------------------------------------
# LogLevel enum
# ---------------------------------------------------------------------------


class TestLogLevel:
    def test_values(self) -> None:
        assert LogLevel.DEBUG == "DEBUG"
        assert LogLevel.INFO == "INFO"
        assert LogLevel.WARNING == "WARNING"
        assert LogLevel.ERROR == "ERROR"
        assert LogLevel.CRITICAL == "CRITICAL"


# ---------------------------------------------------------------------------
# log_execution decorator
# ---------------------------------------------------------------------------


class TestLogExecution:
    def test_passes_through_return_value(self) -> None:
        @log_execution(scope=LogScope.ORCHESTRATION)
        def add(a: int, b: int) -> int:
            return a + b

        assert add(2, 3) == 5

    def test_propagates_exception(self) -> None:
        @log_execution(scope=LogScope.ORCHESTRATION)
        def boom() -> None:
            raise ValueError("oops")

        with pytest.raises(ValueError, match="oops"):
            boom()

    def test_preserves_function_name(self) -> None:
        @log_execution(scope=LogScope.ORCHESTRATION, level=LogLevel.DEBUG.value)
        def my_func() -> None:
            pass

        assert my_func.__name__ == "my_func"


# ---------------------------------------------------------------------------
# ContextualLogger
# ---------------------------------------------------------------------------


class TestContextualLogger:
    def test_all_levels_callable(self) -> None:
        cl = ContextualLogger(scope=LogScope.ADAPTER)
        for method_name in ("info", "debug", "warning", "error", "critical"):
            assert callable(getattr(cl, method_name))

    def test_info_does_not_raise(self) -> None:
        ContextualLogger(scope=LogScope.ADAPTER).info("flag_saved", key="K")

    def test_scope_stored(self) -> None:
        assert ContextualLogger(scope=LogScope.WORKER).scope == LogScope.WORKER

    def test_bind_merges_context(self) -> None:
        base = ContextualLogger(scope=LogScope.ADAPTER, table="flags")
        bound = base.bind(path="/tmp/flags.json")
        assert bound.scope == LogScope.ADAPTER
        assert bound.context == {"table": "flags", "path": "/tmp/flags.json"}
        assert base.context == {"table": "flags"}
        bound.info("flag_saved", key="K")
