"""
Worker entrypoint for the scheduled pod digest run (ECS Fargate scheduled task).

Action selected with the ``WORKER_ACTION`` environment variable:
    run        discover and process meetings (default)
    validate   check the configuration and print the report
    reset      clear the processed-meetings flag

Exit codes: 0 on success, 1 on configuration errors or startup failure. A run
that aborts on discovery still exits 0; the failure is reported by email and
in the logs. A failure while wiring the pipeline (credentials, SES sender, LLM
provider) also mails the pod leader when a mailer can still be built.

All logging is JSON (structlog) and ships to CloudWatch via the awslogs driver.
"""

from __future__ import annotations

import os
import sys

from core_transcripts.formatting.email_body import build_error_email
from shared_utils.config_loader import get_settings
from shared_utils.constants import EmailText, LogScope, WorkerAction
from shared_utils.di_container import get_di_container
from shared_utils.logging_utils import configure_logging, get_scoped_logger
from shared_utils.validation import validate_configuration

logger = get_scoped_logger(LogScope.WORKER)


def _notify_startup_failure(container, settings, exc: Exception) -> None:
    """Best-effort mail to the pod leader when the pipeline cannot be built."""
    recipient = settings.pod_leader_email
    if not recipient:
        logger.warning("startup_failure_not_notified", reason="no_pod_leader_email")
        return
    try:
        notice = build_error_email(recipient, EmailText.RUN_FAILED_SUBJECT, f"Worker startup failed: {exc}")
        container.get_mailer().send_email(notice.to, notice.subject, notice.plain_body)
        logger.info("startup_failure_notified", recipient=recipient)
    except Exception as mail_exc:
        logger.error("startup_failure_notification_failed", error=str(mail_exc))


def _run(settings) -> int:
    container = get_di_container()
    try:
        orchestrator = container.get_orchestrator()
    except Exception as exc:
        logger.error("worker_startup_failed", error=str(exc))
        _notify_startup_failure(container, settings, exc)
        return 1

    report = orchestrator.run()
    logger.info(
        "worker_run_completed",
        discovered=report.discovered,
        succeeded=report.succeeded,
        failed=report.failed,
        aborted=report.aborted,
        error_message=report.error_message,
    )
    return 0


def _validate(settings) -> int:
    report = validate_configuration(settings)
    for error in report.errors:
        print(f"ERROR: {error}")
    for warning in report.warnings:
        print(f"WARNING: {warning}")
    if report.is_valid:
        print("Configuration is valid")
        return 0
    return 1


def _reset(settings) -> int:
    get_di_container().get_registry().reset()
    print("Processed meetings cleared")
    return 0


_ACTIONS = {
    WorkerAction.RUN: _run,
    WorkerAction.VALIDATE: _validate,
    WorkerAction.RESET: _reset,
}


def main() -> int:
    """Worker main: parse env vars, configure logging, dispatch the action."""
    raw_action = os.environ.get("WORKER_ACTION", WorkerAction.RUN.value).strip().lower()
    try:
        action = WorkerAction(raw_action)
    except ValueError:
        logger.error("worker_unknown_action", action=raw_action)
        print(f"ERROR: unknown WORKER_ACTION '{raw_action}'", file=sys.stderr)
        return 1

    try:
        settings = get_settings()
    except Exception as exc:
        logger.error("worker_settings_invalid", error=str(exc))
        print(f"ERROR: invalid configuration: {exc}", file=sys.stderr)
        return 1

    configure_logging(settings.environment, settings.log_level)
    logger.info("worker_started", action=action.value, environment=settings.environment)

    try:
        return _ACTIONS[action](settings)
    except Exception as exc:
        logger.error("worker_failed", action=action.value, error=str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
