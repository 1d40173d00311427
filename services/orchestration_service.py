"""
Run orchestration.

Discovery, then each meeting processed in turn. A per-meeting failure is
logged and counted; a failure outside the per-meeting loop aborts the run and
notifies the pod leader. Already-marked meetings stay marked either way.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from core_transcripts.formatting.email_body import build_error_email
from domain.models import ProcessingFailure, RunReport
from ports.mailer import MailerPort
from services.discovery_service import MeetingDiscoverer
from services.processed_registry import ProcessedMeetingRegistry
from services.processing_service import MeetingProcessor
from shared_utils.constants import EmailText, ErrorCode, LogScope
from shared_utils.error_handler import AppException, log_exception
from shared_utils.logging_utils import get_scoped_logger, log_execution

logger = get_scoped_logger(LogScope.ORCHESTRATION)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Orchestrator:
    """Runs one scheduled pass of the pod meeting digest."""

    def __init__(
        self,
        discoverer: MeetingDiscoverer,
        processor: MeetingProcessor,
        registry: ProcessedMeetingRegistry,
        mailer: MailerPort,
        pod_leader_email: str = "",
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._discoverer = discoverer
        self._processor = processor
        self._registry = registry
        self._mailer = mailer
        self._pod_leader_email = pod_leader_email
        self._clock = clock or _utc_now

    @log_execution(scope=LogScope.ORCHESTRATION)
    def run(self) -> RunReport:
        """Discover and process meetings; never raises."""
        report = RunReport(started_at=self._clock().isoformat())

        try:
            meetings = self._discoverer.discover()
        except Exception as exc:
            log_exception(exc, scope=LogScope.ORCHESTRATION, stage="discovery")
            report.aborted = True
            report.error_message = str(exc)
            report.completed_at = self._clock().isoformat()
            self.send_error_notification(EmailText.RUN_FAILED_SUBJECT, str(exc))
            return report

        report.discovered = len(meetings)
        logger.info("run_meetings_discovered", count=len(meetings))

        for record in meetings:
            try:
                self._processor.process(record)
                self._registry.mark(record.id)
                report.succeeded += 1
            except Exception as exc:
                log_exception(exc, scope=LogScope.ORCHESTRATION, meeting_id=record.id, title=record.title)
                report.failed += 1
                code = exc.error_code if isinstance(exc, AppException) else ErrorCode.MEETING_PROCESSING_FAILED.value
                report.failures.append(
                    ProcessingFailure(
                        meeting_id=record.id,
                        title=record.title,
                        error_code=code,
                        message=str(exc),
                    )
                )

        report.completed_at = self._clock().isoformat()
        logger.info(
            "run_completed",
            discovered=report.discovered,
            succeeded=report.succeeded,
            failed=report.failed,
        )
        return report

    def send_error_notification(self, subject: str, message: str) -> None:
        """Mail the pod leader about a failed run; delivery errors are only logged."""
        if not self._pod_leader_email:
            logger.warning("error_notification_skipped", reason="no_pod_leader_email")
            return
        notice = build_error_email(self._pod_leader_email, subject, message, self._clock())
        try:
            self._mailer.send_email(notice.to, notice.subject, notice.plain_body)
            logger.info("error_notification_sent", recipient=self._pod_leader_email)
        except Exception as exc:
            logger.error("error_notification_failed", error=str(exc))
