"""
Amazon SES mailer adapter.

Implements MailerPort using boto3 ``ses.send_email``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import ClientError

from shared_utils.constants import Defaults, LogScope
from shared_utils.error_handler import ConfigurationError, ExternalServiceError
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.ADAPTER)


class SesMailerAdapter:
    """Amazon SES implementation of MailerPort."""

    def __init__(
        self,
        sender: str,
        region: str = Defaults.AWS_REGION,
        endpoint_url: str = "",
        ses_client: Optional[object] = None,
    ) -> None:
        if not sender:
            raise ConfigurationError("EMAIL_SENDER not configured")
        self._sender = sender
        client_kwargs: dict = {"region_name": region}
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url
        self._ses = ses_client or boto3.client("ses", **client_kwargs)

    def send_email(
        self,
        to: List[str],
        subject: str,
        plain_body: str,
        html_body: Optional[str] = None,
    ) -> None:
        body: Dict[str, Any] = {"Text": {"Data": plain_body, "Charset": "UTF-8"}}
        if html_body:
            body["Html"] = {"Data": html_body, "Charset": "UTF-8"}

        try:
            response = self._ses.send_email(
                Source=self._sender,
                Destination={"ToAddresses": list(to)},
                Message={
                    "Subject": {"Data": subject, "Charset": "UTF-8"},
                    "Body": body,
                },
            )
        except ClientError as exc:
            logger.error("ses_send_failed", recipients=len(to), error=str(exc))
            raise ExternalServiceError("SES", f"Failed to send email: {exc}") from exc

        logger.info("ses_email_sent", recipients=len(to), message_id=response.get("MessageId"))
