"""
Port interface for outgoing email.

Implementations: SesMailerAdapter, InMemoryMailer (adapters/)
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable


@runtime_checkable
class MailerPort(Protocol):
    """Abstract interface for sending email."""

    def send_email(
        self,
        to: List[str],
        subject: str,
        plain_body: str,
        html_body: Optional[str] = None,
    ) -> None:
        """Send one message to all recipients.

        Raises:
            ExternalServiceError: If delivery fails.
        """
        ...
