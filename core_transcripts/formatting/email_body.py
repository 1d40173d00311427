"""
Email composition for meeting summaries and run failure notices.
"""

import re
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel

from core_transcripts.formatting.dates import day_label
from domain.models import DigestOptions, MeetingDescriptor
from shared_utils.constants import EmailText


class EmailMessage(BaseModel):
    """A composed message ready for MailerPort.send_email."""

    to: List[str]
    subject: str
    plain_body: str
    html_body: Optional[str] = None


_FENCE_HTML = re.compile(r"```html\s*")
_FENCE = re.compile(r"```\s*")
_HTML_OPEN = re.compile(r"^\s*<html[^>]*>", re.IGNORECASE)
_HTML_CLOSE = re.compile(r"</html>\s*$", re.IGNORECASE)
_BODY_OPEN = re.compile(r"^\s*<body[^>]*>", re.IGNORECASE)
_BODY_CLOSE = re.compile(r"</body>\s*$", re.IGNORECASE)
_TAG = re.compile(r"<[^>]*>")

HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; margin: 0; padding: 20px; }}
    h1 {{ color: #2c3e50; margin: 0 0 10px 0; }}
    h2 {{ color: #2c3e50; border-bottom: 2px solid #3498db; padding-bottom: 5px; margin-top: 25px; }}
    .header {{ background-color: #f8f9fa; padding: 20px; border-left: 4px solid #3498db; margin-bottom: 20px; border-radius: 4px; }}
    .content {{ background-color: #fff; padding: 0; }}
    .footer {{ margin-top: 30px; color: #888; font-size: 12px; }}
  </style>
</head>
<body>
  <div class="header">
    <h1>{title}</h1>
    <p style="margin: 5px 0 0 0; color: #666; font-size: 14px;">{date}</p>
  </div>
  <div class="content">
    {summary}
  </div>
  <div class="footer">
    <p>{footer}</p>
    <p>{contact}</p>
  </div>
</body>
</html>
"""


def clean_detailed_summary(summary: str) -> str:
    """Remove code fences and wrapping ``<html>``/``<body>`` tags."""
    text = _FENCE_HTML.sub("", summary)
    text = _FENCE.sub("", text)
    text = _HTML_OPEN.sub("", text)
    text = _HTML_CLOSE.sub("", text)
    text = _BODY_OPEN.sub("", text)
    text = _BODY_CLOSE.sub("", text)
    return text.strip()


def strip_tags(html: str) -> str:
    return _TAG.sub("", html)


def resolve_recipients(meeting: MeetingDescriptor, options: DigestOptions) -> List[str]:
    """Pod leader only, or every attendee plus the leader.

    Addresses are de-duplicated case-insensitively, first spelling kept.
    """
    candidates = list(meeting.attendee_emails) if options.email_all_participants else []
    candidates.append(options.pod_leader_email)

    seen = set()
    recipients: List[str] = []
    for address in candidates:
        address = (address or "").strip()
        if not address or address.lower() in seen:
            continue
        seen.add(address.lower())
        recipients.append(address)
    return recipients


def build_summary_email(
    meeting: MeetingDescriptor,
    detailed_summary: str,
    options: DigestOptions,
) -> EmailMessage:
    """Compose the summary email for one meeting."""
    date = day_label(meeting.start_time, options.display_timezone)
    subject = f"{options.email_subject_prefix} {meeting.title} - {date}".strip()
    summary = clean_detailed_summary(detailed_summary)
    contact = EmailText.CONTACT.format(pod_leader_email=options.pod_leader_email)

    html_body = HTML_TEMPLATE.format(
        title=meeting.title,
        date=date,
        summary=summary,
        footer=EmailText.FOOTER,
        contact=contact,
    )
    plain_body = (
        f"{meeting.title} - {date}\n\n"
        f"{strip_tags(summary)}\n\n"
        f"{EmailText.FOOTER}\n"
        f"{contact}\n"
    )
    return EmailMessage(
        to=resolve_recipients(meeting, options),
        subject=subject,
        plain_body=plain_body,
        html_body=html_body,
    )


def build_error_email(
    recipient: str,
    subject: str,
    message: str,
    occurred_at: Optional[datetime] = None,
) -> EmailMessage:
    """Plain-text notice sent to the pod leader when a run fails."""
    occurred_at = occurred_at or datetime.now(timezone.utc)
    body = (
        f"{EmailText.ERROR_HEADER}\n\n"
        f"{subject}\n\n"
        f"Error Details:\n{message}\n\n"
        f"Time: {occurred_at.isoformat()}\n\n"
        f"{EmailText.ERROR_FOOTER}\n"
    )
    return EmailMessage(to=[recipient], subject=subject, plain_body=body)
