"""
Prompt templates for the two summaries.

Templates use ``{transcript}`` and ``{okr_context}`` placeholders, substituted
literally so that braces elsewhere in an override are left alone.
"""

import re
from typing import Optional

from domain.models import MeetingDescriptor
from core_transcripts.formatting.dates import long_label
from shared_utils.constants import ContentLimits


DETAILED_SUMMARY_PROMPT = (
    "You are an executive assistant analyzing a team meeting transcript. "
    "Generate a comprehensive HTML summary that includes:\n\n"
    "<h2>Executive Overview</h2>\n"
    "<p>[2-3 sentence overview of the meeting's main purpose and outcomes]</p>\n\n"
    "<h2>Key Decisions Made</h2>\n"
    "<ul>\n<li>[List all major decisions with context]</li>\n</ul>\n\n"
    "<h2>Action Items</h2>\n"
    "<ul>\n<li>[List all action items with owners and deadlines]</li>\n</ul>\n\n"
    "<h2>Discussion Highlights</h2>\n"
    "<ul>\n<li>[Key discussion points and insights]</li>\n</ul>\n\n"
    "IMPORTANT: Reduce duplications. Provide ONLY the HTML content without any markdown "
    "formatting, code blocks, or ```html markers. The output should be clean HTML that "
    "can be directly embedded in an email.\n\n"
    "Meeting Transcript:\n{transcript}\n\n"
    "OKR Context:\n{okr_context}"
)

CONCISE_SUMMARY_PROMPT = (
    "Generate a concise summary of this meeting transcript, with highlights, low lights, "
    "main outcomes and decisions sections.\n\n"
    "Format the response EXACTLY like this:\n\n"
    "**Highlights:**\n* First highlight point\n* Second highlight point\n\n"
    "**Low Lights:**\n* First challenge or issue\n* Second challenge or issue\n\n"
    "**Main Outcomes:**\n* First main outcome\n* Second main outcome\n\n"
    "**Decisions:**\n* First decision or action item\n* Second decision or action item\n\n"
    "IMPORTANT RULES:\n"
    "1. Use **bold** for section headers (Highlights, Low Lights, Main Outcomes, Decisions)\n"
    "2. Use * (asterisk followed by space) for bullet points\n"
    "3. Do NOT use any other markdown formatting\n"
    "4. Keep each bullet point concise (1-2 sentences max)\n"
    "5. Focus on the most important points from the meeting\n\n"
    "Meeting Transcript:\n{transcript}"
)


_PLACEHOLDER = re.compile(r"\{(transcript|okr_context)\}")


def _fill(template: str, transcript: str, okr_context: str = "") -> str:
    """Substitute both placeholders in one pass; inserted text is never rescanned."""
    values = {"transcript": transcript, "okr_context": okr_context}
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], template)


def build_detailed_prompt(transcript: str, okr_context: str, template: Optional[str] = None) -> str:
    """Prompt for the HTML summary sent by email."""
    return _fill(template or DETAILED_SUMMARY_PROMPT, transcript, okr_context)


def build_concise_prompt(transcript: str, template: Optional[str] = None) -> str:
    """Prompt for the bulleted summary written to the weekly digest."""
    return _fill(template or CONCISE_SUMMARY_PROMPT, transcript)


def build_transcript_input(
    meeting: MeetingDescriptor,
    transcript: str,
    max_chars: int,
    tz_name: str = "UTC",
) -> str:
    """Prefix the transcript with a title/date header, truncating the body.

    Only the transcript is bounded by ``max_chars``; the header and the
    truncation marker come on top.
    """
    header = (
        f"Meeting: {meeting.title}\n"
        f"Date: {long_label(meeting.start_time, tz_name)}\n\n"
        f"{'=' * ContentLimits.BANNER_WIDTH}\n\n"
    )
    if len(transcript) > max_chars:
        transcript = transcript[:max_chars] + ContentLimits.TRUNCATION_MARKER
    return header + transcript
