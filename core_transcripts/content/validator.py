"""
Classification of extracted document text.

Export endpoints occasionally hand back a PDF, a zipped package or an image
instead of text. ContentValidator decides whether a string is human-readable
enough to be treated as a transcript.
"""

import re
from typing import Optional

from shared_utils.constants import ContentLimits, TranscriptPatterns


class ContentValidator:
    """Accepts mostly-printable text and rejects binary payloads."""

    PRINTABLE: re.Pattern = re.compile(r"[\x20-\x7E\s]")

    @staticmethod
    def rejection_reason(text: Optional[str]) -> Optional[str]:
        """Explain why ``text`` is not valid content.

        Args:
            text: Candidate text (may be None).

        Returns:
            ``"too_short"``, ``"binary_signature"`` or ``"low_printable_ratio"``,
            or None when the text is acceptable.
        """
        if not text or len(text) < ContentLimits.MIN_TEXT_LENGTH:
            return "too_short"

        head = text[:ContentLimits.SIGNATURE_WINDOW]
        if any(signature in head for signature in TranscriptPatterns.BINARY_SIGNATURES):
            return "binary_signature"

        printable = len(ContentValidator.PRINTABLE.findall(text))
        if printable / len(text) < ContentLimits.MIN_PRINTABLE_RATIO:
            return "low_printable_ratio"

        return None

    @staticmethod
    def is_valid(text: Optional[str]) -> bool:
        """True when ``text`` is human-readable content."""
        return ContentValidator.rejection_reason(text) is None
