"""
Document content resolution.

The document store exposes different capabilities depending on grant scope and
document type, so content is read through an ordered list of strategies:

    1. native structured read
    2. plain-text export (primary endpoint)
    3. HTML export (primary endpoint) + HtmlTextExtractor
    4. plain-text export (secondary endpoint)

The first strategy whose output passes ContentValidator wins.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from core_transcripts.content.html_text import HtmlTextExtractor
from core_transcripts.content.validator import ContentValidator
from domain.models import ExportEndpoint, ExportFormat
from ports.document_store import DocumentStorePort
from shared_utils.constants import LogScope
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.CONTENT)

Strategy = Tuple[str, Callable[[str], str]]


class DocumentContentResolver:
    """Resolves a document id to validated plain text, or None."""

    def __init__(
        self,
        document_store: DocumentStorePort,
        validator: Optional[ContentValidator] = None,
        html_extractor: Optional[HtmlTextExtractor] = None,
    ) -> None:
        self._store = document_store
        self._validator = validator or ContentValidator()
        self._html = html_extractor or HtmlTextExtractor()

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _native(self, document_id: str) -> str:
        return self._store.get_document_text(document_id)

    def _text_export(self, document_id: str) -> str:
        return self._store.fetch_export(document_id, ExportFormat.TEXT, ExportEndpoint.PRIMARY)

    def _html_export(self, document_id: str) -> str:
        html = self._store.fetch_export(document_id, ExportFormat.HTML, ExportEndpoint.PRIMARY)
        return self._html.extract_text(html)

    def _secondary_export(self, document_id: str) -> str:
        return self._store.fetch_export(document_id, ExportFormat.TEXT, ExportEndpoint.SECONDARY)

    def strategies(self) -> List[Strategy]:
        """Extraction strategies in the order they are attempted."""
        return [
            ("native_read", self._native),
            ("text_export", self._text_export),
            ("html_export", self._html_export),
            ("secondary_export", self._secondary_export),
        ]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, document_id: str) -> Optional[str]:
        """Return the first valid text produced by the strategies.

        Strategy exceptions and invalid content are logged and skipped.

        Args:
            document_id: Document store identifier.

        Returns:
            Validated text, or None if every strategy failed.
        """
        for name, strategy in self.strategies():
            try:
                content = strategy(document_id)
            except Exception as exc:
                logger.warning(
                    "content_strategy_failed",
                    document_id=document_id,
                    strategy=name,
                    error=str(exc),
                )
                continue

            reason = self._validator.rejection_reason(content)
            if reason is None:
                logger.info(
                    "content_resolved",
                    document_id=document_id,
                    strategy=name,
                    chars=len(content),
                    preview=content[:100],
                )
                return content

            logger.warning(
                "content_strategy_invalid",
                document_id=document_id,
                strategy=name,
                reason=reason,
            )

        logger.error("content_resolution_exhausted", document_id=document_id)
        return None
