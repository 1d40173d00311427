"""
Google Docs writer adapter.

Implements DocumentWriterPort. Only paragraphs are exposed as blocks; block
positions map to the start index of the corresponding paragraph. Docs API
indices count UTF-16 code units.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from googleapiclient.errors import HttpError

from adapters.google_auth import build_service
from domain.models import BlockKind, DocumentBlock
from shared_utils.constants import ContentLimits, LogScope
from shared_utils.error_handler import ExternalServiceError
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.ADAPTER)

_NAMED_STYLES = {
    "HEADING_2": BlockKind.HEADING_2,
    "HEADING_3": BlockKind.HEADING_3,
    "HEADING_4": BlockKind.HEADING_4,
}

_STYLE_FOR_KIND = {
    BlockKind.HEADING_2: "HEADING_2",
    BlockKind.HEADING_3: "HEADING_3",
    BlockKind.HEADING_4: "HEADING_4",
}

# The Docs API cannot insert horizontal rules.
RULE_TEXT = "-" * ContentLimits.BANNER_WIDTH


def utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def _paragraph_block(paragraph: Dict[str, Any]) -> DocumentBlock:
    elements = paragraph.get("elements", [])
    if any("horizontalRule" in e for e in elements):
        return DocumentBlock(kind=BlockKind.HORIZONTAL_RULE)
    text = "".join(e.get("textRun", {}).get("content", "") for e in elements).rstrip("\n")
    if "bullet" in paragraph:
        return DocumentBlock(kind=BlockKind.BULLET, text=text)
    style = paragraph.get("paragraphStyle", {}).get("namedStyleType", "NORMAL_TEXT")
    return DocumentBlock(kind=_NAMED_STYLES.get(style, BlockKind.PARAGRAPH), text=text)


class GoogleDocsWriter:
    """Docs v1 implementation of DocumentWriterPort."""

    def __init__(self, credentials: Any = None, docs_service: Optional[Any] = None) -> None:
        self._docs = docs_service or build_service("docs", "v1", credentials)

    # ------------------------------------------------------------------
    # DocumentWriterPort implementation
    # ------------------------------------------------------------------

    def read_blocks(self, document_id: str) -> List[DocumentBlock]:
        return [block for block, _ in self._paragraphs(self._get(document_id))]

    def insert_blocks(
        self,
        document_id: str,
        index: Optional[int],
        blocks: List[DocumentBlock],
    ) -> None:
        if not blocks:
            return
        document = self._get(document_id)
        paragraphs = self._paragraphs(document)
        texts = [RULE_TEXT if b.kind == BlockKind.HORIZONTAL_RULE else b.text for b in blocks]

        if index is None or index >= len(paragraphs):
            # Insert before the final newline of the body.
            location = self._body_end(document) - 1
            payload = "\n" + "\n".join(texts)
            first_start = location + 1
        else:
            location = paragraphs[index][1]
            payload = "\n".join(texts) + "\n"
            first_start = location

        requests_body = [{"insertText": {"location": {"index": location}, "text": payload}}]
        requests_body.extend(self._style_requests(blocks, texts, first_start))

        try:
            self._docs.documents().batchUpdate(
                documentId=document_id,
                body={"requests": requests_body},
            ).execute()
        except HttpError as exc:
            logger.error("docs_batch_update_failed", document_id=document_id, error=str(exc))
            raise ExternalServiceError("Google Docs", f"Failed to update document: {exc}") from exc

        logger.info("docs_blocks_inserted", document_id=document_id, blocks=len(blocks), index=index)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _get(self, document_id: str) -> Dict[str, Any]:
        try:
            return self._docs.documents().get(documentId=document_id).execute()
        except HttpError as exc:
            raise ExternalServiceError("Google Docs", f"Failed to open document: {exc}") from exc

    @staticmethod
    def _paragraphs(document: Dict[str, Any]) -> List[Tuple[DocumentBlock, int]]:
        return [
            (_paragraph_block(element["paragraph"]), element.get("startIndex", 1))
            for element in document.get("body", {}).get("content", [])
            if "paragraph" in element
        ]

    @staticmethod
    def _body_end(document: Dict[str, Any]) -> int:
        content = document.get("body", {}).get("content", [])
        return content[-1]["endIndex"] if content else 2

    @staticmethod
    def _style_requests(blocks: List[DocumentBlock], texts: List[str], first_start: int) -> List[Dict[str, Any]]:
        ranges = []
        cursor = first_start
        for text in texts:
            end = cursor + utf16_len(text) + 1
            ranges.append({"startIndex": cursor, "endIndex": end})
            cursor = end

        whole = {"startIndex": first_start, "endIndex": cursor}
        style_requests: List[Dict[str, Any]] = [{"deleteParagraphBullets": {"range": whole}}]
        for block, span in zip(blocks, ranges):
            style_requests.append(
                {
                    "updateParagraphStyle": {
                        "range": span,
                        "paragraphStyle": {"namedStyleType": _STYLE_FOR_KIND.get(block.kind, "NORMAL_TEXT")},
                        "fields": "namedStyleType",
                    }
                }
            )
            if block.kind == BlockKind.BULLET:
                style_requests.append(
                    {
                        "createParagraphBullets": {
                            "range": span,
                            "bulletPreset": "BULLET_DISC_CIRCLE_SQUARE",
                        }
                    }
                )
        return style_requests
