"""
Conversion of summaries and transcripts into typed document blocks.

Concise summary grammar (one element per line, blank lines ignored):

    **Highlights:**      -> level-4 heading "Highlights"
    * point              -> bullet
    1. point             -> bullet
    anything else        -> paragraph

The weekly digest keeps one section (``POD Meetings`` by default); new entries
go right before the next level-2 header that follows it.
"""

import re
from typing import List, Optional, Tuple

from domain.models import BlockKind, DocumentBlock
from shared_utils.constants import ContentLimits, TranscriptPatterns


SECTION_HEADING: re.Pattern = re.compile(r"^\*\*(.*?)\*\*:?$")
STAR_BULLET: re.Pattern = re.compile(r"^\*\s*")
NUMBERED_ITEM: re.Pattern = re.compile(r"^\d+\.\s*")


def parse_concise_summary(summary: str) -> List[DocumentBlock]:
    """Turn the concise summary text into heading/bullet/paragraph blocks."""
    blocks: List[DocumentBlock] = []
    for raw_line in summary.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        heading = SECTION_HEADING.match(line)
        if heading:
            title = heading.group(1).strip().rstrip(":").strip()
            blocks.append(DocumentBlock(kind=BlockKind.HEADING_4, text=title))
        elif STAR_BULLET.match(line):
            blocks.append(DocumentBlock(kind=BlockKind.BULLET, text=STAR_BULLET.sub("", line, count=1)))
        elif NUMBERED_ITEM.match(line):
            blocks.append(DocumentBlock(kind=BlockKind.BULLET, text=NUMBERED_ITEM.sub("", line, count=1)))
        else:
            blocks.append(DocumentBlock(kind=BlockKind.PARAGRAPH, text=line))
    return blocks


def missing_sections(blocks: List[DocumentBlock]) -> List[str]:
    """Expected summary sections that have no matching level-4 heading."""
    present = {b.text.lower() for b in blocks if b.kind == BlockKind.HEADING_4}
    return [s for s in TranscriptPatterns.SUMMARY_SECTIONS if s.lower() not in present]


def _is_section_header(block: DocumentBlock, section: str) -> bool:
    return block.kind == BlockKind.HEADING_2 and block.text.strip() == section


def _is_next_section(block: DocumentBlock, section: str) -> bool:
    if block.text.strip() == section:
        return False
    if block.kind == BlockKind.HEADING_2:
        return True
    return block.kind == BlockKind.PARAGRAPH and TranscriptPatterns.LEGACY_SECTION_MARKER in block.text


def find_section_insert_index(blocks: List[DocumentBlock], section: str) -> Tuple[Optional[int], bool]:
    """Locate where a new digest entry belongs.

    The section header is the first level-2 heading equal to ``section``,
    else the first block whose text contains it.

    Args:
        blocks: Current document body.
        section: Section header text.

    Returns:
        ``(index, header_found)``. ``index`` is the block position to insert
        before, or None to append at the end.
    """
    header_at = next((i for i, b in enumerate(blocks) if _is_section_header(b, section)), None)
    if header_at is None:
        header_at = next((i for i, b in enumerate(blocks) if section in b.text), None)
    if header_at is None:
        return None, False

    for i in range(header_at + 1, len(blocks)):
        if _is_next_section(blocks[i], section):
            return i, True
    return None, True


def weekly_entry_blocks(title: str, date_label: str, concise_summary: str) -> List[DocumentBlock]:
    """Level-3 ``<title> - <date>`` heading followed by the formatted summary."""
    heading = DocumentBlock(kind=BlockKind.HEADING_3, text=f"{title} - {date_label}")
    return [heading, *parse_concise_summary(concise_summary)]


def section_header_block(section: str) -> DocumentBlock:
    return DocumentBlock(kind=BlockKind.HEADING_2, text=section)


def archive_blocks(title: str, date_label: str, transcript: str) -> List[DocumentBlock]:
    """Banner, full transcript and a horizontal rule for the archive document."""
    rule = "=" * ContentLimits.BANNER_WIDTH
    banner = f"\n\n{rule}\n{title} - {date_label}\n{rule}\n\n"
    return [
        DocumentBlock(kind=BlockKind.PARAGRAPH, text=banner),
        DocumentBlock(kind=BlockKind.PARAGRAPH, text=transcript),
        DocumentBlock(kind=BlockKind.HORIZONTAL_RULE),
    ]
