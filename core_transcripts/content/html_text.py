"""
Plain-text extraction from exported HTML.
"""

import re


class HtmlTextExtractor:
    """Strips markup and a fixed set of entities from HTML.

    Entities are decoded one after another in this order, so ``&amp;lt;``
    becomes ``<``.
    """

    SCRIPT_BLOCK: re.Pattern = re.compile(r"<script[^>]*>[\s\S]*?</script>", re.IGNORECASE)
    STYLE_BLOCK: re.Pattern = re.compile(r"<style[^>]*>[\s\S]*?</style>", re.IGNORECASE)
    TAG: re.Pattern = re.compile(r"<[^>]*>")
    WHITESPACE: re.Pattern = re.compile(r"\s+")

    ENTITIES = (
        ("&nbsp;", " "),
        ("&amp;", "&"),
        ("&lt;", "<"),
        ("&gt;", ">"),
        ("&quot;", '"'),
        ("&#39;", "'"),
    )

    @staticmethod
    def extract_text(html: str) -> str:
        """Convert an HTML document to a single line of text.

        Args:
            html: Raw HTML.

        Returns:
            Text with scripts, styles and tags removed, entities decoded
            and whitespace collapsed.
        """
        text = HtmlTextExtractor.SCRIPT_BLOCK.sub("", html or "")
        text = HtmlTextExtractor.STYLE_BLOCK.sub("", text)
        text = HtmlTextExtractor.TAG.sub("", text)

        for entity, replacement in HtmlTextExtractor.ENTITIES:
            text = text.replace(entity, replacement)

        return HtmlTextExtractor.WHITESPACE.sub(" ", text).strip()
