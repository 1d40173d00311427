"""
Tests for core_transcripts.content.html_text.HtmlTextExtractor.
"""

from core_transcripts.content.html_text import HtmlTextExtractor


class TestExtractText:
    def test_strips_tags_and_collapses_whitespace(self) -> None:
        html = "<html><body><h1>Title</h1>\n\n<p>First   line</p><p>Second</p></body></html>"
        assert HtmlTextExtractor.extract_text(html) == "Title First lineSecond"

    def test_removes_script_and_style_blocks(self) -> None:
        html = (
            "<style type='text/css'>p { color: red; }</style>"
            "<SCRIPT>var x = '<p>hidden</p>';</SCRIPT>"
            "<p>Visible</p>"
        )
        assert HtmlTextExtractor.extract_text(html) == "Visible"

    def test_entity_decoded_and_script_dropped(self) -> None:
        assert HtmlTextExtractor.extract_text("<p>A &amp; B</p><script>bad()</script>") == "A & B"

    def test_decodes_entities(self) -> None:
        html = "<p>Tom&nbsp;&amp;&nbsp;Jerry &lt;3 &quot;quoted&quot; it&#39;s</p>"
        assert HtmlTextExtractor.extract_text(html) == 'Tom & Jerry <3 "quoted" it\'s'

    def test_entities_decoded_sequentially(self) -> None:
        assert HtmlTextExtractor.extract_text("&amp;lt;") == "<"

    def test_empty_input(self) -> None:
        assert HtmlTextExtractor.extract_text("") == ""
