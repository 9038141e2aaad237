"""
Tests for HTML → text normalization
"""
import pytest

from edgar_risk_panel.core.normalizer import normalize


class TestNormalize:
    """Test normalize output shape."""

    def test_blank_input(self):
        assert normalize("") == ""
        assert normalize("   \n\t ") == ""
        assert normalize(b"") == ""

    def test_block_tags_become_paragraphs(self):
        assert normalize("<p>Hello</p><p>World</p>") == "Hello\n\nWorld"

    def test_br_becomes_line_break(self):
        assert normalize("first<br>second<br/>third") == "first\nsecond\nthird"

    def test_inline_tags_become_spaces(self):
        assert normalize("<span>Item</span><span>1A</span>") == "Item 1A"

    def test_entities_decoded(self):
        assert normalize("AT&amp;T&nbsp;Inc.") == "AT&T Inc."

    def test_double_encoded_entities(self):
        assert normalize("5 &amp;lt; 6") == "5 < 6"

    def test_escaped_markup_is_stripped(self):
        assert normalize("&lt;p&gt;Risk Factors&lt;/p&gt;") == "Risk Factors"

    def test_script_style_comment_removed(self):
        markup = (
            "<style>.x { color: red }</style>"
            "<script type='text/javascript'>var a = '<p>';</script>"
            "<!-- hidden <b>note</b> -->"
            "<div>Body</div>"
        )
        assert normalize(markup) == "Body"

    def test_inline_xbrl_dropped(self):
        markup = "<ix:header><ix:hidden>us-gaap:Revenues 123</ix:hidden></ix:header><p>Item 1A</p>"
        assert normalize(markup) == "Item 1A"

    def test_namespaced_tag_inside_body_dropped(self):
        markup = "<p>Risk Factors<xbrli:context>c-1 2023-09-30</xbrli:context></p><p>Body</p>"
        assert normalize(markup) == "Risk Factors\n\nBody"

    def test_whitespace_collapsed(self):
        assert normalize("<p>  a \t\t b  </p>") == "a b"

    def test_excess_newlines_collapsed(self):
        assert normalize("<p>a</p>\n\n\n\n<p>b</p>") == "a\n\nb"

    def test_carriage_returns(self):
        assert normalize("line1\r\nline2\rline3") == "line1\nline2\nline3"

    def test_bytes_decoded_as_utf8(self):
        assert normalize("<div>Café</div>".encode("utf-8")) == "Café"

    def test_invalid_utf8_does_not_raise(self):
        assert "Body" in normalize(b"<p>Body \xff\xfe</p>")


class TestIdempotence:
    """normalize(normalize(x)) == normalize(x)"""

    @pytest.mark.parametrize("markup", [
        "<p>Hello</p><p>World</p>",
        "AT&amp;T &lt;p&gt; tricky &lt;/p&gt;",
        "&amp;lt;b&amp;gt;bold&amp;lt;/b&amp;gt;",
        "a < b and c > d",
        "<table><tr><td>Item 1A</td><td>12</td></tr></table>",
        "line1\r\n\r\n\r\n\r\nline2   \t end",
        "<div>ITEM 1A.&#160;RISK FACTORS</div><div>&#8220;Quoted&#8221; text</div>",
        "plain text without markup",
    ])
    def test_fixed_point(self, markup):
        once = normalize(markup)
        assert normalize(once) == once
