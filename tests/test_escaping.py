"""
Tests for HTML and CSV escaping helpers.
"""

import pytest

from bookmark_interchange.utils.escaping import escape_csv, escape_html, join_csv_row


class TestEscapeHtml:
    """Test cases for escape_html."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("&", "&amp;"),
            ("<", "&lt;"),
            (">", "&gt;"),
            ('"', "&quot;"),
            ("'", "&#39;"),
            ("plain text", "plain text"),
            ("", ""),
        ],
    )
    def test_entities(self, text, expected):
        assert escape_html(text) == expected

    def test_none(self):
        assert escape_html(None) == ""

    def test_ampersand_escaped_once(self):
        assert escape_html("&lt;") == "&amp;lt;"

    def test_script_tag(self):
        escaped = escape_html('<script>alert("x")</script>')

        assert "<" not in escaped
        assert ">" not in escaped
        assert escaped == "&lt;script&gt;alert(&quot;x&quot;)&lt;/script&gt;"


class TestEscapeCsv:
    """Test cases for escape_csv and join_csv_row."""

    def test_plain_field_unchanged(self):
        assert escape_csv("Example") == "Example"

    def test_quoted_title(self):
        assert escape_csv('Site, "quoted"') == '"Site, ""quoted"""'

    @pytest.mark.parametrize("field", ["a,b", 'say "hi"', "two\nlines", "cr\rhere"])
    def test_special_characters_force_quotes(self, field):
        escaped = escape_csv(field)

        assert escaped.startswith('"')
        assert escaped.endswith('"')

    def test_none_and_empty(self):
        assert escape_csv(None) == ""
        assert escape_csv("") == ""

    def test_join_row(self):
        assert join_csv_row(["a", "b,c", "", 'd"e']) == 'a,"b,c",,"d""e"'

    def test_join_row_none_and_line_breaks(self):
        row = join_csv_row(["a", None, "x\ny", "cr\rhere"])

        assert row == 'a,,"x\ny","cr\rhere"'
        assert not row.endswith("\n")

    def test_join_header_row_unquoted(self):
        assert join_csv_row(["URL", "Title", "Created At"]) == "URL,Title,Created At"
