"""Tests for email text normalization."""

from showtracker.parser.text import (
    MAX_INPUT_CHARS,
    build_line_text,
    build_search_text,
    fix_encoding_artifacts,
    html_to_lines,
    normalize_body,
    strip_html,
)


class TestStripHtml:
    """Tests for strip_html()."""

    def test_removes_tags(self):
        assert strip_html("<p>Hello <b>World</b></p>") == "Hello World"

    def test_collapses_whitespace(self):
        html = "<div>\n  Event:   Jazz Night\n</div>\n\n<div>Date: 2025-11-03</div>"
        assert strip_html(html) == "Event: Jazz Night Date: 2025-11-03"

    def test_decodes_entities(self):
        assert strip_html("<td>Rock &amp; Roll</td>") == "Rock & Roll"

    def test_non_breaking_space(self):
        assert strip_html("<td>Date:&nbsp;15.03.2026</td>") == "Date: 15.03.2026"


class TestNormalizeBody:
    """Tests for HTML detection in normalize_body()."""

    def test_plain_text_keeps_lines(self):
        body = "Event: Jazz Night\nDate: 2025-11-03"
        assert normalize_body(body) == body

    def test_plain_text_characters_untouched(self):
        body = "Event: Jazz\u00a0Night \u2013 Live"
        assert normalize_body(body) == body

    def test_html_is_flattened(self):
        assert normalize_body("Line one<br>Line two") == "Line one Line two"

    def test_smart_quotes_replaced(self):
        assert fix_encoding_artifacts("“Hello”") == '"Hello"'


class TestBuildSearchText:
    """Tests for build_search_text()."""

    def test_subject_on_first_line(self):
        assert build_search_text("Your tickets", "Body text") == "Your tickets\nBody text"

    def test_none_inputs(self):
        assert build_search_text(None, None) == "\n"

    def test_long_input_truncated(self):
        text = build_search_text("", "a" * (MAX_INPUT_CHARS + 500))
        assert len(text) == MAX_INPUT_CHARS + 1

    def test_artifacts_repaired(self):
        assert build_search_text("", "Jazz\u00a0Night \u2013 Live") == "\nJazz Night - Live"


class TestLineText:
    """Tests for html_to_lines() and build_line_text()."""

    def test_one_line_per_block(self):
        html = "<p>Thanks for your order</p><p>Synthwave Nights, Berlin, 05.03.2026</p>"
        assert html_to_lines(html) == "Thanks for your order\nSynthwave Nights, Berlin, 05.03.2026"

    def test_inline_tags_split(self):
        assert html_to_lines("<td>Rock &amp;</td>  <td>Roll</td>") == "Rock &\nRoll"

    def test_plain_body_kept(self):
        assert build_line_text("Tickets", "Line one\nLine two") == "Tickets\nLine one\nLine two"

    def test_html_body(self):
        text = build_line_text("Tickets", "<div>Synthwave&nbsp;Nights</div><div>Berlin</div>")
        assert text == "Tickets\nSynthwave Nights\nBerlin"
