"""Unit tests for the bracket link markup filter."""

import pytest

from flatwiki.core.markup import filter_links

WORDS = [
    b"a",
    b"Z",
    b"7",
    b"_",
    b"HomePage",
    b"page_2",
    b"Foo123",
    b"ALLCAPS",
    b"under_score_words",
    b"x" * 200,
]

BRACKET_FREE = [
    b"",
    b"Plain text, nothing to link.\nSecond line.",
    b"<b>bold</b> & <i>italic</i>",
    b"unbalanced [ open only",
    b"close only ] here",
    b"[",
    b"]",
    b"[]",
    b"[two words]",
    b"[a-b]",
    b"[ spaced ]",
    b"\x00\x01\xff binary",
    "[Café]".encode("utf-8"),
    b"(parens) {braces} <angles>",
]


# ============================================================
# Link substitution
# ============================================================


class TestFilterLinks:
    @pytest.mark.parametrize("body", BRACKET_FREE)
    def test_body_without_references_unchanged(self, body):
        assert filter_links(body) == body

    @pytest.mark.parametrize("word", WORDS)
    def test_reference_becomes_link(self, word):
        expected = b'<a href="/view/' + word + b'">' + word + b"</a>"
        assert filter_links(b"[" + word + b"]") == expected

    @pytest.mark.parametrize("word", WORDS)
    def test_reference_in_surrounding_text(self, word):
        out = filter_links(b"see [" + word + b"] now")
        assert out == b'see <a href="/view/' + word + b'">' + word + b"</a> now"

    def test_multiple_links(self):
        out = filter_links(b"[One] and [Two]")
        assert b'href="/view/One"' in out
        assert b'href="/view/Two"' in out
        assert out.count(b"<a ") == 2

    def test_double_brackets_link_inner_word(self):
        assert filter_links(b"[[Page]]") == b'[<a href="/view/Page">Page</a>]'

    def test_replacement_not_rescanned(self):
        out = filter_links(b"[A][B]")
        assert out == b'<a href="/view/A">A</a><a href="/view/B">B</a>'

    def test_html_passes_through_by_default(self):
        body = b"<b>bold</b> [Page]"
        assert filter_links(body).startswith(b"<b>bold</b> ")


class TestFilterLinksEscape:
    def test_escape_html(self):
        out = filter_links(b"<script>x</script>", escape=True)
        assert out == b"&lt;script&gt;x&lt;/script&gt;"

    def test_links_survive_escaping(self):
        out = filter_links(b'"quoted" & [Page]', escape=True)
        assert out == b'&quot;quoted&quot; &amp; <a href="/view/Page">Page</a>'

    @pytest.mark.parametrize("word", WORDS)
    def test_reference_unaffected_by_escaping(self, word):
        body = b"[" + word + b"]"
        assert filter_links(body, escape=True) == filter_links(body)
