"""
Bookmarks Service — Sanitizer Unit Tests
==========================================

What:  Tests for sanitize_text.

What we test:
    ✅ Script tags are escaped, never emitted as markup
    ✅ Event-handler attributes are removed from whitelisted tags
    ✅ Whitelisted formatting survives
    ✅ Sanitizing twice equals sanitizing once
"""

import pytest

from bookmarks_api.services.sanitizer import sanitize_text

MALICIOUS_TITLE = 'Naughty naughty very naughty <script>alert("xss");</script>'
MALICIOUS_DESCRIPTION = (
    'Bad image <img src="https://url.to.file.which/does-not.exist" '
    'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
)


class TestSanitizeText:

    def test_none_passes_through(self):
        assert sanitize_text(None) is None

    def test_plain_text_unchanged(self):
        assert sanitize_text("Just a title") == "Just a title"

    def test_script_tag_escaped(self):
        result = sanitize_text(MALICIOUS_TITLE)

        assert "<script>" not in result
        assert "</script>" not in result
        assert "&lt;script&gt;" in result
        assert result.startswith("Naughty naughty very naughty ")

    def test_event_handler_attribute_removed(self):
        result = sanitize_text(MALICIOUS_DESCRIPTION)

        assert "onerror" not in result
        assert 'src="https://url.to.file.which/does-not.exist"' in result
        assert "<strong>all</strong>" in result

    def test_javascript_link_neutralized(self):
        result = sanitize_text('<a href="javascript:alert(1)">click</a>')
        assert "javascript:" not in result
        assert "click" in result

    def test_unknown_tag_escaped(self):
        result = sanitize_text("<iframe src='https://evil.test'></iframe>")
        assert "<iframe" not in result
        assert "&lt;iframe" in result

    @pytest.mark.parametrize(
        "value",
        [
            MALICIOUS_TITLE,
            MALICIOUS_DESCRIPTION,
            "Tom & Jerry",
            "a < b > c",
            "<em>fine</em>",
            "&lt;already escaped&gt;",
        ],
    )
    def test_idempotent(self, value):
        once = sanitize_text(value)
        assert sanitize_text(once) == once
