"""
Unit tests for MIME type detection.
"""

import pytest

from minihttpd.http.mime_types import DEFAULT_MIME_TYPE, content_type


class TestContentType:
    """Tests for content_type()."""

    @pytest.mark.parametrize("path", ["report.html", "/docs/report.html", "/old/page.htm"])
    def test_html(self, path):
        assert content_type(path) == "text/html"

    @pytest.mark.parametrize("path", ["data.bin", "readme", "/notes.txt", "/img/logo.png", "/"])
    def test_everything_else_is_plain_text(self, path):
        assert content_type(path) == "text/plain"

    def test_suffix_match_is_case_sensitive(self):
        """The parser lower-cases paths first; upper-case suffixes do not match."""
        assert content_type("REPORT.HTML") == DEFAULT_MIME_TYPE

    def test_suffix_without_dot_does_not_match(self):
        assert content_type("/xhtml") == "text/plain"
