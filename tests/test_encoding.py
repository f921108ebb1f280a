"""Tests for encoding.py module."""

import pytest

from s3request.encoding import encode_path, quote


class TestQuote:
    """Tests for quote."""

    def test_unreserved_kept(self):
        """RFC 3986 unreserved characters pass through."""
        assert quote("AZaz09-._~") == "AZaz09-._~"

    @pytest.mark.parametrize("raw, encoded", [
        (" ", "%20"),
        ("/", "%2F"),
        ("+", "%2B"),
        ("=", "%3D"),
        ("&", "%26"),
        ("*", "%2A"),
        ("ü", "%C3%BC"),
    ])
    def test_reserved_escaped(self, raw, encoded):
        """Everything else is escaped over UTF-8 bytes."""
        assert quote(raw) == encoded

    def test_empty(self):
        """Empty strings stay empty."""
        assert quote("") == ""


class TestEncodePath:
    """Tests for encode_path."""

    def test_segments_encoded(self):
        """Each segment is escaped, separators kept."""
        assert encode_path("/bucket/my key.txt") == "/bucket/my%20key.txt"

    def test_empty_segments_dropped(self):
        """Repeated slashes collapse."""
        assert encode_path("/a//b") == "/a/b"

    def test_trailing_slash_kept(self):
        """A trailing slash on the input is preserved."""
        assert encode_path("/bucket/dir/") == "/bucket/dir/"
        assert encode_path("dir/") == "dir/"

    def test_root(self):
        """The root path stays a single slash."""
        assert encode_path("/") == "/"

    def test_relative(self):
        """Paths without leading slash stay relative."""
        assert encode_path("a b/c") == "a%20b/c"

    def test_empty(self):
        """An empty path stays empty."""
        assert encode_path("") == ""
