"""Tests for URL parsing and reassembly."""

import pytest

from libpixel.common.errors import ParseError
from libpixel.urls import ParsedURL, parse_url


class TestParseURL:
    """Test strict URL parsing."""

    def test_parse_components(self):
        """Test that all components are split out."""
        parsed = parse_url("https://test.libpx.com:8080/images/3.jpg?width=300#image")

        assert parsed.scheme == "https"
        assert parsed.netloc == "test.libpx.com:8080"
        assert parsed.path == "/images/3.jpg"
        assert parsed.raw_path == "/images/3.jpg"
        assert parsed.query == "width=300"
        assert parsed.fragment == "image"

    def test_bare_question_mark(self):
        """Test that a lone '?' parses as no query."""
        assert parse_url("http://h/1.jpg?") == parse_url("http://h/1.jpg")

    def test_decoded_path(self):
        """Test that the path is decoded and the escaped form kept for output."""
        parsed = parse_url("http://h/a%2Fb%20c.jpg")

        assert parsed.path == "/a/b c.jpg"
        assert parsed.raw_path == "/a%2Fb%20c.jpg"

    def test_unescaped_space_in_path_is_escaped_for_output(self):
        """Test that invalid raw paths are re-escaped."""
        parsed = parse_url("http://h/a b.jpg")

        assert parsed.path == "/a b.jpg"
        assert parsed.raw_path == "/a%20b.jpg"

    def test_query_kept_raw(self):
        """Test that the query is not decoded or re-ordered."""
        parsed = parse_url("http://h/1.jpg?b=%20&a=1+2")

        assert parsed.query == "b=%20&a=1+2"

    def test_empty_path(self):
        """Test that an empty path stays empty until defaulted."""
        parsed = parse_url("http://h")

        assert parsed.path == ""
        assert parsed.with_default_path().path == "/"
        assert parsed.with_default_path().raw_path == "/"

    @pytest.mark.parametrize(
        ("url", "reason"),
        [
            (":foo", "missing protocol scheme"),
            ("http://h/%zz", "invalid URL escape in path"),
            ("http://h/1.jpg#%", "invalid URL escape in fragment"),
            ("http://h%zz/", "invalid URL escape in host"),
            ("http://h\x7f/", "invalid control character in URL"),
            ("http://h{}/", "invalid character in host name"),
        ],
    )
    def test_errors(self, url, reason):
        """Test ParseError reasons."""
        with pytest.raises(ParseError) as exc_info:
            parse_url(url)

        assert reason in exc_info.value.reason

    def test_bad_port_chains_value_error(self):
        """Test that urllib errors are chained."""
        with pytest.raises(ParseError) as exc_info:
            parse_url("http://h:abc/")

        assert isinstance(exc_info.value.__cause__, ValueError)


class TestParsedURL:
    """Test the immutable URL record."""

    def test_build_escapes_path(self):
        """Test that build() escapes the decoded path."""
        url = ParsedURL.build("http", "h", "/a b/c?d.jpg", "w=1")

        assert url.path == "/a b/c?d.jpg"
        assert url.geturl() == "http://h/a%20b/c%3Fd.jpg?w=1"

    def test_with_param_on_empty_query(self):
        """Test appending to an empty query."""
        url = ParsedURL.build("http", "h", "/1.jpg")

        assert url.with_param("signature", "ab").geturl() == "http://h/1.jpg?signature=ab"

    def test_with_param_appends(self):
        """Test appending after existing parameters."""
        url = ParsedURL.build("http", "h", "/1.jpg", "w=1")

        assert url.with_param("signature", "ab").query == "w=1&signature=ab"

    def test_with_param_returns_new_record(self):
        """Test that records are not mutated."""
        url = ParsedURL.build("http", "h", "/1.jpg", "w=1")
        url.with_param("signature", "ab")

        assert url.query == "w=1"

    def test_fragment_after_query(self):
        """Test serialization order."""
        url = parse_url("http://h/1.jpg#top").with_param("signature", "ab")

        assert url.geturl() == "http://h/1.jpg?signature=ab#top"
