"""URL parsing and reassembly for signing."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from urllib.parse import quote, unquote, urlsplit, urlunsplit

from libpixel.common.errors import ParseError

# Characters left unescaped when serializing a path or fragment.
PATH_SAFE = "/$&+,:;=@"
FRAGMENT_SAFE = "/$&+,:;=@?!()*"

_CTL_RE = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_HOST_RE = re.compile(r"[A-Za-z0-9\-._~!$&'()*+,;=:\[\]%]*")
_ENCODED_PATH_RE = re.compile(r"[A-Za-z0-9\-._~!$&'()*+,;=:@/%\[\]]*")
_ENCODED_FRAGMENT_RE = re.compile(r"[A-Za-z0-9\-._~!$&'()*+,;=:@/?%\[\]]*")


@dataclass(frozen=True)
class ParsedURL:
    """
    Decomposed URL.

    ``path`` is the decoded path the signature covers; ``raw_path`` is the
    escaped form written back out. ``query`` and ``fragment`` are kept raw.
    """

    scheme: str
    netloc: str
    path: str
    raw_path: str
    query: str = ""
    fragment: str = ""

    @classmethod
    def build(cls, scheme: str, netloc: str, path: str, query: str = "") -> ParsedURL:
        """Create a URL from a decoded path, escaping it for output."""
        return cls(
            scheme=scheme,
            netloc=netloc,
            path=path,
            raw_path=quote(path, safe=PATH_SAFE),
            query=query,
        )

    def with_default_path(self) -> ParsedURL:
        """Return a copy whose empty path is replaced by "/"."""
        if self.path:
            return self
        return replace(self, path="/", raw_path="/")

    def with_param(self, name: str, value: str) -> ParsedURL:
        """Return a copy with ``name=value`` appended as the last query parameter."""
        pair = f"{name}={value}"
        query = f"{self.query}&{pair}" if self.query else pair
        return replace(self, query=query)

    def geturl(self) -> str:
        """Serialize back to a URL string."""
        return urlunsplit((self.scheme, self.netloc, self.raw_path, self.query, self.fragment))


def _check_escapes(url: str, component: str, value: str) -> None:
    if _BAD_ESCAPE_RE.search(value):
        raise ParseError(url, f"invalid URL escape in {component}")


def _escaped(decoded: str, raw: str, encoded_re: re.Pattern[str], safe: str) -> str:
    if encoded_re.fullmatch(raw):
        return raw
    return quote(decoded, safe=safe)


def parse_url(url: str) -> ParsedURL:
    """
    Parse a URL string strictly.

    A lone trailing "?" yields an empty query, the same as no "?" at all.

    Args:
        url: Absolute or relative URL

    Returns:
        ParsedURL with raw query and fragment preserved

    Raises:
        ParseError: If the string is not a syntactically valid URL
    """
    if _CTL_RE.search(url):
        raise ParseError(url, "invalid control character in URL")
    if url.startswith(":"):
        raise ParseError(url, "missing protocol scheme")

    try:
        parts = urlsplit(url)
        # Accessing .port validates it
        parts.port
    except ValueError as e:
        raise ParseError(url, str(e)) from e

    host = parts.netloc.rpartition("@")[2]
    if not _HOST_RE.fullmatch(host):
        raise ParseError(url, f"invalid character in host name {host!r}")
    _check_escapes(url, "host", host)
    _check_escapes(url, "path", parts.path)
    _check_escapes(url, "fragment", parts.fragment)

    path = unquote(parts.path)
    fragment = unquote(parts.fragment)
    return ParsedURL(
        scheme=parts.scheme,
        netloc=parts.netloc,
        path=path,
        raw_path=_escaped(path, parts.path, _ENCODED_PATH_RE, PATH_SAFE),
        query=parts.query,
        fragment=_escaped(fragment, parts.fragment, _ENCODED_FRAGMENT_RE, FRAGMENT_SAFE),
    )
