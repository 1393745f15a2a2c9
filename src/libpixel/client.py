"""Client to generate and sign LibPixel URLs."""

from __future__ import annotations

from dataclasses import dataclass, field

from libpixel.common import hmac
from libpixel.common.logging import get_logger
from libpixel.common.settings import Settings
from libpixel.params import Params, encode_params
from libpixel.urls import ParsedURL, parse_url

logger = get_logger(__name__)

SIGNATURE_PARAM = "signature"


@dataclass(frozen=True)
class Client:
    """
    The client to sign and/or generate URLs with.

    Instances are immutable and hold no per-call state, so one client can be
    shared freely between threads.

    Attributes:
        host: Host for generated URLs (e.g. "test.libpx.com")
        https: Use https instead of http for generated URLs
        secret: Shared secret; URLs from ``url()`` are unsigned when unset
    """

    host: str = ""
    https: bool = False
    secret: str | None = field(default=None, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> Client:
        """Create a client from application settings."""
        return cls(host=settings.host, https=settings.https, secret=settings.secret)

    @property
    def scheme(self) -> str:
        return "https" if self.https else "http"

    def sign(self, url: str) -> str:
        """
        Generate and add a signature to a URL.

        A secret should be configured; without one the digest is keyed by
        the empty string.

        Args:
            url: URL to sign; a fragment is kept but not signed

        Returns:
            The signed URL

        Raises:
            ParseError: If ``url`` is not a valid URL
        """
        return self._sign(parse_url(url))

    def url(self, path: str, params: Params | None = None) -> str:
        """
        Generate a LibPixel URL for a path and image parameters.

        The URL is signed automatically when the client has a secret.

        Args:
            path: Image path on the host; "" means "/"
            params: Image API parameters

        Returns:
            The generated URL

        Raises:
            ParamStringificationError: If a parameter value has an unsupported type
        """
        if not path.startswith("/"):
            path = "/" + path

        parsed = ParsedURL.build(self.scheme, self.host, path, encode_params(params))

        if not self.secret:
            return parsed.geturl()

        return self._sign(parsed)

    def verify(self, url: str) -> bool:
        """
        Check the signature of a URL produced by ``sign()`` or ``url()``.

        Returns:
            True if the last query parameter is a matching signature

        Raises:
            ParseError: If ``url`` is not a valid URL
        """
        parsed = parse_url(url).with_default_path()

        head, sep, last = parsed.query.rpartition("&")
        name, _, signature = last.partition("=")
        if name != SIGNATURE_PARAM or not signature:
            logger.warning("signature_missing", path=parsed.path)
            return False

        message = hmac.build_message(parsed.path, head if sep else "")
        if not hmac.verify(self._key(), message, signature):
            logger.warning("signature_mismatch", path=parsed.path)
            return False
        return True

    def _key(self) -> str:
        if not self.secret:
            logger.warning("empty_secret", detail="signing with an empty key")
            return ""
        return self.secret

    def _sign(self, parsed: ParsedURL) -> str:
        parsed = parsed.with_default_path()

        message = hmac.build_message(parsed.path, parsed.query)
        signature = hmac.sign(self._key(), message)

        logger.debug("url_signed", path=parsed.path, has_query=bool(parsed.query))
        return parsed.with_param(SIGNATURE_PARAM, signature).geturl()
