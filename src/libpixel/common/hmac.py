"""HMAC signing utilities for LibPixel URLs."""

from __future__ import annotations

import hashlib
import hmac


def build_message(path: str, query: str = "") -> bytes:
    """Build the string to sign: ``path`` plus ``?query`` when a query exists."""
    if query:
        path = f"{path}?{query}"
    return path.encode("utf-8")


def sign(secret: str, message: bytes) -> str:
    """Create a lowercase hex HMAC-SHA1 signature."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha1).hexdigest()


def verify(secret: str, message: bytes, signature: str) -> bool:
    """Verify HMAC signature in constant time."""
    expected = sign(secret, message).encode("ascii")
    # compare_digest rejects non-ASCII str; the signature is untrusted input
    return hmac.compare_digest(expected, signature.lower().encode("utf-8"))
