"""
libpixel: Generate and sign LibPixel image URLs.

URLs are signed with an HMAC-SHA1 over the path and canonical query string
so the image service can verify that requests were not tampered with.
"""

from libpixel.client import Client
from libpixel.common.errors import LibPixelError, ParamStringificationError, ParseError
from libpixel.params import Params, ParamValue

__version__ = "1.0.0"

__all__ = [
    "Client",
    "LibPixelError",
    "ParamStringificationError",
    "ParamValue",
    "Params",
    "ParseError",
]
