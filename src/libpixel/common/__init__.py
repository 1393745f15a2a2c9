"""Common utilities for libpixel."""

from libpixel.common.errors import (
    ErrorCode,
    LibPixelError,
    ParamStringificationError,
    ParseError,
)
from libpixel.common.settings import Settings, get_settings

__all__ = [
    "ErrorCode",
    "LibPixelError",
    "ParamStringificationError",
    "ParseError",
    "Settings",
    "get_settings",
]
