"""Shared error codes and exceptions."""

from __future__ import annotations


class ErrorCode:
    INVALID_URL = "invalid_url"
    INVALID_PARAM = "invalid_param"


class LibPixelError(Exception):
    """Base error with a machine-readable code."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class ParseError(LibPixelError):
    """The input string is not a syntactically valid URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(ErrorCode.INVALID_URL, f"parse {url!r}: {reason}")
        self.url = url
        self.reason = reason


class ParamStringificationError(LibPixelError):
    """A parameter value has no defined string form."""

    def __init__(self, name: str, value: object) -> None:
        super().__init__(
            ErrorCode.INVALID_PARAM,
            f"parameter {name!r} has unsupported type {type(value).__name__}",
        )
        self.name = name
        self.value = value
