"""Image API parameters: value stringification and canonical query encoding."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from decimal import Decimal
from urllib.parse import urlencode

from libpixel.common.errors import ParamStringificationError

ParamValue = str | int | float | bool

Params = Mapping[str, ParamValue]
"""
Parameters for the LibPixel Image API.

For API documentation, see: http://libpixel.com/docs/#image-api
"""

# Decimal exponents outside [-4, 6) switch floats to exponent notation.
_FLOAT_EXP_MIN = -4
_FLOAT_EXP_MAX = 6

_INT_RE = re.compile(r"-?(?:0|[1-9][0-9]*)")
_FLOAT_RE = re.compile(r"-?(?:0|[1-9][0-9]*)\.[0-9]+")


def format_float(value: float) -> str:
    """
    Render a float with the shortest digits that round-trip.

    Integral values drop the trailing ".0" (100.0 -> "100"), and very large
    or very small magnitudes use exponent form with a signed, two-digit
    minimum exponent (1e6 -> "1e+06", 0.00001 -> "1e-05").
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    number = Decimal(repr(value)).normalize()
    if number.is_zero():
        return "-0" if number.is_signed() else "0"

    exponent = number.adjusted()
    if _FLOAT_EXP_MIN <= exponent < _FLOAT_EXP_MAX:
        return format(number, "f")

    sign, digits, _ = number.as_tuple()
    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(str(d) for d in digits[1:])
    exp_sign = "+" if exponent >= 0 else "-"
    return f"{'-' if sign else ''}{mantissa}e{exp_sign}{abs(exponent):02d}"


def stringify_param(name: str, value: ParamValue) -> str:
    """
    Convert a parameter value to its wire form.

    Args:
        name: Parameter name (used in error messages)
        value: str, int, float or bool

    Returns:
        String representation used in the query string

    Raises:
        ParamStringificationError: If the value type is not supported
    """
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return value
    raise ParamStringificationError(name, value)


def encode_params(params: Params | None) -> str:
    """
    Encode parameters into the canonical query string.

    Values are stringified, names and values are form-encoded (space as "+"),
    and pairs are sorted by parameter name.
    """
    if not params:
        return ""
    pairs = sorted((name, stringify_param(name, value)) for name, value in params.items())
    return urlencode(pairs)


def coerce_param(raw: str) -> ParamValue:
    """
    Type a textual parameter value as bool, int or float where it reads as one.

    Used by the command line, where every value arrives as text. Values with
    leading zeros or other non-canonical spellings stay strings so they are
    sent exactly as typed.
    """
    if raw in ("true", "false"):
        return raw == "true"
    if _INT_RE.fullmatch(raw):
        return int(raw)
    if _FLOAT_RE.fullmatch(raw):
        return float(raw)
    return raw
