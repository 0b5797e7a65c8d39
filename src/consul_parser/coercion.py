"""
Coercion of raw store values to typed values.

Number coercion follows JavaScript's unary plus on strings, since values
in the store are commonly written by tooling that assumes those rules:

- surrounding whitespace is ignored, an empty string is 0
- 0x/0o/0b prefixes are hex/octal/binary (unsigned)
- "Infinity" with an optional sign is infinite
- anything else that is not a decimal literal is NaN, never an error

Integer literals come back as int when a double holds them exactly
(magnitude up to 2**53), everything else as float. "-0" is -0.0.
"""

from __future__ import annotations

import json as _json
import math as _math
import re as _re
import typing as _typing

import consul_parser.errors as errors
import consul_parser.keys as keys

_WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)

_INTEGER = _re.compile(r"[+-]?[0-9]+")
_DECIMAL = _re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_RADIX = _re.compile(r"0(?:[xX](?P<hex>[0-9a-fA-F]+)|[oO](?P<oct>[0-7]+)|[bB](?P<bin>[01]+))")
_INFINITY = _re.compile(r"(?P<sign>[+-]?)Infinity")

_MAX_EXACT_INT = 2**53


def to_number(raw: _typing.Any) -> int | float:
    """
    Coerce a raw value to a number the way JavaScript's unary plus does.

    Examples:
        >>> to_number("123")
        123
        >>> to_number("123.456")
        123.456
        >>> to_number("abc")
        nan
    """
    if raw is None:
        return 0
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (int, float)):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if not isinstance(raw, str):
        return _math.nan

    text = raw.strip(_WHITESPACE)
    if not text:
        return 0

    if _INTEGER.fullmatch(text):
        return _integer(text)
    if _DECIMAL.fullmatch(text):
        return float(text)

    match = _RADIX.fullmatch(text)
    if match:
        if match.group("hex"):
            return _exact_or_float(int(match.group("hex"), 16))
        if match.group("oct"):
            return _exact_or_float(int(match.group("oct"), 8))
        return _exact_or_float(int(match.group("bin"), 2))

    match = _INFINITY.fullmatch(text)
    if match:
        return -_math.inf if match.group("sign") == "-" else _math.inf

    return _math.nan


def _integer(text: str) -> int | float:
    # Over 16 digits is always past 2**53, and may exceed int()'s digit limit
    if len(text.lstrip("+-").lstrip("0")) > 16:
        return float(text)
    value = int(text)
    if value == 0 and text.startswith("-"):
        return -0.0
    return _exact_or_float(value)


def _exact_or_float(value: int) -> int | float:
    """Round integers a double cannot hold exactly, as JavaScript does."""
    if abs(value) <= _MAX_EXACT_INT:
        return value
    try:
        return float(value)
    except OverflowError:
        return _math.inf if value > 0 else -_math.inf


def _reject_constant(name: str) -> _typing.NoReturn:
    raise ValueError(f"{name} is not valid JSON")


def to_object(raw: _typing.Any, key: str) -> _typing.Any:
    """
    Parse a raw value as a JSON document.

    Values that are not text (already decoded by a client or a stub) are
    returned unchanged.

    Raises:
        MalformedObjectValueError: If the text is not valid JSON.
    """
    if not isinstance(raw, (str, bytes, bytearray)):
        return raw
    try:
        return _json.loads(raw, parse_constant=_reject_constant)
    except ValueError as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise errors.MalformedObjectValueError(key, str(e)) from e


def coerce_value(
    raw: _typing.Any,
    value_type: keys.ValueType | str,
    key: str,
) -> _typing.Any:
    """
    Coerce raw according to value_type.

    Args:
        raw: The raw value as returned by the store.
        value_type: One of the ValueType names.
        key: Effective key, used in error messages.

    Raises:
        UnsupportedTypeError: If value_type is not a ValueType.
        MalformedObjectValueError: If an object value is not valid JSON.
    """
    try:
        value_type = keys.ValueType(value_type)
    except ValueError:
        raise errors.UnsupportedTypeError(str(value_type), key) from None

    if value_type is keys.ValueType.NUMBER:
        return to_number(raw)
    if value_type is keys.ValueType.OBJECT:
        return to_object(raw, key)
    return raw
