"""printf-style rendering of individual Unified Log message values.

Number values arrive as decimal strings: integers hold the value itself,
floats hold the raw IEEE-754 bits as a signed 64-bit integer. Each
function renders one value for one printf conversion type with the given
width, precision and flags.
"""

from __future__ import annotations

import logging
import math
import re
import struct
from decimal import Decimal

logger = logging.getLogger(__name__)

FLOAT_TYPES = frozenset({"f", "F", "e", "E", "g", "G"})
INT_TYPES = frozenset({"d", "D", "i", "u"})
HEX_TYPES = frozenset({"x", "X", "a", "A", "p"})
OCTAL_TYPES = frozenset({"o", "O"})
ERROR_TYPES = frozenset({"m"})
STRING_TYPES = frozenset({"c", "s", "@", "S", "C", "P"})

_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1
_U64_MASK = (1 << 64) - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")

_MISMATCH_HINT = (
    "Log message possibly incorrectly formatted ex: printf(%u, \"message\") "
    "instead of printf(%u, 10). Apple may record message as "
    "'<decode: mismatch for [%u] got [STRING sz:10]>'"
)


def _to_i64(message: str) -> int:
    if not _INTEGER.fullmatch(message):
        raise ValueError("invalid digit found in string")
    value = int(message)
    if not _I64_MIN <= value <= _I64_MAX:
        raise ValueError("number too large to fit in target type")
    return value


def parse_float(message: str) -> float:
    """Decode a float from the decimal string of its raw 64-bit pattern.

    Returns 0.0 if the string is not a signed 64-bit integer.
    """
    try:
        bits = _to_i64(message)
    except ValueError as err:
        logger.warning(
            "Failed to parse float log message value: %s, err: %s. %s",
            message,
            err,
            _MISMATCH_HINT,
        )
        return 0.0
    (value,) = struct.unpack("<d", struct.pack("<q", bits))
    return value


def parse_int(message: str) -> int:
    """Parse a signed 64-bit integer, returning 0 if the string is not one."""
    try:
        return _to_i64(message)
    except ValueError as err:
        logger.warning(
            "Failed to parse int log message value: %s, err: %s. %s",
            message,
            err,
            _MISMATCH_HINT,
        )
        return 0


def _shortest_fraction_digits(value: float) -> int:
    """Digits after the point in the shortest round-trip rendering of ``value``."""
    if not math.isfinite(value):
        return 0
    exponent = Decimal(repr(value)).normalize().as_tuple().exponent
    return max(0, -int(exponent))


def _float_text(value: float, precision: int) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return f"{value:.{precision}f}"


def _radix_text(value: int, spec: str, prefix: str, alternate: bool) -> str:
    digits = format(value & _U64_MASK, spec)
    return f"{prefix}{digits}" if alternate else digits


def _pad(text: str, width: int, fill: str, align: str) -> str:
    if align == "<":
        return text.ljust(width, fill)
    return text.rjust(width, fill)


def _render(
    message: str,
    precision: int,
    type_data: str,
    plus_minus: bool,
    hashtag: bool,
    width: int,
    fill: str,
    align: str,
    octal_prefix_always: bool = False,
) -> str:
    plus = "+" if plus_minus else ""
    if width and plus_minus:
        width = max(0, width - 1)

    if type_data in FLOAT_TYPES:
        value = parse_float(message)
        if precision == 0:
            precision = _shortest_fraction_digits(value)
        body = _float_text(value, precision)
    elif type_data in INT_TYPES:
        body = str(parse_int(message))
    elif type_data in STRING_TYPES:
        if precision == 0:
            precision = len(message)
        body = message[:precision]
    elif type_data in HEX_TYPES:
        body = _radix_text(parse_int(message), "X", "0x", hashtag)
    elif type_data in OCTAL_TYPES:
        body = _radix_text(
            parse_int(message), "o", "0o", hashtag or octal_prefix_always
        )
    else:
        return message

    return plus + _pad(body, width, fill, align)


def format_alignment_left(
    message: str,
    width: int,
    precision: int,
    type_data: str,
    plus_minus: bool,
    hashtag: bool,
) -> str:
    """Left-align ``message`` in ``width`` columns, padding with zeros."""
    return _render(message, precision, type_data, plus_minus, hashtag, width, "0", "<")


def format_alignment_right(
    message: str,
    width: int,
    precision: int,
    type_data: str,
    plus_minus: bool,
    hashtag: bool,
) -> str:
    """Right-align ``message`` in ``width`` columns, padding with zeros."""
    return _render(message, precision, type_data, plus_minus, hashtag, width, "0", ">")


def format_alignment_left_space(
    message: str,
    width: int,
    precision: int,
    type_data: str,
    plus_minus: bool,
    hashtag: bool,
) -> str:
    """Left-align ``message`` in ``width`` columns, padding with spaces."""
    return _render(message, precision, type_data, plus_minus, hashtag, width, " ", "<")


def format_alignment_right_space(
    message: str,
    width: int,
    precision: int,
    type_data: str,
    plus_minus: bool,
    hashtag: bool,
) -> str:
    """Right-align ``message`` in ``width`` columns, padding with spaces."""
    return _render(message, precision, type_data, plus_minus, hashtag, width, " ", ">")


def format_left(
    message: str,
    precision: int,
    type_data: str,
    plus_minus: bool,
    hashtag: bool,
) -> str:
    """Render ``message`` with no width, left aligned."""
    return _render(message, precision, type_data, plus_minus, hashtag, 0, " ", "<")


def format_right(
    message: str,
    precision: int,
    type_data: str,
    plus_minus: bool,
    hashtag: bool,
) -> str:
    """Render ``message`` with no width, right aligned.

    Octal values always carry the ``0o`` prefix here.
    """
    return _render(
        message,
        precision,
        type_data,
        plus_minus,
        hashtag,
        0,
        " ",
        ">",
        octal_prefix_always=True,
    )