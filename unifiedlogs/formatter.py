"""Apply one printf conversion specification to a Unified Log message item."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass

from unifiedlogs.errors import ParseError
from unifiedlogs.printf import (
    ERROR_TYPES,
    format_alignment_left,
    format_alignment_left_space,
    format_alignment_right,
    format_alignment_right_space,
    format_left,
    format_right,
)

logger = logging.getLogger(__name__)

PRECISION_ITEMS = frozenset({0x10, 0x12})
DYNAMIC_PRECISION_VALUE = 0x0
NUMBER_ITEM_TYPES = frozenset({0x0, 0x1, 0x2})

_FLAG_CHARS = frozenset("-+#0")
_LENGTH_CHARS = frozenset("hlwIztq")
_TYPE_CHARS = frozenset("cmCdiouxXeEfgGaAnpsSZP@")
_PRECISION_STOP_CHARS = frozenset("hljzZtqLdDiuUoOcCxXfFeEgGaASspPn%@")
_LENGTH_VALUES = frozenset({"h", "hh", "l", "ll", "w", "I", "z", "t", "q"})

_U32_MAX = (1 << 32) - 1
_USIZE_MAX = (1 << 64) - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")
_DIGITS = re.compile(r"[0-9]*")


@dataclass
class FirehoseItemInfo:
    """A decoded message argument: its text, item type and item size."""

    message_strings: str = ""
    item_type: int = 0
    item_size: int = 0


def _parse_unsigned(text: str, maximum: int) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ValueError(f"invalid unsigned number: {text!r}")
    value = int(text)
    if value > maximum:
        raise ValueError(f"number too large: {text!r}")
    return value


def _run_of(text: str, allowed: frozenset[str]) -> str:
    """Return the longest prefix of ``text`` made only of ``allowed`` chars."""
    end = 0
    while end < len(text) and text[end] in allowed:
        end += 1
    return text[:end]


def _run_until(text: str, stop: frozenset[str]) -> str:
    """Return the longest prefix of ``text`` containing none of ``stop``."""
    end = 0
    while end < len(text) and text[end] not in stop:
        end += 1
    return text[:end]


def _errno_description(message: str) -> str:
    try:
        code = int(message)
    except ValueError:
        logger.warning("Failed to parse errno value: %s", message)
        return message
    return os.strerror(code)


def parse_formatter(
    formatter: str,
    items: list[FirehoseItemInfo],
    item_type: int,
    item_index: int,
) -> str:
    """Render ``items[item_index]`` according to the printf ``formatter``.

    Dynamic width and precision values are taken from preceding precision
    items. Raises ``ParseError`` if no conversion type can be found.
    """
    index = item_index
    precision_value = 0

    if item_type in PRECISION_ITEMS:
        precision_value = items[index].item_size
        index += 1
        if index >= len(items):
            logger.error(
                "Index now greater than messages array. Index: %d. "
                "Message Array len: %d",
                index,
                len(items),
            )
            return "Failed to format string due index length"

    message = items[index].message_strings

    if formatter.lower().endswith("c") and items[index].item_type in NUMBER_ITEM_TYPES:
        try:
            char_value = _parse_unsigned(items[index].message_strings, _U32_MAX)
        except ValueError as err:
            logger.error("Failed to parse number item to char string: %s", err)
            return "Failed to parse number item to char string"
        message = chr(char_value & 0xFF)

    left_justify = hashtag = pad_zero = plus_minus = False
    width_index = 1
    for position, char in enumerate(formatter[1:], start=1):
        if char not in _FLAG_CHARS:
            width_index = position
            break
        if char == "-":
            left_justify = True
        elif char == "+":
            plus_minus = True
        elif char == "#":
            hashtag = True
        else:
            pad_zero = True

    remainder = formatter[width_index:]
    width = _DIGITS.match(remainder).group()
    remainder = remainder[len(width):]

    if remainder.startswith("*"):
        if item_type == DYNAMIC_PRECISION_VALUE and items[index].item_size == 0:
            precision_value = items[index].item_size
            index += 1
            if index >= len(items):
                logger.error(
                    "Index now greater than messages array. Index: %d. "
                    "Message Array len: %d",
                    index,
                    len(items),
                )
                return "Failed to format precision/dynamic string due index length"
            message = items[index].message_strings
        width = str(precision_value)
        remainder = remainder[1:]

    if remainder.startswith("."):
        remainder = remainder[len(_run_of(remainder, frozenset("."))):]
        precision_data = _run_until(remainder, _PRECISION_STOP_CHARS)
        if precision_data and precision_data != "*":
            try:
                precision_value = _parse_unsigned(precision_data, _USIZE_MAX)
            except ValueError as err:
                logger.error("Failed to parse format precision value: %s", err)
        elif precision_value != 0:
            precision_value = len(items)
        remainder = remainder[len(precision_data):]

    length_data = _run_of(remainder, _LENGTH_CHARS) or _run_of(remainder, _TYPE_CHARS)
    if not length_data:
        raise ParseError(f"no printf conversion type in {formatter!r}")
    remainder = remainder[len(length_data):]

    type_data = length_data
    if length_data in _LENGTH_VALUES:
        type_data = _run_of(remainder, _TYPE_CHARS)
        if not type_data:
            raise ParseError(f"no printf conversion type in {formatter!r}")

    if type_data in ERROR_TYPES:
        return _errno_description(message)

    if width:
        try:
            width_value = _parse_unsigned(width, _USIZE_MAX)
        except ValueError as err:
            logger.error("Failed to parse format width value: %s", err)
            width_value = 0
        if pad_zero:
            align = format_alignment_left if left_justify else format_alignment_right
        else:
            align = (
                format_alignment_left_space
                if left_justify
                else format_alignment_right_space
            )
        return align(message, width_value, precision_value, type_data, plus_minus, hashtag)

    if left_justify:
        return format_left(message, precision_value, type_data, plus_minus, hashtag)
    return format_right(message, precision_value, type_data, plus_minus, hashtag)