"""Assemble a Unified Log message from its printf format string and items."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from unifiedlogs.errors import ParseError
from unifiedlogs.formatter import (
    DYNAMIC_PRECISION_VALUE,
    PRECISION_ITEMS,
    FirehoseItemInfo,
    parse_formatter,
)

logger = logging.getLogger(__name__)

MESSAGE_PATTERN = (
    r"(%(?:(?:\{[^}]+}?)(?:[-+0#]{0,5})(?:\d+|\*)?(?:\.(?:\d+|\*)?)?"
    r"(?:h|hh|l|ll|w|I|z|t|q|I32|I64)?[cmCdiouxXeEfgGaAnpsSZP@%}]"
    r"|(?:[-+0 #]{0,5})(?:\d+|\*)?(?:\.(?:\d+|\*)?)?"
    r"(?:h|hh|l||q|t|ll|w|I|z|I32|I64)?[cmCdiouxXeEfgGaAnpsSZP@%]))"
)
MESSAGE_RE = re.compile(MESSAGE_PATTERN)

MISSING_DATA = "<Missing message data>"
PRIVATE = "<private>"

PRIVATE_STRING_TYPES = frozenset({0x1, 0x21, 0x31, 0x41})
PRIVATE_NUMBER_TYPE = 0x1
PRIVATE_NUMBER_SIZE = 0x8000


@dataclass
class _Replacement:
    formatter: str
    message: str


def _is_private(item: FirehoseItemInfo) -> bool:
    return (
        item.item_type in PRIVATE_STRING_TYPES
        and not item.message_strings
        and item.item_size == 0
    ) or (item.item_type == PRIVATE_NUMBER_TYPE and item.item_size == PRIVATE_NUMBER_SIZE)


def format_firehose_log_message(
    format_string: str,
    items: Sequence[FirehoseItemInfo],
    message_re: re.Pattern[str] = MESSAGE_RE,
) -> str:
    """Substitute the decoded ``items`` into the printf ``format_string``."""
    logger.info("Unified log base message: %r", format_string)
    logger.info("Unified log entry strings: %r", items)

    if not format_string and not items:
        return ""
    if not format_string:
        return items[0].message_strings

    replacements: list[_Replacement] = []
    item_index = 0
    for match in message_re.finditer(format_string):
        spec = match.group(0)
        if spec.startswith("% "):
            continue
        if spec == "%%":
            replacements.append(_Replacement(spec, "%"))
            continue
        if item_index >= len(items):
            replacements.append(_Replacement(spec, MISSING_DATA))
            continue

        formatted = items[item_index].message_strings

        # A formatter with no conversion type is kept as literal text.
        if spec.startswith("%{") and spec.endswith("}"):
            replacements.append(_Replacement(spec, spec))
            continue

        if items[item_index].item_type in PRECISION_ITEMS:
            item_index += 1
        if (
            item_index < len(items)
            and items[item_index].item_type == DYNAMIC_PRECISION_VALUE
            and items[item_index].item_size == 0
            and "%*" in spec
        ):
            item_index += 1
        if item_index >= len(items):
            replacements.append(_Replacement(spec, MISSING_DATA))
            continue

        item = items[item_index]
        if _is_private(item):
            formatted = PRIVATE
        elif spec.startswith("%{"):
            try:
                formatted = parse_type_formatter(spec, items, item.item_type, item_index)
            except ParseError as err:
                logger.warning("Failed to format message type ex: public/private: %s", err)
        else:
            try:
                formatted = parse_formatter(spec, list(items), item.item_type, item_index)
            except ParseError as err:
                logger.warning("Failed to format message: %s", err)

        item_index += 1
        replacements.append(_Replacement(spec, formatted))

    # Split rather than replace: a substituted value may itself contain a formatter.
    parts: list[str] = []
    remainder = format_string
    for replacement in replacements:
        prefix, found, rest = remainder.partition(replacement.formatter)
        if not found:
            logger.error(
                "Failed to split log message (%s) by printf formatter: %s",
                remainder,
                replacement.formatter,
            )
            continue
        parts.append(prefix)
        parts.append(replacement.message)
        remainder = rest
    parts.append(remainder)
    return "".join(parts)


def parse_type_formatter(
    formatter: str,
    items: Sequence[FirehoseItemInfo],
    item_type: int,
    item_index: int,
) -> str:
    """Render a formatter with a type annotation such as ``%{public}s``.

    Signpost annotations are appended to the value in parentheses.
    Raises ``ParseError`` if the annotation is not closed.
    """
    end = formatter.find("}")
    if end < 0:
        raise ParseError(f"unterminated format type in {formatter!r}")
    format_type, spec = formatter[:end], formatter[end:]

    message = parse_formatter(spec, list(items), item_type, item_index)
    if "signpost" in format_type:
        message = f"{message} ({parse_signpost_format(format_type)})"
    return message


def parse_signpost_format(signpost_format: str) -> str:
    """Extract the signpost metadata from a format type such as ``%{public, signpost.x``."""
    start = 0
    while start < len(signpost_format) and signpost_format[start] in "%{":
        start += 1
    if start == 0:
        raise ParseError(f"signpost format does not start with '%{{': {signpost_format!r}")
    fields = signpost_format[start:].split(",")

    if signpost_format.startswith("%{sign"):
        return fields[0]
    if len(fields) < 2:
        raise ParseError(f"no signpost metadata in {signpost_format!r}")
    return fields[1].strip()