import pytest

from unifiedlogs.errors import ParseError
from unifiedlogs.formatter import FirehoseItemInfo, parse_formatter


def _single(message, item_type=2, item_size=2):
    return [FirehoseItemInfo(message, item_type, item_size)]


@pytest.mark.parametrize(
    ("fmt", "message", "expected"),
    [
        ("%+04d", "2", "+002"),
        ("%04d", "2", "0002"),
        ("%#4x", "2", " 0x2"),
        ("%#04o", "100", "0o144"),
        ("%07o", "100", "0000144"),
        ("%x", "10", "A"),
        ("%+09.4f", "4570111009880014848", "+000.0035"),
        ("%9.4f", "4570111009880014848", "   0.0035"),
        ("%-8.4f", "4570111009880014848", "0.0035  "),
        ("%f", "4614286721111404799", "3.154944"),
        ("%d", "-248", "-248"),
        ("%f", "-4611686018427387904", "-2"),
        ("%f", "-4484628366119329180", "-650937839.633862"),
        (
            "%s",
            "The big red dog jumped over the crab",
            "The big red dog jumped over the crab",
        ),
        ("%.2@", "aaabbbb", "aa"),
    ],
)
def test_parse_formatter_cases(fmt, message, expected):
    items = _single(message)
    assert parse_formatter(fmt, items, items[0].item_type, 0) == expected


def test_dynamic_width_from_precision_item():
    items = [
        FirehoseItemInfo("aaabbbb", 0x12, 10),
        FirehoseItemInfo("hi", 2, 2),
    ]
    assert parse_formatter("%*s", items, items[0].item_type, 0) == "        hi"


def test_precision_item_without_value():
    items = [FirehoseItemInfo("", 0x10, 4)]
    assert (
        parse_formatter("%s", items, 0x10, 0)
        == "Failed to format string due index length"
    )


def test_dynamic_zero_item_consumes_next_value():
    items = [FirehoseItemInfo("5", 0, 0), FirehoseItemInfo("42", 0, 0)]
    assert parse_formatter("%*d", items, 0, 0) == "42"


def test_dynamic_zero_item_without_value():
    items = [FirehoseItemInfo("5", 0, 0)]
    assert (
        parse_formatter("%*d", items, 0, 0)
        == "Failed to format precision/dynamic string due index length"
    )


def test_star_precision_uses_item_count():
    items = [FirehoseItemInfo("", 0x12, 3), FirehoseItemInfo("abcdef", 0x20, 6)]
    assert parse_formatter("%.*s", items, 0x12, 0) == "ab"


def test_number_item_rendered_as_char():
    items = _single("65", item_type=0)
    assert parse_formatter("%c", items, 0, 0) == "A"


def test_bad_number_for_char():
    items = _single("abc", item_type=0)
    assert (
        parse_formatter("%c", items, 0, 0)
        == "Failed to parse number item to char string"
    )


def test_length_modifier_before_type():
    items = _single("-5")
    assert parse_formatter("%lld", items, 2, 0) == "-5"


def test_dot_without_precision_digits():
    items = [FirehoseItemInfo("4622945017495814144", 0, 8)]
    assert parse_formatter("%1.f", items, 0, 0) == "12"


def test_type_formatter_remainder():
    items = _single("test", item_size=4)
    assert parse_formatter("}s", items, 2, 0) == "test"


def test_errno_conversion():
    items = _single("2", item_type=0, item_size=4)
    assert parse_formatter("%m", items, 0, 0) == "No such file or directory"


def test_mismatched_int_defaults_to_zero():
    items = _single("All", item_type=32, item_size=3)
    assert parse_formatter("%u", items, 32, 0) == "0"


def test_unknown_conversion_raises():
    items = _single("1")
    with pytest.raises(ParseError):
        parse_formatter("%y", items, 2, 0)


def test_length_without_type_raises():
    items = _single("1")
    with pytest.raises(ParseError):
        parse_formatter("%l", items, 2, 0)


def test_item_index_selects_item():
    items = [FirehoseItemInfo("first", 32, 5), FirehoseItemInfo("second", 32, 6)]
    assert parse_formatter("%s", items, 32, 1) == "second"