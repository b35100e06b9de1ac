import pytest

from unifiedlogs.printf import (
    format_alignment_left,
    format_alignment_left_space,
    format_alignment_right,
    format_alignment_right_space,
    format_left,
    format_right,
    parse_float,
    parse_int,
)


def test_format_alignment_left():
    assert format_alignment_left("2", 4, 0, "d", False, False) == "2000"


def test_format_alignment_right():
    assert format_alignment_right("2", 4, 0, "d", False, False) == "0002"


def test_format_alignment_left_space():
    assert format_alignment_left_space("2", 4, 0, "d", False, False) == "2   "


def test_format_alignment_right_space():
    assert format_alignment_right_space("2", 4, 0, "d", False, False) == "   2"


def test_format_left():
    assert format_left("2", 0, "d", False, False) == "2"


def test_format_right():
    assert format_right("2", 0, "d", False, False) == "2"


def test_parse_float():
    assert parse_float("4611911198408756429") == 2.1


def test_parse_int():
    assert parse_int("2") == 2


def test_parse_int_invalid_returns_zero():
    assert parse_int("abc") == 0
    assert parse_int("1.5") == 0
    assert parse_int("9223372036854775808") == 0


def test_parse_float_invalid_returns_zero():
    assert parse_float("All") == 0.0


def test_plus_with_zero_padding():
    assert format_alignment_right("2", 4, 0, "d", True, False) == "+002"


def test_hex_alternate_with_space_padding():
    assert format_alignment_right_space("2", 4, 0, "x", False, True) == " 0x2"


def test_octal_alternate_zero_padding_overflows_width():
    assert format_alignment_right("100", 4, 0, "o", False, True) == "0o144"


def test_octal_zero_padding():
    assert format_alignment_right("100", 7, 0, "o", False, False) == "0000144"


def test_hex_uppercase_without_width():
    assert format_right("10", 0, "x", False, False) == "A"


def test_hex_negative_is_twos_complement():
    assert format_right("-1", 0, "X", False, False) == "FFFFFFFFFFFFFFFF"


def test_format_right_octal_always_prefixed():
    assert format_right("8", 0, "o", False, False) == "0o10"


def test_format_left_octal_respects_hashtag():
    assert format_left("8", 0, "o", False, False) == "10"
    assert format_left("8", 0, "o", False, True) == "0o10"


def test_float_plus_zero_padded():
    result = format_alignment_right("4570111009880014848", 9, 4, "f", True, False)
    assert result == "+000.0035"


def test_float_space_padded_right():
    result = format_alignment_right_space("4570111009880014848", 9, 4, "f", False, False)
    assert result == "   0.0035"


def test_float_space_padded_left():
    result = format_alignment_left_space("4570111009880014848", 8, 4, "f", False, False)
    assert result == "0.0035  "


@pytest.mark.parametrize(
    ("bits", "expected"),
    [
        ("4614286721111404799", "3.154944"),
        ("-4611686018427387904", "-2"),
        ("-4484628366119329180", "-650937839.633862"),
    ],
)
def test_float_default_precision(bits, expected):
    assert format_right(bits, 0, "f", False, False) == expected


def test_negative_int():
    assert format_right("-248", 0, "d", False, False) == "-248"


def test_string_unchanged():
    text = "The big red dog jumped over the crab"
    assert format_right(text, 0, "s", False, False) == text


def test_string_precision_truncates():
    assert format_right("aaabbbb", 2, "@", False, False) == "aa"


def test_string_width_right_space():
    assert format_alignment_right_space("hi", 10, 0, "s", False, False) == "        hi"


def test_unknown_type_returns_message():
    assert format_right("value", 0, "n", False, False) == "value"
    assert format_alignment_left("value", 9, 0, "n", False, False) == "value"


def test_padded_width_matches_requested_width():
    for width in range(1, 12):
        result = format_alignment_left_space("7", width, 0, "d", False, False)
        assert len(result) == width
        assert result.strip() == "7"