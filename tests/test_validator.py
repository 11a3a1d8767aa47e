import pytest

from validator import (
    UNDEFINED,
    AnswerValidator,
    format_display,
    normalize,
    parse_number,
    simplify_fraction,
)

v = AnswerValidator()


def ok(answer, expected):
    return v.validate(answer, expected).correct


# ---------- integers ----------


def test_integers():
    assert ok("5", "5")
    assert ok("123", "123")
    assert ok("0", "0")
    assert not ok("5", "6")
    assert not ok("10", "11")


def test_whitespace_and_leading_zeros():
    assert ok(" 5 ", "5")
    assert ok("5", " 5 ")
    assert ok("05", "5")
    assert ok("005", "5")


def test_signed_integers():
    assert ok("-5", "-5")
    assert ok("+7", "7")
    assert not ok("-5", "5")


# ---------- decimals ----------


def test_decimals_and_trailing_zeros():
    assert ok("3.5", "3.5")
    assert ok("10.0", "10")
    assert ok("5.00", "5")
    assert ok("5.", "5")
    assert ok(".5", "1/2")
    assert ok("0.333", "0.333")


# ---------- fractions / mixed numbers ----------


def test_equivalent_fractions():
    assert ok("1/2", "2/4")
    assert ok("2/4", "1/2")
    assert ok("4/8", "1/2")
    assert ok("12/8", "3/2")
    assert ok("6/4", "3/2")
    assert ok("3 / 4", "3/4")


def test_mixed_numbers():
    assert ok("1 1/2", "1 1/2")
    assert ok("1 1/2", "3/2")
    assert ok("12/8", "1 1/2")
    assert ok("1   1/2", "1 1/2")
    assert ok("-1 1/2", "-3/2")


def test_cross_family():
    assert ok("12/8", "1.5")
    assert ok("1/2", "0.5")
    assert ok("0.5", "1/2")
    assert ok("1/4", "0.25")
    assert ok("1 1/2", "1.5")
    assert ok("2 1/4", "2.25")


def test_tolerance_is_absolute():
    assert ok("0.3333", "1/3")
    assert not ok("0.33", "1/3")


def test_non_equivalent():
    assert not ok("1/2", "1/3")
    assert not ok("2/3", "3/4")
    assert not ok("1 1/2", "1 1/4")


# ---------- rejections ----------


def test_empty_and_garbage():
    assert not ok("", "5")
    assert not ok("   ", "5")
    assert not ok("5", "")
    assert not ok("abc", "5")
    assert not ok("5", "abc")
    assert not ok("inf", "5")
    assert not ok("nan", "5")
    assert not ok("1..5", "10.5")
    assert not ok("5..0", "50")
    assert not ok("1.2.3", "1.23")


def test_zero_denominator_is_rejected_not_raised():
    assert not ok("1/0", "5")
    assert not ok("5", "1/0")
    assert not ok("1/0", "1/0")
    assert not ok("1 1/0", "1")


def test_non_numeric_answers_fall_back_to_text():
    assert ok("Seven", "  seven ")
    assert not ok("seven", "eight")


def test_result_carries_normalized_forms():
    r = v.validate(" 005.50 ", "11/2")
    assert r.correct is True
    assert r.normalized_input == "5.5"
    assert r.normalized_answer == "11/2"
    assert r.input_value == pytest.approx(5.5)
    assert r.answer_value == pytest.approx(5.5)

    r = v.validate("abc", "5")
    assert r.input_value is None and r.answer_value == 5.0


# ---------- helpers ----------


@pytest.mark.parametrize(
    "text,expected",
    [
        ("  1   1 / 2 ", "1 1/2"),
        ("005", "5"),
        ("-05", "-5"),
        ("5.00", "5"),
        ("0.50", "0.5"),
        (".5", "0.5"),
        ("10", "10"),
        ("1.05", "1.05"),
        ("ABC", "abc"),
        ("1..5", "1..5"),
        ("0.0.5", "0.0.5"),
        ("", ""),
    ],
)
def test_normalize(text, expected):
    assert normalize(text) == expected


@pytest.mark.parametrize("text", ["  1   1 / 2 ", "005.500", "-0.0", "ABC  def", "12/08", ".5", "0.0.5", "1..5", "1.2.3", "00.5"])
def test_normalize_is_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once


def test_parse_number():
    assert parse_number("1 1/2") == 1.5
    assert parse_number("3/4") == 0.75
    assert parse_number("-2.5") == -2.5
    assert parse_number("42") == 42.0
    assert parse_number("abc") is None
    assert parse_number("1/0") is None
    assert parse_number("1e5") is None
    assert parse_number("1/2/3") is None
    assert parse_number("5..0") is None
    assert parse_number("0.0.5") is None


def test_simplify_fraction():
    assert simplify_fraction(4, 8) == "1/2"
    assert simplify_fraction(6, 9) == "2/3"
    assert simplify_fraction(3, 1) == "3"
    assert simplify_fraction(12, 8) == "1 1/2"
    assert simplify_fraction(8, 4) == "2"
    assert simplify_fraction(0, 5) == "0"
    assert simplify_fraction(-3, 2) == "-1 1/2"
    assert simplify_fraction(3, -4) == "-3/4"


def test_simplify_fraction_zero_denominator():
    assert simplify_fraction(7, 0) == UNDEFINED
    assert simplify_fraction(0, 0) == UNDEFINED


def test_format_display():
    assert format_display(5) == "5"
    assert format_display(5.0) == "5"
    assert format_display(5.5) == "5.5"
    assert format_display(5.50) == "5.5"
    assert format_display(2.25) == "2.25"
    assert format_display(1 / 3) == "0.33"
    assert format_display(2.999) == "3"
    assert format_display(-0.001) == "0"


def test_validator_exposes_helpers():
    assert AnswerValidator.simplify_fraction(4, 8) == "1/2"
    assert v.format_display(5.5) == "5.5"
