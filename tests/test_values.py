"""Unit tests for the text coercion value types."""

# Module responsibilities:
# - Pin the parsing rules of each value type, including the empty-text cases.
# - Check that display text parses back to the same value.

from __future__ import annotations

import pytest

from sheetbind.errors import ScanError
from sheetbind.values import (
    Enumerated,
    Money,
    Months,
    Range,
    TextValue,
    Years,
    YesNo,
    format_float,
    parse_float,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1,234.50", 1234.5),
        ("$1,234.50", 1234.5),
        ("$ 20 000", 20000.0),
        ("-5.25", -5.25),
        ("", 0.0),
        ("  ", 0.0),
    ],
)
def test_money_parsing_strips_currency_noise(text: str, expected: float) -> None:
    assert Money.parse(text) == Money(expected)


def test_money_renderings() -> None:
    money = Money(1234.5)

    assert str(money) == "$1234.50"
    assert money.code() == "1234.5"
    assert money.round() == "1234.50"
    assert str(Money()) == "$0.00"


def test_money_rejects_non_numeric_text() -> None:
    with pytest.raises(ScanError, match="Money"):
        Money.parse("twelve dollars")


def test_scan_string_overwrites_previous_value() -> None:
    money = Money(99.0)
    money.scan_string("")
    assert money.amount == 0.0

    months = Months(7)
    months.scan_string("2 months")
    assert months == Months(2)


@pytest.mark.parametrize("text", ["5 years", "5y", "-5", "5", "5 YEARS", " 5 "])
def test_years_accepts_suffixes_and_sign(text: str) -> None:
    assert Years.parse(text) == Years(5)


def test_years_renderings_and_months() -> None:
    years = Years(5)

    assert str(years) == "5 years"
    assert years.code() == "5"
    assert years.enum() == "5-years"
    assert years.months() == Months(60)


@pytest.mark.parametrize("text", ["", "five", "5 decades"])
def test_years_rejects_bad_text(text: str) -> None:
    with pytest.raises(ScanError):
        Years.parse(text)


@pytest.mark.parametrize(
    ("text", "expected"),
    [("", 0), ("12 months", 12), ("3m", 3), ("18", 18), ("-4", 4)],
)
def test_months_parsing(text: str, expected: int) -> None:
    assert Months.parse(text) == Months(expected)


def test_months_renderings() -> None:
    assert str(Months(6)) == "6 months"
    assert Months(6).code() == "6"
    assert Months(6).enum() == "6-months"


@pytest.mark.parametrize("text", ["yes", "Y", "true", "TRUE"])
def test_yes_words(text: str) -> None:
    assert YesNo.parse(text).value is True


@pytest.mark.parametrize("text", ["no", "N", "false", ""])
def test_no_words(text: str) -> None:
    assert YesNo.parse(text).value is False


def test_yesno_rejects_other_words() -> None:
    with pytest.raises(ScanError, match="YesNo"):
        YesNo.parse("maybe")


def test_yesno_renderings() -> None:
    assert str(YesNo(True)) == "yes"
    assert YesNo(False).code() == "false"
    assert bool(YesNo(True))


@pytest.mark.parametrize("text", ["10-20", "10 - 20", "10 to 20"])
def test_range_parsing(text: str) -> None:
    parsed = Range.parse(text)

    assert (parsed.a, parsed.b) == (10, 20)


@pytest.mark.parametrize("text", ["10", "10-20-30", "", "-10-20"])
def test_range_requires_exactly_two_numbers(text: str) -> None:
    with pytest.raises(ScanError):
        Range.parse(text)


def test_display_text_round_trips() -> None:
    values = [
        Money(0.0),
        Money(1234.5),
        Money(0.01),
        Money(-42.1),
        Years(0),
        Years(30),
        Months(0),
        Months(240),
        YesNo(True),
        YesNo(False),
        Range(1, 99),
    ]
    for value in values:
        assert type(value).parse(str(value)) == value


def test_coercion_capabilities() -> None:
    for value in (Money(), Years(), Months(), YesNo(), Range()):
        assert isinstance(value, TextValue)
    assert isinstance(Years(), Enumerated)
    assert isinstance(Months(), Enumerated)
    assert not isinstance(Money(), Enumerated)


def test_format_float_drops_trailing_zero_fraction() -> None:
    assert format_float(3.0) == "3"
    assert format_float(0.0725) == "0.0725"


@pytest.mark.parametrize("text", ["1_000", "nan", "inf", "-Infinity", "1.2.3", "0x10", "."])
def test_decimal_parsing_rejects_non_decimal_spellings(text: str) -> None:
    with pytest.raises(ScanError, match="invalid decimal"):
        parse_float(text)
    with pytest.raises(ScanError, match="Money"):
        Money.parse(text)


@pytest.mark.parametrize(
    ("text", "expected"),
    [("12", 12.0), ("-0.5", -0.5), (".25", 0.25), ("3.", 3.0), ("1e3", 1000.0), ("+2E-2", 0.02)],
)
def test_decimal_parsing_accepts_plain_notation(text: str, expected: float) -> None:
    assert parse_float(text) == expected


@pytest.mark.parametrize("text", ["10-", "-20"])
def test_range_component_errors_name_the_type(text: str) -> None:
    with pytest.raises(ScanError, match=r"Range\.scan_string: invalid integer"):
        Range.parse(text)
