"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from csvimporter.domain.entities import NumberLocale
from csvimporter.domain.errors import AmountParseError
from csvimporter.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text, expected",
    [
        ("123.45", Decimal("123.45")),
        ("-3.50", Decimal("-3.50")),
        ("+3.50", Decimal("3.50")),
        ("3.50-", Decimal("-3.50")),
        ("(12.00)", Decimal("-12.00")),
        ("$1,234.56", Decimal("1234.56")),
        ("-$5", Decimal("-5")),
        ("€ 7.25", Decimal("7.25")),
        (" 42 ", Decimal("42")),
        (".5", Decimal("0.5")),
    ],
)
def test_parse_amount_us(us_locale, text, expected):
    assert parse_amount(text, us_locale) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1.234,56", Decimal("1234.56")),
        ("-3,50", Decimal("-3.50")),
        ("3,50 €", Decimal("3.50")),
        ("1\u00a0234,56", Decimal("1234.56")),
    ],
)
def test_parse_amount_decimal_comma(de_locale, text, expected):
    assert parse_amount(text, de_locale) == expected


def test_parse_amount_keeps_precision(us_locale):
    assert str(parse_amount("0.10", us_locale)) == "0.10"


def test_empty_amount(us_locale):
    with pytest.raises(AmountParseError) as excinfo:
        parse_amount("", us_locale)
    assert str(excinfo.value) == "Empty amount"


@pytest.mark.parametrize("text", ["abc", "1.2.3", "12-34", "--5", "$"])
def test_invalid_amount(us_locale, text):
    with pytest.raises(AmountParseError) as excinfo:
        parse_amount(text, us_locale)
    assert excinfo.value.value == text


def test_default_locale_from_system():
    """Without an explicit locale the process conventions are used."""
    assert isinstance(NumberLocale.from_system(), NumberLocale)
    assert parse_amount("42") == Decimal("42")


def test_grouping_separator_is_not_a_decimal_point(us_locale, de_locale):
    """A misplaced grouping character is an error, not a scaled amount."""
    with pytest.raises(AmountParseError):
        parse_amount("3.50", de_locale)
    with pytest.raises(AmountParseError):
        parse_amount("3,50", us_locale)


@pytest.mark.parametrize("text", ["12,34.5", "1,2345.00", "1.234,5,6", "1,234,56"])
def test_badly_grouped_amounts(us_locale, text):
    with pytest.raises(AmountParseError):
        parse_amount(text, us_locale)


def test_grouping_must_precede_decimal_point(de_locale):
    assert parse_amount("12.345.678,90", de_locale) == Decimal("12345678.90")
    with pytest.raises(AmountParseError):
        parse_amount("1,234.5", de_locale)
