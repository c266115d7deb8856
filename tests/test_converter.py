"""Tests for row-to-transaction conversion."""

from datetime import date
from decimal import Decimal

import pytest

from csvimporter.domain.converter import convert, convert_row
from csvimporter.domain.entities import ColumnType, RowErrorKind
from csvimporter.domain.errors import ValidationError

TYPES = [ColumnType.DATE, ColumnType.DESCRIPTION, ColumnType.AMOUNT]


def test_convert_row(us_locale):
    tl = convert_row(0, ["2023-01-05", "Coffee", "-3.50"], TYPES, "y-m-d", "Checking", us_locale)
    assert tl.ok
    assert tl.transaction.date == date(2023, 1, 5)
    assert tl.transaction.description == "Coffee"
    assert tl.transaction.amount == Decimal("-3.50")
    assert tl.transaction.account == "Checking"


def test_missing_description_column_gives_empty_text(us_locale):
    types = [ColumnType.DATE, ColumnType.IGNORE, ColumnType.AMOUNT]
    tl = convert_row(0, ["2023-01-05", "Coffee", "-3.50"], types, "y-m-d", None, us_locale)
    assert tl.transaction.description == ""


def test_date_is_checked_before_amount(us_locale):
    tl = convert_row(3, ["soon", "Coffee", "lots"], TYPES, "y-m-d", None, us_locale)
    assert not tl.ok
    assert tl.error.kind is RowErrorKind.DATE
    assert tl.error.value == "soon"
    assert tl.error.line == 3


def test_empty_amount_is_error(us_locale):
    tl = convert_row(0, ["2023-01-05", "Coffee", ""], TYPES, "y-m-d", None, us_locale)
    assert tl.error.kind is RowErrorKind.AMOUNT
    assert tl.error.message == "Empty amount"


def test_short_row_is_missing_amount(us_locale):
    tl = convert_row(0, ["2023-01-05", "Coffee"], TYPES, "y-m-d", None, us_locale)
    assert tl.error.kind is RowErrorKind.AMOUNT
    assert tl.error.message == "Missing amount"


def test_no_date_column(us_locale):
    types = [ColumnType.IGNORE, ColumnType.DESCRIPTION, ColumnType.AMOUNT]
    tl = convert_row(0, ["2023-01-05", "Coffee", "-3.50"], types, "y-m-d", None, us_locale)
    assert tl.error.kind is RowErrorKind.DATE
    assert tl.error.message == "No date column selected"


def test_no_amount_column(us_locale):
    types = [ColumnType.DATE, ColumnType.DESCRIPTION, ColumnType.IGNORE]
    tl = convert_row(0, ["2023-01-05", "Coffee", "-3.50"], types, "y-m-d", None, us_locale)
    assert tl.error.kind is RowErrorKind.AMOUNT
    assert tl.error.message == "No amount column selected"


def test_convert_grid_in_row_order(us_locale):
    grid = [
        ["2023-01-05", "Coffee", "-3.50"],
        ["not-a-date", "Bagel", "-2.25"],
        ["2023-01-07", "Salary", "2500.00"],
    ]
    result = convert(grid, TYPES, "y-m-d", number_locale=us_locale)

    assert [tl.line for tl in result.lines] == [0, 1, 2]
    assert result.error_lines == {1}
    assert [t.description for t in result.transactions] == ["Coffee", "Salary"]
    assert result.errors[0].kind is RowErrorKind.DATE


def test_failed_lines_are_tokenize_errors(us_locale):
    grid = [["2023-01-05", "Coffee", "-3.50"], ["Total", "", ""]]
    result = convert(grid, TYPES, "y-m-d", failed_lines={1}, number_locale=us_locale)
    assert result.error_lines == {1}
    assert result.errors[0].kind is RowErrorKind.TOKENIZE


def test_invalid_column_types_rejected(us_locale):
    with pytest.raises(ValidationError):
        convert([["a", "b"]], [ColumnType.DATE, ColumnType.DATE], "y-m-d", number_locale=us_locale)


def test_unknown_date_format_rejected(us_locale):
    with pytest.raises(ValidationError):
        convert([["a"]], [ColumnType.DATE], "yyyy", number_locale=us_locale)


def test_reuse_existing_keeps_successful_lines(us_locale):
    grid = [
        ["2023-01-05", "Coffee", "-3.50"],
        ["05/01/2023", "Bagel", "-2.25"],
    ]
    first = convert(grid, TYPES, "y-m-d", number_locale=us_locale)
    assert first.error_lines == {1}

    # Under d-m-y the first row no longer parses, but it is kept as is
    second = convert(
        grid,
        TYPES,
        "d-m-y",
        previous=first.lines,
        reuse_existing=True,
        number_locale=us_locale,
    )
    assert second.error_lines == set()
    assert second.lines[0] is first.lines[0]
    assert second.lines[1].transaction.date == date(2023, 1, 5)


def test_without_reuse_everything_is_converted_again(us_locale):
    grid = [["2023-01-05", "Coffee", "-3.50"]]
    first = convert(grid, TYPES, "y-m-d", number_locale=us_locale)
    second = convert(grid, TYPES, "d-m-y", previous=first.lines, number_locale=us_locale)
    assert second.error_lines == {0}
