"""Date parsing utilities."""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from dateutil import parser as date_parser

from csvimporter.domain.errors import DateParseError, ValidationError, unknown_date_format


@dataclass(frozen=True)
class DateFormat:
    """A fixed field order for date cells."""

    id: str
    label: str
    order: tuple[str, ...]

    @property
    def has_year(self) -> bool:
        return "y" in self.order


# Order matters: the first entry is the default selection.
DATE_FORMATS: list[DateFormat] = [
    DateFormat("y-m-d", "y-m-d", ("y", "m", "d")),
    DateFormat("d-m-y", "d-m-y", ("d", "m", "y")),
    DateFormat("m-d-y", "m-d-y", ("m", "d", "y")),
    DateFormat("d-m", "d-m", ("d", "m")),
    DateFormat("m-d", "m-d", ("m", "d")),
]

_DATE_FORMATS_BY_ID = {fmt.id: fmt for fmt in DATE_FORMATS}

_DIGIT_GROUPS = re.compile(r"\d+")
_HAS_LETTERS = re.compile(r"[^\W\d_]")


def get_date_format(format_id: str) -> DateFormat:
    """Look up a date format by identifier.

    Raises:
        ValidationError: If the identifier is not supported
    """
    try:
        return _DATE_FORMATS_BY_ID[format_id]
    except KeyError:
        raise ValidationError(unknown_date_format(format_id, date_format_ids()))


def date_format_ids() -> list[str]:
    """Return the supported date format identifiers in display order."""
    return [fmt.id for fmt in DATE_FORMATS]


def _expand_year(year_str: str) -> int:
    year = int(year_str)
    if len(year_str) <= 2:
        # Two-digit years pivot at 70: 70-99 -> 19xx, 00-69 -> 20xx
        year += 1900 if year >= 70 else 2000
    return year


def _split_compact(digits: str, fmt: DateFormat) -> Optional[list[str]]:
    """Split an all-digit date such as 20230105 or 050123 by field width."""
    if fmt.has_year:
        if len(digits) == 8:
            year_width = 4
        elif len(digits) == 6:
            year_width = 2
        else:
            return None
    elif len(digits) != 4:
        return None
    else:
        year_width = 0

    parts = []
    pos = 0
    for field_name in fmt.order:
        width = year_width if field_name == "y" else 2
        parts.append(digits[pos:pos + width])
        pos += width
    return parts


# Two unrelated defaults: a field that differs between the parses was
# not present in the cell.
_TEXTUAL_DEFAULTS = (datetime(2000, 1, 1), datetime(2004, 2, 2))


def _parse_textual(date_str: str, fmt: DateFormat, today: date) -> date:
    """Parse dates that spell the month, e.g. "05 Jan 2023".

    The day and month, and the year for formats that have one, must all
    come from the cell. Formats without a year reject a cell that has one.
    """
    first, second = (
        date_parser.parse(
            date_str,
            dayfirst=fmt.order[0] == "d",
            yearfirst=fmt.order[0] == "y",
            default=default,
        )
        for default in _TEXTUAL_DEFAULTS
    )
    if (first.month, first.day) != (second.month, second.day):
        raise ValueError("day or month missing")
    if fmt.has_year:
        if first.year != second.year:
            raise ValueError("year missing")
        return first.date()
    if first.year == second.year:
        raise ValueError("unexpected year")
    return date(today.year, first.month, first.day)


def parse_date(date_str: str, format_id: str = "y-m-d", today: Optional[date] = None) -> date:
    """Parse a date cell under one fixed date format.

    The format is never guessed per cell: "01/02/2023" is 1 February
    under d-m-y and 2 January under m-d-y. Any run of non-digits
    separates fields; all-digit cells are split by field width. Formats
    without a year use the current year.

    Args:
        date_str: Raw cell text
        format_id: Date format identifier (see DATE_FORMATS)
        today: Reference date for year-less formats (defaults to today)

    Returns:
        Date object

    Raises:
        DateParseError: If the cell does not hold a valid date in this format
        ValidationError: If format_id is not supported
    """
    fmt = get_date_format(format_id)
    today = today or date.today()
    text = (date_str or "").strip()
    if not text:
        raise DateParseError("Empty date", date_str)

    if _HAS_LETTERS.search(text):
        try:
            return _parse_textual(text, fmt, today)
        except (ValueError, OverflowError) as e:
            raise DateParseError(
                f"Could not parse date '{text}' as {fmt.label}: {e}", date_str
            ) from e

    groups = _DIGIT_GROUPS.findall(text)
    if len(groups) == 1:
        parts = _split_compact(groups[0], fmt)
    elif len(groups) == len(fmt.order):
        parts = groups
    else:
        parts = None
    if parts is None:
        raise DateParseError(f"Could not parse date '{text}' as {fmt.label}", date_str)

    values = dict(zip(fmt.order, parts))
    year = _expand_year(values["y"]) if fmt.has_year else today.year
    try:
        return date(year, int(values["m"]), int(values["d"]))
    except ValueError as e:
        raise DateParseError(
            f"Could not parse date '{text}' as {fmt.label}: {e}", date_str
        ) from e
