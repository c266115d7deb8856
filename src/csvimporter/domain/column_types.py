"""Column role assignment and validation."""

from collections import defaultdict
from typing import Optional, Sequence

from csvimporter.domain.entities import ColumnType, NumberLocale
from csvimporter.domain.errors import (
    AmountParseError,
    DateParseError,
    ValidationError,
    duplicate_column_role,
)
from csvimporter.utils.amount_parser import parse_amount
from csvimporter.utils.date_parser import parse_date

# Roles that at most one column may hold.
EXCLUSIVE_ROLES = (ColumnType.DATE, ColumnType.DESCRIPTION, ColumnType.AMOUNT)

_SPELLINGS = {
    "none": ColumnType.IGNORE,
    "ignore": ColumnType.IGNORE,
    "": ColumnType.IGNORE,
    "date": ColumnType.DATE,
    "description": ColumnType.DESCRIPTION,
    "desc": ColumnType.DESCRIPTION,
    "amount": ColumnType.AMOUNT,
}


def default_assignment(column_count: int) -> list[ColumnType]:
    """Return an all-IGNORE assignment for the given column count."""
    return [ColumnType.IGNORE] * column_count


def validate(column_types: Sequence[ColumnType]) -> None:
    """Check that no exclusive role is held by more than one column.

    Raises:
        ValidationError: If a role is assigned to several columns
    """
    holders: dict[ColumnType, list[int]] = defaultdict(list)
    for index, column_type in enumerate(column_types):
        if not isinstance(column_type, ColumnType):
            raise ValidationError(f"Invalid column type {column_type!r} at column {index + 1}")
        holders[column_type].append(index)

    for role in EXCLUSIVE_ROLES:
        if len(holders[role]) > 1:
            raise ValidationError(duplicate_column_role(role.value, holders[role]))


def apply(
    proposed: Sequence[ColumnType], column_count: Optional[int] = None
) -> list[ColumnType]:
    """Validate a proposed assignment and return a copy of it.

    Args:
        proposed: Proposed column types
        column_count: If given, the assignment must have exactly this length

    Returns:
        New list of column types

    Raises:
        ValidationError: If the assignment is invalid
    """
    validate(proposed)
    if column_count is not None and len(proposed) != column_count:
        raise ValidationError(
            f"Expected {column_count} column types, got {len(proposed)}"
        )
    return list(proposed)


def resize(column_types: Sequence[ColumnType], column_count: int) -> list[ColumnType]:
    """Truncate or pad (with IGNORE) an assignment to a new column count."""
    resized = list(column_types[:column_count])
    resized.extend(default_assignment(column_count - len(resized)))
    return resized


def assign_role(
    column_types: Sequence[ColumnType], index: int, role: ColumnType
) -> list[ColumnType]:
    """Give ``role`` to column ``index``, clearing any previous holder of it."""
    if not 0 <= index < len(column_types):
        raise ValidationError(f"Column {index + 1} does not exist")
    updated = list(column_types)
    if role is not ColumnType.IGNORE:
        updated = [ColumnType.IGNORE if ct is role else ct for ct in updated]
    updated[index] = role
    return updated


def parse_column_types(text: str) -> list[ColumnType]:
    """Parse a comma-separated list like "date,description,amount".

    Raises:
        ValidationError: If a name is not a known column type
    """
    result = []
    for name in text.split(","):
        key = name.strip().lower()
        if key not in _SPELLINGS:
            raise ValidationError(
                f"Unknown column type '{name.strip()}'. "
                "Must be one of: none, date, description, amount"
            )
        result.append(_SPELLINGS[key])
    return result


def format_column_types(column_types: Sequence[ColumnType]) -> str:
    """Inverse of ``parse_column_types``."""
    return ",".join(ct.value for ct in column_types)


def _mostly(cells: list[str], accepts) -> bool:
    values = [cell for cell in cells if cell.strip()]
    if not values:
        return False
    hits = sum(1 for cell in values if accepts(cell))
    return hits * 2 > len(values)


def guess_assignment(
    grid: Sequence[Sequence[str]],
    date_format: str,
    number_locale: Optional[NumberLocale] = None,
) -> list[ColumnType]:
    """Propose column roles from the grid contents.

    DATE goes to the first column where most non-blank cells are dates
    under ``date_format``; AMOUNT to the first other column where most
    non-blank cells are amounts; DESCRIPTION to the remaining column
    with the longest average text. Anything else is IGNORE.
    """
    width = max((len(row) for row in grid), default=0)
    columns = [[row[i] if i < len(row) else "" for row in grid] for i in range(width)]
    conv = number_locale or NumberLocale.from_system()
    result = default_assignment(width)

    def is_date(cell: str) -> bool:
        try:
            parse_date(cell, date_format)
        except DateParseError:
            return False
        return True

    def is_amount(cell: str) -> bool:
        try:
            parse_amount(cell, conv)
        except AmountParseError:
            return False
        return True

    for index, cells in enumerate(columns):
        if _mostly(cells, is_date):
            result[index] = ColumnType.DATE
            break

    for index, cells in enumerate(columns):
        if result[index] is ColumnType.IGNORE and _mostly(cells, is_amount):
            result[index] = ColumnType.AMOUNT
            break

    best_index, best_length = None, 0.0
    for index, cells in enumerate(columns):
        if result[index] is not ColumnType.IGNORE:
            continue
        values = [cell.strip() for cell in cells if cell.strip()]
        if not values:
            continue
        average = sum(len(v) for v in values) / len(values)
        if average > best_length:
            best_index, best_length = index, average
    if best_index is not None:
        result[best_index] = ColumnType.DESCRIPTION

    return result
