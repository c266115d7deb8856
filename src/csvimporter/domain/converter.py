"""Row-to-transaction conversion."""

import logging
from typing import Any, Iterable, Optional, Sequence

from csvimporter.domain import column_types as ct
from csvimporter.domain.entities import (
    ColumnType,
    ConversionResult,
    NumberLocale,
    RowError,
    RowErrorKind,
    Transaction,
    TransactionLine,
)
from csvimporter.domain.errors import AmountParseError, DateParseError
from csvimporter.utils.amount_parser import parse_amount
from csvimporter.utils.date_parser import get_date_format, parse_date

logger = logging.getLogger(__name__)


def _cell(row: Sequence[str], index: Optional[int]) -> Optional[str]:
    if index is None or index >= len(row):
        return None
    return row[index]


def convert_row(
    line: int,
    row: Sequence[str],
    column_types: Sequence[ColumnType],
    date_format: str,
    account: Any,
    number_locale: NumberLocale,
) -> TransactionLine:
    """Convert a single tokenized row.

    The date is checked before the amount, so a row with both problems
    reports a date error.
    """
    date_index = _role_index(column_types, ColumnType.DATE)
    amount_index = _role_index(column_types, ColumnType.AMOUNT)
    description_index = _role_index(column_types, ColumnType.DESCRIPTION)

    if date_index is None:
        return _error(line, RowErrorKind.DATE, None, "No date column selected")
    date_cell = _cell(row, date_index)
    if date_cell is None:
        return _error(line, RowErrorKind.DATE, None, "Missing date")
    try:
        txn_date = parse_date(date_cell, date_format)
    except DateParseError as e:
        return _error(line, RowErrorKind.DATE, date_cell, str(e))

    if amount_index is None:
        return _error(line, RowErrorKind.AMOUNT, None, "No amount column selected")
    amount_cell = _cell(row, amount_index)
    if amount_cell is None:
        return _error(line, RowErrorKind.AMOUNT, None, "Missing amount")
    try:
        amount = parse_amount(amount_cell, number_locale)
    except AmountParseError as e:
        return _error(line, RowErrorKind.AMOUNT, amount_cell, str(e))

    description = _cell(row, description_index) or ""
    return TransactionLine(
        line=line,
        transaction=Transaction(
            date=txn_date, description=description, amount=amount, account=account
        ),
    )


def convert(
    grid: Sequence[Sequence[str]],
    column_types: Sequence[ColumnType],
    date_format: str,
    account: Any = None,
    *,
    failed_lines: Iterable[int] = (),
    previous: Optional[Sequence[TransactionLine]] = None,
    reuse_existing: bool = False,
    number_locale: Optional[NumberLocale] = None,
) -> ConversionResult:
    """Convert a tokenized grid into transaction lines.

    Args:
        grid: Tokenized rows
        column_types: Role per column; must be valid
        date_format: Active date format identifier
        account: Destination account reference attached to each transaction
        failed_lines: Rows the tokenizer could not split; reported, never converted
        previous: Lines from the last run, used when ``reuse_existing`` is set
        reuse_existing: Keep previous successful lines and only retry the rest
        number_locale: Numeric conventions for amounts (defaults to the process locale)

    Returns:
        ConversionResult in file row order

    Raises:
        ValidationError: If column_types holds a role more than once, or
            date_format is not supported
    """
    ct.validate(column_types)
    get_date_format(date_format)
    conv = number_locale or NumberLocale.from_system()
    failed = set(failed_lines)

    kept: dict[int, TransactionLine] = {}
    if reuse_existing and previous:
        kept = {tl.line: tl for tl in previous if tl.ok}

    lines = []
    for index, row in enumerate(grid):
        if index in kept:
            lines.append(kept[index])
        elif index in failed:
            lines.append(
                _error(index, RowErrorKind.TOKENIZE, None, "Line does not fill the expected columns")
            )
        else:
            lines.append(convert_row(index, row, column_types, date_format, account, conv))

    error_lines = {tl.line for tl in lines if not tl.ok}
    logger.debug(
        "Converted %d rows: %d transactions, %d errors (%d reused)",
        len(lines),
        len(lines) - len(error_lines),
        len(error_lines),
        len(kept),
    )
    return ConversionResult(lines=lines, error_lines=error_lines)


def _role_index(column_types: Sequence[ColumnType], role: ColumnType) -> Optional[int]:
    for index, column_type in enumerate(column_types):
        if column_type is role:
            return index
    return None


def _error(line: int, kind: RowErrorKind, value: Optional[str], message: str) -> TransactionLine:
    return TransactionLine(line=line, error=RowError(line=line, kind=kind, value=value, message=message))
