"""Split canonical lines into a grid of raw cells."""

import logging
from typing import Sequence

from csvimporter.domain.entities import ParseOptions, TokenizeResult
from csvimporter.domain.errors import TokenizeError

logger = logging.getLogger(__name__)


def split_delimited(line: str, separators: Sequence[str], quote_char: str = '"') -> list[str]:
    """Split one line on any of the given separator strings.

    Consecutive separators produce empty cells. A cell that starts with
    ``quote_char`` extends to the closing quote, so separators inside it
    are kept; a doubled quote inside a quoted cell is a literal quote.

    Args:
        line: Line of canonical text
        separators: Separator strings; blank entries are ignored
        quote_char: Quote character, or "" to disable quoting

    Returns:
        List of cell strings (at least one)
    """
    # Longest first so "::" wins over ":" when both are configured
    seps = sorted({sep for sep in separators if sep}, key=len, reverse=True)
    if not seps:
        return [line]

    cells: list[str] = []
    current: list[str] = []
    i = 0
    n = len(line)
    at_cell_start = True

    while i < n:
        if quote_char and at_cell_start and line.startswith(quote_char, i):
            i += len(quote_char)
            while i < n:
                if line.startswith(quote_char, i):
                    if line.startswith(quote_char, i + len(quote_char)):
                        current.append(quote_char)
                        i += 2 * len(quote_char)
                        continue
                    i += len(quote_char)
                    break
                current.append(line[i])
                i += 1
            at_cell_start = False
            continue

        for sep in seps:
            if line.startswith(sep, i):
                cells.append("".join(current))
                current = []
                i += len(sep)
                at_cell_start = True
                break
        else:
            current.append(line[i])
            i += 1
            at_cell_start = False

    cells.append("".join(current))
    return cells


def split_fixed_width(line: str, column_widths: Sequence[int]) -> tuple[list[str], bool]:
    """Split one line at fixed character offsets.

    A line shorter than the last offset gives truncated or empty
    trailing cells.

    Returns:
        Tuple of (cells, complete). ``complete`` is False when the line
        has no text past the first offset, so it cannot fill a second column.
    """
    cells = []
    start = 0
    for offset in column_widths:
        cells.append(line[start:offset].rstrip(" "))
        start = offset
    cells.append(line[start:].rstrip(" "))

    complete = not column_widths or len(line.rstrip()) > column_widths[0]
    return cells, complete


def check_column_widths(column_widths: Sequence[int]) -> None:
    previous = 0
    for offset in column_widths:
        if offset <= previous:
            raise TokenizeError(
                "Fixed-width offsets must be positive and strictly increasing, "
                f"got {list(column_widths)}"
            )
        previous = offset


def tokenize(lines: Sequence[str], options: ParseOptions) -> TokenizeResult:
    """Tokenize canonical lines according to the parse options.

    Delimiter mode never reports failed lines: any split yields some row.
    Fixed-width mode marks a non-blank line as failed when it has no text
    past the first column offset; shorter lines otherwise just get
    truncated trailing cells.

    Args:
        lines: Canonical lines held by the session
        options: Active parse options

    Returns:
        TokenizeResult with the grid and the failed line indices

    Raises:
        TokenizeError: If fixed-width offsets are invalid
    """
    grid: list[list[str]] = []
    failed: set[int] = set()

    if options.fixed_width:
        check_column_widths(options.column_widths)
        for index, line in enumerate(lines):
            if not line.strip():
                grid.append([""])
                continue
            cells, complete = split_fixed_width(line, options.column_widths)
            grid.append(cells)
            if not complete:
                failed.add(index)
    else:
        separators = options.active_separators()
        for line in lines:
            if not line:
                grid.append([""])
                continue
            grid.append(split_delimited(line, separators, options.quote_char))

    logger.debug(
        "Tokenized %d lines into %d columns (%d failed)",
        len(grid),
        column_count(grid),
        len(failed),
    )
    return TokenizeResult(grid=grid, failed_lines=failed)


def column_count(grid: Sequence[Sequence[str]]) -> int:
    """Return the number of columns of the widest row."""
    return max((len(row) for row in grid), default=0)
