"""Plain-text rendering of parse sessions for the terminal."""

from typing import Iterable

import click

from csvimporter.domain.entities import RowErrorKind
from csvimporter.domain.session import ParseSession

MAX_CELL_WIDTH = 24

_KIND_LABELS = {
    RowErrorKind.TOKENIZE: "line too short",
    RowErrorKind.DATE: "date",
    RowErrorKind.AMOUNT: "amount",
}


def _clip(text: str) -> str:
    text = text.replace("\t", " ")
    if len(text) > MAX_CELL_WIDTH:
        return text[: MAX_CELL_WIDTH - 1] + "…"
    return text


def echo_grid(session: ParseSession, indices: Iterable[int]) -> None:
    """Print selected grid rows under a header of column roles.

    Rows the tokenizer could not split are marked with "!".
    """
    indices = list(indices)
    headers = [ct.value for ct in session.column_types]
    rows = [[_clip(cell) for cell in session.grid[i]] for i in indices]

    widths = [len(h) for h in headers]
    for row in rows:
        for col, cell in enumerate(row):
            if col >= len(widths):
                widths.append(0)
            widths[col] = max(widths[col], len(cell))

    number_width = max((len(str(i + 1)) for i in indices), default=1)
    header = " | ".join(h.ljust(w) for h, w in zip(headers, widths))
    click.echo(f"{'#'.rjust(number_width)}   {header}")
    click.echo("-" * (number_width + 3 + len(header)))
    for index, row in zip(indices, rows):
        marker = "!" if index in session.failed_lines else " "
        cells = " | ".join(cell.ljust(widths[col]) for col, cell in enumerate(row))
        click.echo(f"{str(index + 1).rjust(number_width)} {marker} {cells}")


def echo_errors(session: ParseSession) -> None:
    """Print one diagnostic line per error row."""
    for error in session.errors:
        label = _KIND_LABELS[error.kind]
        value = f" '{error.value}'" if error.value is not None else ""
        click.echo(f"  Row {error.line + 1} ({label}{value}): {error.message}", err=True)


def echo_transactions(session: ParseSession) -> None:
    """Print the converted transactions in file order."""
    for tl in session.transaction_lines:
        txn = tl.transaction
        if txn is None:
            continue
        account = f"  [{txn.account}]" if txn.account is not None else ""
        click.echo(
            f"{txn.date.isoformat()}  {_clip(txn.description).ljust(MAX_CELL_WIDTH)}  "
            f"{str(txn.amount).rjust(12)}{account}"
        )
