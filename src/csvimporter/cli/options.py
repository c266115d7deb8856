"""Shared click options for commands that configure a parse."""

import click

from csvimporter.domain import column_types as ct
from csvimporter.domain.entities import STOCK_SEPARATORS, NumberLocale, ParseOptions
from csvimporter.domain.errors import ValidationError
from csvimporter.domain.import_format import ImportFormatService
from csvimporter.domain.session import ParseSession
from csvimporter.utils.date_parser import date_format_ids


def parse_config_options(func):
    """Add the separator, encoding, date format and column options to a command."""
    options = [
        click.option("--encoding", default=None, help="File encoding (guessed if omitted)"),
        click.option(
            "--sep",
            "separators",
            multiple=True,
            type=click.Choice(list(STOCK_SEPARATORS)),
            help="Separator to split on (repeatable)",
        ),
        click.option("--custom-sep", default=None, help="Additional separator string"),
        click.option(
            "--fixed-width",
            default=None,
            help="Comma-separated column offsets for fixed-width files, e.g. 10,30,42",
        ),
        click.option(
            "--date-format",
            type=click.Choice(date_format_ids()),
            default=None,
            help="Field order of date cells",
        ),
        click.option(
            "--columns",
            default=None,
            help="Column roles, e.g. date,description,amount (none skips a column)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def parse_offsets(text: str) -> list[int]:
    """Parse "10,30,42" into a list of offsets."""
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError:
        raise ValidationError(f"Invalid fixed-width offsets '{text}'")


def number_locale_from_flag(decimal_comma: bool) -> NumberLocale:
    if decimal_comma:
        return NumberLocale(decimal_point=",", thousands_sep=".")
    return NumberLocale.from_system()


def apply_overrides(
    session: ParseSession,
    separators: tuple[str, ...],
    custom_sep: str | None,
    fixed_width: str | None,
    date_format: str | None,
) -> None:
    """Apply command-line configuration on top of the session's options."""
    if separators:
        session.set_option("separators", [STOCK_SEPARATORS[name] for name in separators])
    if custom_sep is not None:
        session.set_option("custom_separator", custom_sep)
    if fixed_width is not None:
        session.set_option("column_widths", parse_offsets(fixed_width))
        session.set_option("fixed_width", True)
    if date_format is not None:
        session.set_option("date_format", date_format)


def build_session(
    ctx: click.Context,
    csv_file: str,
    encoding: str | None,
    separators: tuple[str, ...],
    custom_sep: str | None,
    fixed_width: str | None,
    date_format: str | None,
    columns: str | None,
    format_name: str | None = None,
    guess_columns: bool = False,
    number_locale: NumberLocale | None = None,
) -> ParseSession:
    """Load a file and configure a session from command-line options.

    Raises:
        DomainError: On unreadable files, bad encodings or invalid configuration
    """
    fmt = None
    if format_name:
        fmt = ImportFormatService(ctx.obj["db"]).require_format(format_name)

    session = ParseSession.load(csv_file, encoding=encoding or (fmt.encoding if fmt else None))
    if session.load_error is not None:
        raise session.load_error

    if fmt is not None:
        session.apply_format(fmt)
        if encoding and encoding != session.options.encoding:
            session.set_encoding(encoding)

    apply_overrides(session, separators, custom_sep, fixed_width, date_format)
    if session.needs_reparse:
        session.reparse()

    if columns:
        session.set_column_types(ct.parse_column_types(columns))
    elif guess_columns:
        session.guess_column_types(number_locale)
    return session


def options_from_flags(
    encoding: str | None,
    separators: tuple[str, ...],
    custom_sep: str | None,
    fixed_width: str | None,
    date_format: str | None,
) -> ParseOptions:
    """Build ParseOptions without a file, for saving import formats."""
    options = ParseOptions()
    if encoding:
        options.encoding = encoding
    if separators:
        options.separators = [STOCK_SEPARATORS[name] for name in separators]
    if custom_sep is not None:
        options.custom_separator = custom_sep
    if fixed_width is not None:
        options.column_widths = parse_offsets(fixed_width)
        options.fixed_width = True
    if date_format is not None:
        options.date_format = date_format
    return options
