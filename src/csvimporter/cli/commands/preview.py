"""Preview command."""

import click

from csvimporter.cli.error_handling import handle_domain_error
from csvimporter.cli.options import build_session, number_locale_from_flag, parse_config_options
from csvimporter.cli.rendering import echo_errors, echo_grid
from csvimporter.domain import column_types as ct
from csvimporter.domain.errors import DomainError


@click.command("preview")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@parse_config_options
@click.option(
    "--decimal-comma",
    is_flag=True,
    default=False,
    help="Amounts use ',' as decimal point and '.' for thousands",
)
@click.option("--format", "format_name", default=None, help="Saved import format to start from")
@click.option("--guess-columns", is_flag=True, default=False, help="Guess column roles from the data")
@click.option(
    "--errors-only",
    is_flag=True,
    default=False,
    help="Convert and show only the rows that fail",
)
@click.option(
    "--rows",
    type=click.IntRange(min=1),
    default=20,
    show_default=True,
    help="Maximum number of rows to show",
)
@click.pass_context
def preview_file(
    ctx,
    csv_file: str,
    encoding: str | None,
    separators: tuple[str, ...],
    custom_sep: str | None,
    fixed_width: str | None,
    date_format: str | None,
    columns: str | None,
    decimal_comma: bool,
    format_name: str | None,
    guess_columns: bool,
    errors_only: bool,
    rows: int,
):
    """Show how a file splits into columns with the given configuration."""
    number_locale = number_locale_from_flag(decimal_comma)
    try:
        session = build_session(
            ctx,
            csv_file,
            encoding,
            separators,
            custom_sep,
            fixed_width,
            date_format,
            columns,
            format_name=format_name,
            guess_columns=guess_columns,
            number_locale=number_locale,
        )
        if errors_only:
            session.convert(number_locale=number_locale)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Encoding: {session.options.encoding}  Lines: {len(session.grid)}  "
        f"Columns: {session.column_count}  Date format: {session.options.date_format}"
    )
    click.echo(f"Column types: {ct.format_column_types(session.column_types)}")

    if errors_only:
        indices = sorted(session.error_lines)
        if not indices:
            click.echo("No rows with errors.")
            return
    else:
        indices = list(range(len(session.grid)))

    echo_grid(session, indices[:rows])
    if len(indices) > rows:
        click.echo(f"... {len(indices) - rows} more rows")
    if session.failed_lines:
        click.echo(f"{len(session.failed_lines)} lines do not fill the expected columns (!)")
    if errors_only:
        echo_errors(session)


def register_commands(cli):
    """Register preview command with main CLI."""
    cli.add_command(preview_file)
