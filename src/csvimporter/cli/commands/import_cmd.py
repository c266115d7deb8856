"""Import command."""

import click

from csvimporter.cli.error_handling import handle_domain_error
from csvimporter.cli.options import build_session, number_locale_from_flag, parse_config_options
from csvimporter.cli.rendering import echo_errors, echo_grid, echo_transactions
from csvimporter.domain import column_types as ct
from csvimporter.domain.errors import DomainError
from csvimporter.domain.session import ParseSession


def _retry_errors(session: ParseSession) -> None:
    """Let the user change the date format or column roles and retry failing rows.

    Stops when no errors remain or the user enters nothing.
    """
    while session.error_lines:
        click.echo(f"\n{len(session.error_lines)} rows had errors:")
        echo_grid(session, sorted(session.error_lines))
        echo_errors(session)

        date_format = click.prompt(
            "Date format to retry with (blank to stop)", default="", show_default=False
        ).strip()
        columns = click.prompt(
            "Column types to retry with (blank to keep)", default="", show_default=False
        ).strip()
        if not date_format and not columns:
            return

        try:
            if date_format:
                session.set_option("date_format", date_format)
            if columns:
                session.set_column_types(ct.parse_column_types(columns))
        except DomainError as e:
            click.echo(f"Error: {e}", err=True)
            continue
        session.convert(retry_errors_only=True)


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@parse_config_options
@click.option(
    "--decimal-comma",
    is_flag=True,
    default=False,
    help="Amounts use ',' as decimal point and '.' for thousands",
)
@click.option("--account", required=True, help="Destination account for the transactions")
@click.option("--format", "format_name", default=None, help="Saved import format to use")
@click.option("--guess-columns", is_flag=True, default=False, help="Guess column roles from the data")
@click.option(
    "--retry/--no-retry",
    default=False,
    help="Prompt for a new configuration while rows have errors",
)
@click.option("--strict", is_flag=True, default=False, help="Exit with status 1 if any row fails")
@click.pass_context
def import_csv(
    ctx,
    csv_file: str,
    encoding: str | None,
    separators: tuple[str, ...],
    custom_sep: str | None,
    fixed_width: str | None,
    date_format: str | None,
    columns: str | None,
    decimal_comma: bool,
    account: str,
    format_name: str | None,
    guess_columns: bool,
    retry: bool,
    strict: bool,
):
    """Convert a file into transactions for an account."""
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
        session.convert(account=account, number_locale=number_locale)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if retry:
        _retry_errors(session)

    transactions = session.transactions
    if transactions:
        click.echo("")
        echo_transactions(session)

    click.echo("\nImport complete:")
    click.echo(f"  Converted: {len(transactions)} transactions")
    if session.error_lines:
        click.echo(f"  Errors: {len(session.error_lines)}")
        if not retry:
            echo_errors(session)
        if strict:
            ctx.exit(1)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
