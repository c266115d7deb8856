"""Import format management commands."""

import click

from csvimporter.cli.error_handling import handle_domain_error
from csvimporter.cli.options import options_from_flags, parse_config_options
from csvimporter.domain import column_types as ct
from csvimporter.domain.entities import STOCK_SEPARATORS
from csvimporter.domain.errors import DomainError
from csvimporter.domain.import_format import ImportFormatService

_SEPARATOR_NAMES = {char: name for name, char in STOCK_SEPARATORS.items()}


def _describe_separators(separators: list[str], custom: str) -> str:
    names = [_SEPARATOR_NAMES.get(sep, repr(sep)) for sep in separators]
    if custom:
        names.append(f"custom {custom!r}")
    return ", ".join(names) if names else "(none)"


@click.group()
def format_group():
    """Manage saved import formats."""
    pass


@format_group.command("save")
@click.argument("name")
@parse_config_options
@click.pass_context
def save_format(
    ctx,
    name: str,
    encoding: str | None,
    separators: tuple[str, ...],
    custom_sep: str | None,
    fixed_width: str | None,
    date_format: str | None,
    columns: str | None,
):
    """Save an import configuration under NAME."""
    service = ImportFormatService(ctx.obj["db"])
    try:
        options = options_from_flags(encoding, separators, custom_sep, fixed_width, date_format)
        column_types = ct.parse_column_types(columns) if columns else []
        format_id = service.save_format(name, options, column_types)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Saved import format '{name}' (ID: {format_id})")


@format_group.command("list")
@click.pass_context
def list_formats(ctx):
    """List saved import formats."""
    service = ImportFormatService(ctx.obj["db"])

    formats = service.list_formats()
    if not formats:
        click.echo("No import formats found.")
        return

    click.echo("\nImport Formats:")
    click.echo("-" * 60)
    for fmt in formats:
        mode = "fixed-width" if fmt.fixed_width else "delimited"
        click.echo(f"{fmt.name} (ID: {fmt.id}, {mode}, dates {fmt.date_format})")


@format_group.command("show")
@click.argument("format_name")
@click.pass_context
def show_format(ctx, format_name: str):
    """Show details of an import format."""
    service = ImportFormatService(ctx.obj["db"])

    fmt = service.get_format_by_name(format_name)
    if fmt is None:
        click.echo(f"Error: Import format '{format_name}' not found", err=True)
        ctx.exit(1)

    click.echo(f"\nFormat: {fmt.name}")
    click.echo(f"ID: {fmt.id}")
    click.echo(f"Encoding: {fmt.encoding}")
    if fmt.fixed_width:
        click.echo(f"Fixed-width offsets: {', '.join(str(w) for w in fmt.column_widths)}")
    else:
        click.echo(f"Separators: {_describe_separators(fmt.separators, fmt.custom_separator)}")
    click.echo(f"Date format: {fmt.date_format}")
    click.echo(f"Column types: {ct.format_column_types(fmt.column_types) or '(none)'}")


@format_group.command("update")
@click.argument("format_name")
@click.option("--name", help="New format name")
@click.option("--date-format", default=None, help="New date format")
@click.option("--columns", default=None, help="New column roles, e.g. date,none,amount")
@click.pass_context
def update_format(
    ctx,
    format_name: str,
    name: str | None,
    date_format: str | None,
    columns: str | None,
) -> None:
    """Update an import format.

    Updates only the fields that are provided.

    Examples:
        csvimporter format update "Bank CSV" --name "Bank CSV (old)"
        csvimporter format update "Bank CSV" --date-format d-m-y
    """
    service = ImportFormatService(ctx.obj["db"])

    fmt = service.get_format_by_name(format_name)
    if fmt is None:
        click.echo(f"Error: Import format '{format_name}' not found", err=True)
        ctx.exit(1)

    try:
        service.update_format(
            fmt.id,
            name=name,
            date_format=date_format,
            column_types=ct.parse_column_types(columns) if columns else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated format '{format_name}'")
    if name is not None:
        click.echo(f"  New name: '{name}'")
    if date_format is not None:
        click.echo(f"  Date format: {date_format}")
    if columns is not None:
        click.echo(f"  Column types: {columns}")


@format_group.command("delete")
@click.argument("format_name")
@click.option("--yes", is_flag=True, default=False, help="Do not ask for confirmation")
@click.pass_context
def delete_format(ctx, format_name: str, yes: bool) -> None:
    """Delete an import format.

    Examples:
        csvimporter format delete "Bank CSV"
    """
    service = ImportFormatService(ctx.obj["db"])

    fmt = service.get_format_by_name(format_name)
    if fmt is None:
        click.echo(f"Error: Import format '{format_name}' not found", err=True)
        ctx.exit(1)

    # Confirm deletion
    if not yes and not click.confirm(
        f"Are you sure you want to delete format '{format_name}' (ID: {fmt.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_format(fmt.id)
        click.echo(f"Deleted format '{format_name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register format commands with main CLI."""
    cli.add_command(format_group, name="format")
