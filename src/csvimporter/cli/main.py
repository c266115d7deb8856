"""Main CLI entry point."""

import click
from csvimporter.database.factories import create_sqlite_database
from csvimporter.logging_setup import configure_logging

# Import and register all commands at module level
from csvimporter.cli.commands import (
    format,
    import_cmd,
    preview,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CSVIMPORTER_DB_PATH environment variable)",
    envvar="CSVIMPORTER_DB_PATH",
)
@click.option(
    "--log-level",
    default=None,
    help="Logging level, e.g. DEBUG or INFO (overrides CSVIMPORTER_LOG_LEVEL)",
    envvar="CSVIMPORTER_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """csvimporter - Import transactions from CSV and fixed-width files.

    Preview how a file splits into columns, assign date, description and
    amount columns, and convert the rows into transactions. Rows that fail
    are reported so the configuration can be corrected and retried.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
preview.register_commands(cli)
import_cmd.register_commands(cli)
format.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
