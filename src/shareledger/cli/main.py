"""Main CLI entry point."""

import click
from shareledger.database.factories import create_database, create_sqlite_database
from shareledger.logging_config import configure_logging

# Import and register all commands at module level
from shareledger.cli.commands import (
    owner,
    company,
    transaction,
    profit,
    distribute,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides SHARELEDGER_DB_PATH environment variable)",
    envvar="SHARELEDGER_DB_PATH",
)
@click.option(
    "--owner",
    "owner_id",
    type=int,
    help="ID of the owner making the request",
    envvar="SHARELEDGER_OWNER_ID",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    envvar="SHARELEDGER_LOG_LEVEL",
    help="Logging level for messages written to stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, owner_id: int | None, log_level: str):
    """Shareledger - profit distribution and pay-later ledger.

    Record transactions, settle deferred payments and distribute monthly
    profit across shareholders.
    """
    ctx.ensure_object(dict)
    configure_logging(level=log_level)
    ctx.obj["owner_id"] = owner_id

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        if db_path is not None:
            db = create_sqlite_database(database_path=db_path)
        else:
            db = create_database()
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
owner.register_commands(cli)
company.register_commands(cli)
transaction.register_commands(cli)
profit.register_commands(cli)
distribute.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
