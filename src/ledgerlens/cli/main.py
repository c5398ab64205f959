"""Main CLI entry point."""

import logging

import click
from ledgerlens.database.factories import DB_PATH_ENV_VAR, create_sqlite_database

# Import and register all commands at module level
from ledgerlens.cli.commands import (
    account,
    add,
    balance,
    bill,
    category,
    feed,
    loan,
    report,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Ledgerlens - Personal finance ledger.

    Track accounts, cards, cash and digital wallets and loans, see running
    balances per account or for your primary account with its wallets, and
    reconcile them against real-world balances.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
add.register_commands(cli)
loan.register_commands(cli)
balance.register_commands(cli)
feed.register_commands(cli)
report.register_commands(cli)
category.register_commands(cli)
bill.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
