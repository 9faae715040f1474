"""Main CLI entry point."""

import logging
from datetime import date, datetime, time

import click

from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.domain.clock import fixed_clock, system_clock
from ledgerkit.domain.recurring import RecurringScheduler
from ledgerkit.domain.store import EntityStore
from ledgerkit.utils.date_parser import parse_date

# Import and register all commands at module level
from ledgerkit.cli.commands import (
    account,
    category,
    init_categories,
    transaction,
    project,
    recurring,
    stats,
    import_cmd,
    export_cmd,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERKIT_DB_PATH environment variable)",
    envvar="LEDGERKIT_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="LEDGERKIT_LOG_LEVEL",
    help="Logging verbosity (LEDGERKIT_LOG_LEVEL)",
)
@click.option("--as-of", help="Run as if today were this date (YYYY-MM-DD)")
@click.option(
    "--no-process-recurring",
    is_flag=True,
    help="Do not materialize due recurring transactions on startup",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str, as_of: str | None, no_process_recurring: bool):
    """Ledgerkit - Personal finance ledger.

    Record accounts, categorized transactions, savings projects and recurring
    transactions, and derive balances, net worth and monthly statistics.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is None:
        return

    clock = system_clock
    if as_of is not None:
        try:
            as_of_date = parse_date(as_of, today=date.today())
        except ValueError as e:
            click.echo(f"Error: Invalid --as-of date: {e}", err=True)
            ctx.exit(1)
        clock = fixed_clock(datetime.combine(as_of_date, time()))

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()
    ctx.call_on_close(db.disconnect)

    store = EntityStore.from_state(db.load_state())
    ctx.obj["db"] = db
    ctx.obj["store"] = store
    ctx.obj["clock"] = clock

    # Materialize due recurring transactions on every start
    if not no_process_recurring:
        result = RecurringScheduler(store, clock=clock).process_recurring_transactions()
        if result.created or result.deactivated:
            db.save_state(store.snapshot())
            logger.info(
                "Startup recurring pass: %d created, %d paused",
                len(result.created),
                len(result.deactivated),
            )


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
init_categories.register_commands(cli)
transaction.register_commands(cli)
project.register_commands(cli)
recurring.register_commands(cli)
stats.register_commands(cli)
import_cmd.register_commands(cli)
export_cmd.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
