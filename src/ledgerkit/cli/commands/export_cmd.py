"""Export commands."""

import click

from ledgerkit.cli.context import get_clock, get_store, now
from ledgerkit.cli.date_filters import resolve_cli_date_range
from ledgerkit.domain.exchange import export_file, export_transactions_csv


@click.command("export")
@click.argument("output_file", type=click.Path(dir_okay=False, writable=True))
@click.option("--format", "export_format", type=click.Choice(["json", "csv"]), default="json", show_default=True, help="Output format")
@click.option("--start-date", help="Only transactions on or after this date")
@click.option("--end-date", help="Only transactions on or before this date")
@click.pass_context
def export(ctx, output_file: str, export_format: str, start_date: str | None, end_date: str | None):
    """Export the ledger.

    JSON exports every collection and can be re-imported with the import
    command. CSV exports transactions only (Date, Type, Amount, Category, Notes).

    Examples:
        ledgerkit export backup.json
        ledgerkit export march.csv --format csv --start-date 2024-03-01 --end-date 2024-03-31
    """
    store = get_store(ctx)
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, today=now(ctx).date())

    if export_format == "csv":
        with open(output_file, "w", encoding="utf-8", newline="") as f:
            rows = export_transactions_csv(store, f, start_date=start, end_date=end)
        click.echo(f"Exported {rows} transactions to {output_file}")
        return

    snapshot = export_file(store, output_file, start_date=start, end_date=end, clock=get_clock(ctx))
    click.echo(
        f"Exported {len(snapshot['accounts'])} accounts, {len(snapshot['categories'])} categories, "
        f"{len(snapshot['transactions'])} transactions to {output_file}"
    )


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export)
