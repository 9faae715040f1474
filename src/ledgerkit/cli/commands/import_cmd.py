"""Snapshot import command."""

import click

from ledgerkit.cli.context import get_store, save
from ledgerkit.domain.exchange import ImportService


@click.command("import")
@click.argument("json_file", type=click.Path(exists=True))
@click.option("--dedupe", is_flag=True, help="Skip entities matching an existing one by name (transactions by date, amount and notes)")
@click.pass_context
def import_json(ctx, json_file: str, dedupe: bool):
    """Import accounts, categories, transactions, projects and templates from a JSON export."""
    service = ImportService(get_store(ctx))

    try:
        result = service.import_file(json_file, dedupe=dedupe)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if result["imported"]:
        save(ctx)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result['imported']} entities")
    click.echo(f"  Skipped: {result['skipped']} duplicates")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_json)
