"""Initialize default categories."""

import click

from ledgerkit.cli.context import get_store, save
from ledgerkit.domain.store import DEFAULT_CATEGORIES, seed_default_categories


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Add the default categories that are not present yet."""
    store = get_store(ctx)

    created = seed_default_categories(store)
    if created == 0:
        click.echo("Default categories already exist.")
        return

    save(ctx)
    skipped = len(DEFAULT_CATEGORIES) - created
    click.echo(f"Successfully created {created} categories.")
    if skipped:
        click.echo(f"Skipped {skipped} existing categories.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
