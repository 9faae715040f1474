"""Category management commands."""

import click

from ledgerkit.cli.account_resolution import resolve_category_or_exit
from ledgerkit.cli.context import get_store, save
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.entities import Category, CategoryGroup, CategoryType
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.store import new_id

CATEGORY_TYPES = [t.value for t in CategoryType]
CATEGORY_GROUPS = [g.value for g in CategoryGroup]


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("create")
@click.argument("name", metavar="CATEGORY_NAME")
@click.option("--type", "category_type", type=click.Choice(CATEGORY_TYPES), required=True, help="Category type")
@click.option("--group", type=click.Choice(CATEGORY_GROUPS), default="need", show_default=True, help="Budgeting group")
@click.option("--color", default="#6b7280", show_default=True, help="Display color")
@click.option("--id", "category_id", help="Category ID (auto-generated if not provided)")
@click.pass_context
def create_category(ctx, name: str, category_type: str, group: str, color: str, category_id: str | None):
    """Create a new category.

    Examples:
        ledgerkit category create "Groceries" --type expense --group need
        ledgerkit category create "Emergency Fund" --type savings --group wealth
    """
    store = get_store(ctx)
    category = Category(
        id=category_id or new_id(),
        name=name,
        category_type=CategoryType(category_type),
        group=CategoryGroup(group),
        color=color,
    )

    try:
        store.add_category(category)
    except DomainError as e:
        handle_domain_error(ctx, e)

    save(ctx)
    click.echo(f"Created category '{name}' (ID: {category.id})")


@category_group.command("list")
@click.option("--type", "category_type", type=click.Choice(CATEGORY_TYPES), help="Only list this type")
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List categories."""
    store = get_store(ctx)
    categories = store.list_categories()
    if category_type is not None:
        categories = [c for c in categories if c.category_type.value == category_type]

    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    click.echo("-" * 70)
    for cat in categories:
        click.echo(
            f"ID: {cat.id:<12} | {cat.name:25s} | {cat.category_type.value:8s} | "
            f"{cat.group.value:10s} | {cat.color}"
        )


@category_group.command("update")
@click.argument("category", metavar="CATEGORY")
@click.option("--name", help="New category name")
@click.option("--type", "category_type", type=click.Choice(CATEGORY_TYPES), help="New category type")
@click.option("--group", type=click.Choice(CATEGORY_GROUPS), help="New budgeting group")
@click.option("--color", help="New display color")
@click.pass_context
def update_category(
    ctx,
    category: str,
    name: str | None,
    category_type: str | None,
    group: str | None,
    color: str | None,
):
    """Update category fields.

    CATEGORY can be a category name or ID.
    """
    store = get_store(ctx)
    category_obj = resolve_category_or_exit(ctx, store, category)

    fields: dict = {}
    if name is not None:
        fields["name"] = name
    if category_type is not None:
        fields["category_type"] = CategoryType(category_type)
    if group is not None:
        fields["group"] = CategoryGroup(group)
    if color is not None:
        fields["color"] = color

    if not fields:
        click.echo("Error: No fields to update.", err=True)
        ctx.exit(1)

    store.update_category(category_obj.id, **fields)
    save(ctx)
    click.echo(f"Updated category '{category_obj.id}'")


@category_group.command("delete")
@click.argument("category", metavar="CATEGORY")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_category(ctx, category: str, yes: bool):
    """Delete a category.

    CATEGORY can be a category name or ID. Transactions in the category are
    kept and shown under "Unknown".
    """
    store = get_store(ctx)
    category_obj = resolve_category_or_exit(ctx, store, category)

    if not yes and not click.confirm(f"Are you sure you want to delete category '{category_obj.name}'?"):
        click.echo("Deletion cancelled.")
        return

    store.delete_category(category_obj.id)
    save(ctx)
    click.echo(f"Deleted category '{category_obj.name}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
