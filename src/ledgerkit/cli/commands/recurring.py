"""Recurring transaction template commands."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit, resolve_category_or_exit
from ledgerkit.cli.context import get_clock, get_store, now, save
from ledgerkit.cli.date_filters import parse_datetime_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.entities import Frequency, RecurringTemplate, TransactionType
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.recurring import RecurringScheduler, next_due_date
from ledgerkit.domain.store import new_id
from ledgerkit.utils.amount_parser import parse_amount

TEMPLATE_TYPES = [TransactionType.INCOME.value, TransactionType.EXPENSE.value]
FREQUENCIES = [f.value for f in Frequency]


def _get_template_or_exit(ctx, store, template_id: str) -> RecurringTemplate:
    template = store.get_recurring_template(template_id)
    if template is None:
        click.echo(f"Error: Recurring template '{template_id}' not found", err=True)
        ctx.exit(1)
    return template


@click.group()
def recurring_group():
    """Manage recurring transactions."""
    pass


@recurring_group.command("create")
@click.argument("name", metavar="TEMPLATE_NAME")
@click.option("--type", "transaction_type", type=click.Choice(TEMPLATE_TYPES), required=True, help="Transaction type")
@click.option("--amount", required=True, help="Amount of each occurrence")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--frequency", type=click.Choice(FREQUENCIES), required=True, help="How often it recurs")
@click.option("--from", "from_account", help="Account the money leaves (expense)")
@click.option("--to", "to_account", help="Account the money enters (income)")
@click.option("--start-date", help="First period start (defaults to today)")
@click.option("--end-date", help="Pause the template once this date has passed")
@click.option("--id", "template_id", help="Template ID (auto-generated if not provided)")
@click.pass_context
def create_template(
    ctx,
    name: str,
    transaction_type: str,
    amount: str,
    category: str,
    frequency: str,
    from_account: str | None,
    to_account: str | None,
    start_date: str | None,
    end_date: str | None,
    template_id: str | None,
):
    """Create a recurring transaction template.

    The first occurrence is due one period after the start date.

    Examples:
        ledgerkit recurring create "Rent" --type expense --amount 25000 --category Rent --frequency monthly --from "KCB Current"
        ledgerkit recurring create "Salary" --type income --amount 80000 --category Salary --frequency monthly --to "KCB Current"
    """
    store = get_store(ctx)
    current = now(ctx)

    try:
        template_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    category_obj = resolve_category_or_exit(ctx, store, category)
    template = RecurringTemplate(
        id=template_id or new_id(),
        name=name,
        amount=template_amount,
        transaction_type=TransactionType(transaction_type),
        category_id=category_obj.id,
        frequency=Frequency(frequency),
        start_date=parse_datetime_or_exit(ctx, start_date, current.date(), "start date") if start_date else current,
        is_active=True,
        created_at=current,
        from_account_id=resolve_account_or_exit(ctx, store, from_account).id if from_account else None,
        to_account_id=resolve_account_or_exit(ctx, store, to_account).id if to_account else None,
        end_date=parse_datetime_or_exit(ctx, end_date, current.date(), "end date") if end_date else None,
    )

    try:
        store.add_recurring_template(template)
    except DomainError as e:
        handle_domain_error(ctx, e)

    save(ctx)
    click.echo(f"Created recurring template '{name}' (ID: {template.id})")


@recurring_group.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include paused templates")
@click.pass_context
def list_templates(ctx, show_all: bool):
    """List recurring templates with their next due date."""
    store = get_store(ctx)
    templates = store.list_recurring_templates()
    if not show_all:
        templates = [t for t in templates if t.is_active]

    if not templates:
        click.echo("No recurring templates found.")
        return

    click.echo("\nRecurring templates:")
    click.echo("-" * 100)
    for template in templates:
        status = "active" if template.is_active else "paused"
        click.echo(
            f"ID: {template.id:<12} | {template.name:20s} | {template.transaction_type.value:7s} | "
            f"{template.amount:>12,.2f} | {template.frequency.value:7s} | "
            f"next {next_due_date(template).strftime('%Y-%m-%d')} | {status}"
        )


@recurring_group.command("pause")
@click.argument("template_id")
@click.pass_context
def pause_template(ctx, template_id: str):
    """Pause a template so it stops generating transactions."""
    store = get_store(ctx)
    template = _get_template_or_exit(ctx, store, template_id)
    store.update_recurring_template(template.id, is_active=False)
    save(ctx)
    click.echo(f"Paused recurring template '{template.name}'")


@recurring_group.command("resume")
@click.argument("template_id")
@click.pass_context
def resume_template(ctx, template_id: str):
    """Resume a paused template."""
    store = get_store(ctx)
    template = _get_template_or_exit(ctx, store, template_id)
    store.update_recurring_template(template.id, is_active=True)
    save(ctx)
    click.echo(f"Resumed recurring template '{template.name}'")


@recurring_group.command("delete")
@click.argument("template_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_template(ctx, template_id: str, yes: bool):
    """Delete a template. Transactions it already created are kept."""
    store = get_store(ctx)
    template = _get_template_or_exit(ctx, store, template_id)

    if not yes and not click.confirm(f"Are you sure you want to delete recurring template '{template.name}'?"):
        click.echo("Deletion cancelled.")
        return

    store.delete_recurring_template(template.id)
    save(ctx)
    click.echo(f"Deleted recurring template '{template.name}'")


@recurring_group.command("process")
@click.pass_context
def process_templates(ctx):
    """Materialize due recurring transactions now.

    Run with --no-process-recurring on the main command to see what this
    pass creates; otherwise the startup pass has already handled them.
    """
    store = get_store(ctx)
    result = RecurringScheduler(store, clock=get_clock(ctx)).process_recurring_transactions()

    if result.created or result.deactivated:
        save(ctx)

    click.echo(f"Created: {len(result.created)} transactions")
    for txn in result.created:
        click.echo(f"  {txn.date.strftime('%Y-%m-%d')} {txn.notes} {txn.amount:,.2f}")
    click.echo(f"Paused: {len(result.deactivated)} templates")


def register_commands(cli):
    """Register recurring commands with main CLI."""
    cli.add_command(recurring_group, name="recurring")
