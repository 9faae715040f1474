"""Transaction management commands."""

import click

from ledgerkit.cli.account_resolution import (
    resolve_account_or_exit,
    resolve_category_or_exit,
    resolve_project_or_exit,
)
from ledgerkit.cli.context import get_store, now, save
from ledgerkit.cli.date_filters import parse_datetime_or_exit, resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.entities import Transaction, TransactionType
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.statistics import StatisticsService
from ledgerkit.domain.store import new_id
from ledgerkit.utils.amount_parser import parse_amount

TRANSACTION_TYPES = [t.value for t in TransactionType]


def _parse_amount_or_exit(ctx, amount: str):
    try:
        return parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--type", "transaction_type", type=click.Choice(TRANSACTION_TYPES), required=True, help="Transaction type")
@click.option("--amount", required=True, help="Transaction amount (e.g., 1500 or 'KES 1,500')")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--from", "from_account", help="Account the money leaves (expense, transfer)")
@click.option("--to", "to_account", help="Account the money enters (income, transfer)")
@click.option("--date", "txn_date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--notes", help="Notes")
@click.option("--tag", "tags", multiple=True, help="Tag (can be repeated)")
@click.option("--project", help="Project name or ID to link")
@click.option("--id", "transaction_id", help="Transaction ID (auto-generated if not provided)")
@click.pass_context
def add_transaction(
    ctx,
    transaction_type: str,
    amount: str,
    category: str,
    from_account: str | None,
    to_account: str | None,
    txn_date: str | None,
    notes: str | None,
    tags: tuple[str, ...],
    project: str | None,
    transaction_id: str | None,
) -> None:
    """Record a transaction.

    Income needs --to, expenses need --from and transfers need both.

    Examples:
        ledgerkit transaction add --type expense --amount 450 --category Food --from "M-Pesa"
        ledgerkit transaction add --type income --amount 80000 --category Salary --to "KCB Current"
        ledgerkit transaction add --type transfer --amount 5000 --category Transfer --from "KCB Current" --to "M-Pesa"
    """
    store = get_store(ctx)
    txn_type = TransactionType(transaction_type)
    current = now(ctx)

    if txn_type in (TransactionType.EXPENSE, TransactionType.TRANSFER) and not from_account:
        click.echo(f"Error: --from is required for {txn_type.value} transactions.", err=True)
        ctx.exit(1)
    if txn_type in (TransactionType.INCOME, TransactionType.TRANSFER) and not to_account:
        click.echo(f"Error: --to is required for {txn_type.value} transactions.", err=True)
        ctx.exit(1)

    txn_amount = _parse_amount_or_exit(ctx, amount)
    category_obj = resolve_category_or_exit(ctx, store, category)
    from_id = resolve_account_or_exit(ctx, store, from_account).id if from_account else None
    to_id = resolve_account_or_exit(ctx, store, to_account).id if to_account else None
    project_id = resolve_project_or_exit(ctx, store, project).id if project else None
    when = parse_datetime_or_exit(ctx, txn_date, current.date()) if txn_date else current

    txn = Transaction(
        id=transaction_id or new_id(),
        date=when,
        amount=txn_amount,
        transaction_type=txn_type,
        category_id=category_obj.id,
        created_at=current,
        from_account_id=from_id,
        to_account_id=to_id,
        project_id=project_id,
        notes=notes,
        tags=frozenset(tags),
    )

    try:
        store.add_transaction(txn)
    except DomainError as e:
        handle_domain_error(ctx, e)

    save(ctx)
    click.echo(f"Recorded {txn_type.value} of {txn_amount:,.2f} (ID: {txn.id})")


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@click.option("--type", "transaction_type", type=click.Choice(TRANSACTION_TYPES), help="Only this type")
@click.option("--category", help="Category name or ID")
@click.option("--account", help="Account name or ID (either side)")
@click.option("--tag", help="Only transactions carrying this tag")
@click.option("--verbose", "-v", is_flag=True, help="Show notes, tags and project")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    transaction_type: str | None,
    category: str | None,
    account: str | None,
    tag: str | None,
    verbose: bool,
):
    """View transactions with optional filters, newest first."""
    store = get_store(ctx)
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, today=now(ctx).date())

    category_id = resolve_category_or_exit(ctx, store, category).id if category else None
    account_id = resolve_account_or_exit(ctx, store, account).id if account else None

    transactions = StatisticsService(store).filter_by_dates(start, end)
    if transaction_type is not None:
        transactions = [t for t in transactions if t.transaction_type.value == transaction_type]
    if category_id is not None:
        transactions = [t for t in transactions if t.category_id == category_id]
    if account_id is not None:
        transactions = [t for t in transactions if account_id in (t.from_account_id, t.to_account_id)]
    if tag is not None:
        transactions = [t for t in transactions if tag in t.tags]

    if not transactions:
        click.echo("No transactions found.")
        return

    transactions = sorted(transactions, key=lambda t: t.date, reverse=True)

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    for txn in transactions:
        if txn.transaction_type == TransactionType.TRANSFER:
            accounts = (
                f"{store.resolve_account_name(txn.from_account_id)} -> "
                f"{store.resolve_account_name(txn.to_account_id)}"
            )
        elif txn.transaction_type == TransactionType.INCOME:
            accounts = store.resolve_account_name(txn.to_account_id)
        else:
            accounts = store.resolve_account_name(txn.from_account_id)

        click.echo(
            f"{txn.date.strftime('%Y-%m-%d')} | {txn.transaction_type.value:8s} | "
            f"{txn.amount:>14,.2f} | {store.resolve_category_name(txn.category_id):20s} | "
            f"{accounts:30s} | {txn.id}"
        )
        if verbose:
            if txn.notes:
                click.echo(f"    Notes: {txn.notes}")
            if txn.tags:
                click.echo(f"    Tags: {', '.join(sorted(txn.tags))}")
            if txn.project_id:
                project = store.get_project(txn.project_id)
                click.echo(f"    Project: {project.name if project else 'Unknown'}")


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--type", "transaction_type", type=click.Choice(TRANSACTION_TYPES), help="New type")
@click.option("--amount", help="New amount")
@click.option("--category", help="Category name or ID")
@click.option("--from", "from_account", help="Source account name or ID, or empty string to clear")
@click.option("--to", "to_account", help="Destination account name or ID, or empty string to clear")
@click.option("--date", "txn_date", help="Transaction date")
@click.option("--notes", help="Notes")
@click.option("--tag", "tags", multiple=True, help="Replace tags (can be repeated)")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    transaction_type: str | None,
    amount: str | None,
    category: str | None,
    from_account: str | None,
    to_account: str | None,
    txn_date: str | None,
    notes: str | None,
    tags: tuple[str, ...],
) -> None:
    """Update a transaction.

    Updates only the fields that are provided.

    Examples:
        ledgerkit transaction update 3f2a... --amount 500
        ledgerkit transaction update 3f2a... --from ""  # Clear source account
    """
    store = get_store(ctx)
    if store.get_transaction(transaction_id) is None:
        click.echo(f"Error: Transaction '{transaction_id}' not found", err=True)
        ctx.exit(1)

    fields: dict = {}
    if transaction_type is not None:
        fields["transaction_type"] = TransactionType(transaction_type)
    if amount is not None:
        fields["amount"] = _parse_amount_or_exit(ctx, amount)
    if category is not None:
        fields["category_id"] = resolve_category_or_exit(ctx, store, category).id
    if from_account is not None:
        fields["from_account_id"] = resolve_account_or_exit(ctx, store, from_account).id if from_account else None
    if to_account is not None:
        fields["to_account_id"] = resolve_account_or_exit(ctx, store, to_account).id if to_account else None
    if txn_date is not None:
        fields["date"] = parse_datetime_or_exit(ctx, txn_date, now(ctx).date())
    if notes is not None:
        fields["notes"] = notes
    if tags:
        fields["tags"] = tags

    if not fields:
        click.echo("Error: No fields to update.", err=True)
        ctx.exit(1)

    try:
        store.update_transaction(transaction_id, **fields)
    except DomainError as e:
        handle_domain_error(ctx, e)

    save(ctx)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction."""
    store = get_store(ctx)
    txn = store.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction '{transaction_id}' not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    store.delete_transaction(transaction_id)
    save(ctx)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
