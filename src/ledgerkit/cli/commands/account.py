"""Account management commands."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.context import get_store, now, save
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.balance import BalanceCalculator
from ledgerkit.domain.entities import Account, AccountType, Currency
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.store import new_id
from ledgerkit.utils.amount_parser import parse_amount

ACCOUNT_TYPES = [t.value for t in AccountType]
CURRENCIES = [c.value for c in Currency]


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", type=click.Choice(ACCOUNT_TYPES), default="cash", show_default=True, help="Account type")
@click.option("--currency", type=click.Choice(CURRENCIES), default="KES", show_default=True, help="Account currency")
@click.option("--opening-balance", default="0", show_default=True, help="Balance before any recorded transaction")
@click.option("--id", "account_id", help="Account ID (auto-generated if not provided)")
@click.pass_context
def create_account(ctx, name: str, account_type: str, currency: str, opening_balance: str, account_id: str | None):
    """Create a new account.

    Examples:
        ledgerkit account create "M-Pesa" --type mpesa
        ledgerkit account create "KCB Current" --type kcb_bank --opening-balance 25000
    """
    store = get_store(ctx)

    try:
        balance = parse_amount(opening_balance)
    except ValueError as e:
        click.echo(f"Error: Invalid opening balance: {e}", err=True)
        ctx.exit(1)

    account = Account(
        id=account_id or new_id(),
        name=name,
        account_type=AccountType(account_type),
        opening_balance=balance,
        currency=Currency(currency),
        is_active=True,
        created_at=now(ctx),
    )

    try:
        store.add_account(account)
    except DomainError as e:
        handle_domain_error(ctx, e)

    save(ctx)
    click.echo(f"Created account '{name}' (ID: {account.id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their current balances."""
    store = get_store(ctx)
    calculator = BalanceCalculator(store)

    accounts = store.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        balance = calculator.get_account_balance(acc.id)
        status = "" if acc.is_active else " (inactive)"
        click.echo(
            f"ID: {acc.id:<12} | {acc.name:20s} | {acc.account_type.value:12s} | "
            f"{acc.currency.value} {balance:>14,.2f}{status}"
        )
    click.echo("-" * 80)
    click.echo(f"Net worth: {calculator.get_net_worth():,.2f}")


@account_group.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def account_balance(ctx, account: str):
    """Show the current balance of an account.

    ACCOUNT can be an account name or ID.
    """
    store = get_store(ctx)
    account_obj = resolve_account_or_exit(ctx, store, account)
    balance = BalanceCalculator(store).get_account_balance(account_obj.id)
    click.echo(f"{account_obj.name}: {account_obj.currency.value} {balance:,.2f}")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--type", "account_type", type=click.Choice(ACCOUNT_TYPES), help="New account type")
@click.option("--currency", type=click.Choice(CURRENCIES), help="New currency")
@click.option("--opening-balance", help="New opening balance")
@click.option("--active/--inactive", "is_active", default=None, help="Mark the account active or inactive")
@click.pass_context
def update_account(
    ctx,
    account: str,
    name: str | None,
    account_type: str | None,
    currency: str | None,
    opening_balance: str | None,
    is_active: bool | None,
) -> None:
    """Update account fields.

    ACCOUNT can be an account name or ID. Only the given options change.

    Examples:
        ledgerkit account update "M-Pesa" --name "M-Pesa Personal"
        ledgerkit account update 1 --inactive
    """
    store = get_store(ctx)
    account_obj = resolve_account_or_exit(ctx, store, account)

    fields: dict = {}
    if name is not None:
        fields["name"] = name
    if account_type is not None:
        fields["account_type"] = AccountType(account_type)
    if currency is not None:
        fields["currency"] = Currency(currency)
    if opening_balance is not None:
        try:
            fields["opening_balance"] = parse_amount(opening_balance)
        except ValueError as e:
            click.echo(f"Error: Invalid opening balance: {e}", err=True)
            ctx.exit(1)
    if is_active is not None:
        fields["is_active"] = is_active

    if not fields:
        click.echo("Error: No fields to update.", err=True)
        ctx.exit(1)

    store.update_account(account_obj.id, **fields)
    save(ctx)
    click.echo(f"Updated account '{account_obj.id}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    Transactions referencing the account are kept; they no longer affect
    any balance and show the account as "Unknown".
    """
    store = get_store(ctx)
    account_obj = resolve_account_or_exit(ctx, store, account)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_obj.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    store.delete_account(account_obj.id)
    save(ctx)
    click.echo(f"Deleted account '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
