"""Balance calculator domain service."""

from decimal import Decimal

from ledgerkit.domain.entities import Transaction, TransactionType
from ledgerkit.domain.store import EntityStore


def signed_effect(txn: Transaction, account_id: str) -> Decimal:
    """Return the signed effect of a transaction on one account.

    Both legs of a transfer apply independently, so a transfer from an
    account to itself nets to zero.
    """
    effect = Decimal("0")
    if txn.transaction_type == TransactionType.INCOME:
        if txn.to_account_id == account_id:
            effect += txn.amount
    elif txn.transaction_type == TransactionType.EXPENSE:
        if txn.from_account_id == account_id:
            effect -= txn.amount
    elif txn.transaction_type == TransactionType.TRANSFER:
        if txn.from_account_id == account_id:
            effect -= txn.amount
        if txn.to_account_id == account_id:
            effect += txn.amount
    return effect


class BalanceCalculator:
    """Service deriving current balances from the ledger."""

    def __init__(self, store: EntityStore):
        """Initialize balance calculator.

        Args:
            store: Entity store to read from
        """
        self.store = store

    def get_account_balance(self, account_id: str) -> Decimal:
        """Get the current balance of an account.

        Starts from the opening balance and applies every transaction. The
        result is a plain sum, so negative balances are allowed.

        Args:
            account_id: Account ID

        Returns:
            Current balance, or 0 if the account does not exist
        """
        account = self.store.get_account(account_id)
        if account is None:
            return Decimal("0")

        balance = account.opening_balance
        for txn in self.store.list_transactions():
            balance += signed_effect(txn, account_id)
        return balance

    def get_balances(self) -> dict[str, Decimal]:
        """Get the current balance of every account, keyed by account ID."""
        return {
            account.id: self.get_account_balance(account.id)
            for account in self.store.list_accounts()
        }

    def get_net_worth(self) -> Decimal:
        """Get the sum of all account balances.

        Recomputed on every call; nothing is cached.
        """
        return sum(self.get_balances().values(), Decimal("0"))
