"""Shared pytest fixtures for ledgerkit tests."""

import os
import tempfile
from datetime import datetime
from decimal import Decimal

import pytest

from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.domain.clock import fixed_clock
from ledgerkit.domain.entities import (
    Account,
    AccountType,
    Currency,
    Transaction,
    TransactionType,
)
from ledgerkit.domain.store import EntityStore, seed_default_categories

NOW = datetime(2024, 2, 16, 9, 30)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def clock():
    """A clock frozen at 2024-02-16 09:30."""
    return fixed_clock(NOW)


@pytest.fixture
def store():
    """Create an empty entity store."""
    return EntityStore()


@pytest.fixture
def seeded_store(store):
    """Create a store holding the default categories."""
    seed_default_categories(store)
    return store


@pytest.fixture
def sample_account(seeded_store):
    """Create a sample cash account with an opening balance of 1000."""
    account = Account(
        id="acc-1",
        name="Wallet",
        account_type=AccountType.CASH,
        opening_balance=Decimal("1000"),
        currency=Currency.KES,
        is_active=True,
        created_at=datetime(2024, 1, 1),
    )
    seeded_store.add_account(account)
    return account


@pytest.fixture
def make_account():
    """Build accounts with sensible defaults."""

    def _make(account_id: str, name: str | None = None, opening_balance: str = "0", **kwargs) -> Account:
        values = dict(
            id=account_id,
            name=name or account_id,
            account_type=AccountType.CASH,
            opening_balance=Decimal(opening_balance),
            currency=Currency.KES,
            is_active=True,
            created_at=datetime(2024, 1, 1),
        )
        values.update(kwargs)
        return Account(**values)

    return _make


@pytest.fixture
def make_transaction():
    """Build transactions with sensible defaults."""
    counter = {"n": 0}

    def _make(
        transaction_type: TransactionType,
        amount: str,
        date: datetime = datetime(2024, 2, 10),
        category_id: str = "4",
        **kwargs,
    ) -> Transaction:
        counter["n"] += 1
        values = dict(
            id=kwargs.pop("id", f"txn-{counter['n']}"),
            date=date,
            amount=Decimal(amount),
            transaction_type=transaction_type,
            category_id=category_id,
            created_at=date,
        )
        values.update(kwargs)
        return Transaction(**values)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
