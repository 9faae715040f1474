"""Tests for domain entities."""

import dataclasses
from datetime import datetime
from decimal import Decimal

import pytest

from ledgerkit.domain.entities import (
    AccountType,
    LedgerState,
    MonthlyStats,
    ProcessingResult,
    Transaction,
    TransactionType,
)


def test_entities_are_immutable(sample_account):
    with pytest.raises(dataclasses.FrozenInstanceError):
        sample_account.name = "Other"


def test_enum_values_match_stored_strings():
    assert AccountType("mpesa") is AccountType.MPESA
    assert TransactionType.TRANSFER.value == "transfer"


def test_transaction_defaults():
    txn = Transaction(
        id="t",
        date=datetime(2024, 1, 1),
        amount=Decimal("1"),
        transaction_type=TransactionType.INCOME,
        category_id="1",
        created_at=datetime(2024, 1, 1),
    )

    assert txn.tags == frozenset()
    assert txn.from_account_id is None
    assert txn.notes is None


def test_empty_results():
    assert LedgerState().transactions == ()
    assert ProcessingResult() == ProcessingResult(created=(), deactivated=())
    assert MonthlyStats(Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0")).income == 0
