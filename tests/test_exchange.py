"""Tests for snapshot export and import."""

import io
import json
from datetime import date, datetime
from decimal import Decimal

import pytest

from ledgerkit.domain.balance import BalanceCalculator
from ledgerkit.domain.clock import fixed_clock
from ledgerkit.domain.entities import Frequency, RecurringTemplate, Transaction, TransactionType
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.exchange import (
    CSV_HEADER,
    ImportService,
    entity_from_dict,
    entity_to_dict,
    export_file,
    export_snapshot,
    export_transactions_csv,
)
from ledgerkit.domain.recurring import RecurringScheduler
from ledgerkit.domain.statistics import StatisticsService
from ledgerkit.domain.store import EntityStore


@pytest.fixture
def ledger(seeded_store, sample_account, make_account, make_transaction):
    """A small ledger spanning January and February 2024."""
    seeded_store.add_account(make_account("bank", "KCB", opening_balance="5000"))
    add = seeded_store.add_transaction
    add(make_transaction(TransactionType.INCOME, "40000", date=datetime(2024, 1, 25), category_id="1", to_account_id="bank", id="t1"))
    add(make_transaction(TransactionType.TRANSFER, "3000.50", date=datetime(2024, 2, 2), category_id="15", from_account_id="bank", to_account_id="acc-1", id="t2"))
    add(
        make_transaction(
            TransactionType.EXPENSE,
            "450",
            date=datetime(2024, 2, 5, 13, 15),
            category_id="4",
            from_account_id="acc-1",
            notes="Lunch, with team",
            tags=frozenset({"work", "food"}),
            id="t3",
        )
    )
    seeded_store.add_recurring_template(
        RecurringTemplate(
            id="rt-1",
            name="Internet",
            amount=Decimal("2999"),
            transaction_type=TransactionType.EXPENSE,
            category_id="13",
            frequency=Frequency.MONTHLY,
            start_date=datetime(2024, 1, 5),
            is_active=True,
            created_at=datetime(2024, 1, 5),
            from_account_id="bank",
            last_processed=datetime(2024, 2, 5),
        )
    )
    return seeded_store


def test_entity_dict_round_trip(ledger):
    txn = ledger.get_transaction("t3")

    data = entity_to_dict(txn)

    assert data["amount"] == "450"
    assert data["date"] == "2024-02-05T13:15:00"
    assert data["tags"] == ["food", "work"]
    assert entity_from_dict(Transaction, data) == txn


def test_entity_from_dict_missing_field():
    with pytest.raises(ValidationError, match="missing required field 'amount'"):
        entity_from_dict(Transaction, {"id": "x", "date": "2024-01-01"})


def test_entity_from_dict_bad_enum(ledger):
    data = entity_to_dict(ledger.get_transaction("t1"))
    data["transaction_type"] = "refund"

    with pytest.raises(ValidationError, match="transaction_type"):
        entity_from_dict(Transaction, data)


def test_export_snapshot_shape(ledger, clock):
    snapshot = export_snapshot(ledger, clock=clock)

    assert snapshot["version"] == 1
    assert snapshot["exported_at"] == "2024-02-16T09:30:00"
    assert len(snapshot["accounts"]) == 2
    assert len(snapshot["categories"]) == 15
    assert len(snapshot["transactions"]) == 3
    assert len(snapshot["recurring_templates"]) == 1
    json.dumps(snapshot)


def test_export_snapshot_date_range(ledger, clock):
    snapshot = export_snapshot(ledger, start_date=date(2024, 2, 1), end_date=date(2024, 2, 2), clock=clock)

    assert [t["id"] for t in snapshot["transactions"]] == ["t2"]
    assert len(snapshot["accounts"]) == 2


def test_export_import_round_trip_reproduces_figures(ledger, clock, tmp_path):
    path = tmp_path / "ledger.json"
    export_file(ledger, str(path), clock=clock)

    restored = EntityStore()
    result = ImportService(restored).import_file(str(path))

    assert result == {"imported": 21, "skipped": 0, "errors": []}
    assert restored.snapshot() == ledger.snapshot()
    assert BalanceCalculator(restored).get_balances() == BalanceCalculator(ledger).get_balances()
    original_stats = StatisticsService(ledger, clock=clock).get_monthly_stats(2024, 2)
    assert StatisticsService(restored, clock=clock).get_monthly_stats(2024, 2) == original_stats


def test_reimport_skips_existing_ids(ledger, clock):
    snapshot = export_snapshot(ledger, clock=clock)

    result = ImportService(ledger).import_snapshot(snapshot)

    assert result["imported"] == 0
    assert result["skipped"] == 21


def test_dedupe_by_natural_key(ledger, clock):
    snapshot = export_snapshot(ledger, clock=clock)
    for key in ("accounts", "categories", "transactions", "recurring_templates"):
        for item in snapshot[key]:
            item["id"] = "copy-" + item["id"]

    without = ImportService(EntityStore.from_state(ledger.snapshot())).import_snapshot(snapshot)
    with_dedupe = ImportService(ledger).import_snapshot(snapshot, dedupe=True)

    assert without["imported"] == 21
    assert with_dedupe["imported"] == 0
    assert with_dedupe["skipped"] == 21


def test_invalid_entities_reported_as_errors(clock):
    snapshot = {
        "transactions": [
            {
                "id": "neg",
                "date": "2024-01-01T00:00:00",
                "amount": "-5",
                "transaction_type": "expense",
                "category_id": "4",
                "created_at": "2024-01-01T00:00:00",
            }
        ]
    }
    store = EntityStore()

    result = ImportService(store).import_snapshot(snapshot)

    assert result["imported"] == 0
    assert len(result["errors"]) == 1
    assert "neg" in result["errors"][0]


def _account_data(**overrides):
    data = {
        "id": "a",
        "name": "Wallet",
        "account_type": "cash",
        "opening_balance": "100",
        "currency": "KES",
        "is_active": True,
        "created_at": "2024-01-01T00:00:00",
    }
    data.update(overrides)
    return data


def test_null_required_field_rejected():
    store = EntityStore()
    snapshot = {"accounts": [_account_data(opening_balance=None), _account_data(id="b")]}

    with pytest.raises(ValidationError, match="'opening_balance' must not be null"):
        ImportService(store).import_snapshot(snapshot)

    assert store.is_empty()


def test_null_optional_fields_accepted():
    txn = entity_from_dict(
        Transaction,
        {
            "id": "t",
            "date": "2024-02-01T00:00:00",
            "amount": "10",
            "transaction_type": "expense",
            "category_id": "4",
            "created_at": "2024-02-01T00:00:00",
            "notes": None,
            "tags": None,
        },
    )

    assert txn.notes is None
    assert txn.tags == frozenset()


@pytest.mark.parametrize("amount", ["NaN", "sNaN", "Infinity", "-Infinity"])
def test_non_finite_amount_rejected(amount):
    store = EntityStore()
    snapshot = {"accounts": [_account_data(opening_balance=amount)]}

    with pytest.raises(ValidationError, match="Invalid amount for 'opening_balance'"):
        ImportService(store).import_snapshot(snapshot)

    assert store.is_empty()


def test_timezone_aware_dates_become_naive(seeded_store):
    snapshot = {
        "recurring_templates": [
            {
                "id": "rt-z",
                "name": "Gym",
                "amount": "3000",
                "transaction_type": "expense",
                "category_id": "6",
                "frequency": "monthly",
                "start_date": "2024-02-01T00:00:00Z",
                "end_date": "2024-12-31T00:00:00+03:00",
                "is_active": True,
                "created_at": "2024-02-01T00:00:00Z",
            }
        ]
    }

    result = ImportService(seeded_store).import_snapshot(snapshot)

    template = seeded_store.get_recurring_template("rt-z")
    assert result["imported"] == 1
    assert template.start_date.tzinfo is None
    assert template.end_date.tzinfo is None

    processed = RecurringScheduler(seeded_store, clock=fixed_clock(datetime(2024, 2, 16))).process_recurring_transactions()

    assert processed.created == ()
    assert processed.deactivated == ()
    assert seeded_store.get_recurring_template("rt-z").is_active is True


def test_malformed_snapshot_leaves_store_untouched(ledger):
    before = ledger.snapshot()
    snapshot = {
        "accounts": [entity_to_dict(ledger.get_account("bank")) | {"id": "new"}],
        "transactions": [{"id": "broken"}],
    }

    with pytest.raises(ValidationError):
        ImportService(ledger).import_snapshot(snapshot)

    assert ledger.snapshot() == before


def test_import_file_errors(tmp_path):
    service = ImportService(EntityStore())

    with pytest.raises(FileNotFoundError):
        service.import_file(str(tmp_path / "missing.json"))

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValidationError, match="Invalid JSON"):
        service.import_file(str(bad))


def test_export_csv(ledger):
    ledger.delete_category("4")
    stream = io.StringIO()

    rows = export_transactions_csv(ledger, stream, start_date=date(2024, 2, 1))

    lines = stream.getvalue().splitlines()
    assert rows == 2
    assert lines[0] == ",".join(CSV_HEADER)
    assert lines[1] == "2024-02-02,transfer,3000.50,Transfer,"
    assert lines[2] == '2024-02-05,expense,450,Unknown,"Lunch, with team"'
