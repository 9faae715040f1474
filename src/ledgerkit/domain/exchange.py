"""Import and export of ledger data.

Snapshots are plain JSON-ready dicts holding every collection of the store.
Exports are read-only. Imports feed entities through the store's add
operations; deduplication is optional and only applies here, never inside the
store. Malformed import data is the one place a hard failure is raised.
"""

import csv
import dataclasses
import json
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, TextIO

from dateutil import parser as date_parser

from ledgerkit.domain.clock import Clock, system_clock
from ledgerkit.domain.entities import (
    Account,
    AccountType,
    Category,
    CategoryGroup,
    CategoryType,
    Currency,
    Frequency,
    Priority,
    Project,
    ProjectType,
    RecurringTemplate,
    Transaction,
    TransactionType,
)
from ledgerkit.domain.errors import ConflictError, ValidationError
from ledgerkit.domain.store import EntityStore

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1

CSV_HEADER = ["Date", "Type", "Amount", "Category", "Notes"]

# Snapshot key, entity class and store add method name for each collection
COLLECTIONS = [
    ("accounts", Account, "add_account"),
    ("categories", Category, "add_category"),
    ("transactions", Transaction, "add_transaction"),
    ("projects", Project, "add_project"),
    ("recurring_templates", RecurringTemplate, "add_recurring_template"),
]

_DECIMAL_FIELDS = {"opening_balance", "amount", "target_amount", "current_amount"}
_DATETIME_FIELDS = {
    "created_at",
    "date",
    "start_date",
    "end_date",
    "last_processed",
    "target_date",
}
_ENUM_FIELDS: dict[str, type[Enum]] = {
    "account_type": AccountType,
    "currency": Currency,
    "category_type": CategoryType,
    "group": CategoryGroup,
    "transaction_type": TransactionType,
    "frequency": Frequency,
    "project_type": ProjectType,
    "priority": Priority,
}


def _encode_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, frozenset):
        return sorted(value)
    return value


def _decode_value(name: str, value: Any) -> Any:
    if value is None:
        return None
    if name in _DECIMAL_FIELDS:
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise ValidationError(f"Invalid amount for '{name}': {value!r}")
        if not amount.is_finite():
            raise ValidationError(f"Invalid amount for '{name}': {value!r}")
        return amount
    if name in _DATETIME_FIELDS:
        try:
            moment = date_parser.isoparse(str(value))
        except ValueError:
            raise ValidationError(f"Invalid date for '{name}': {value!r}")
        # Stored datetimes are naive local time
        if moment.tzinfo is not None:
            moment = moment.astimezone().replace(tzinfo=None)
        return moment
    if name in _ENUM_FIELDS:
        try:
            return _ENUM_FIELDS[name](value)
        except ValueError:
            raise ValidationError(f"Invalid value for '{name}': {value!r}")
    if name == "tags":
        if not isinstance(value, list):
            raise ValidationError(f"Tags must be a list (got {value!r})")
        return frozenset(str(tag) for tag in value)
    return value


def entity_to_dict(entity: Any) -> dict[str, Any]:
    """Convert a domain entity to a JSON-ready dict."""
    return {
        f.name: _encode_value(getattr(entity, f.name))
        for f in dataclasses.fields(entity)
    }


def entity_from_dict(entity_cls: type, data: Any) -> Any:
    """Build a domain entity from a dict produced by entity_to_dict.

    Raises:
        ValidationError: If data is not a dict, lacks or nulls a required field or
            holds a value that cannot be converted
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Expected an object for {entity_cls.__name__}, got {type(data).__name__}")

    kwargs = {}
    for f in dataclasses.fields(entity_cls):
        required = f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        if f.name in data:
            if data[f.name] is None and required:
                raise ValidationError(f"{entity_cls.__name__} field '{f.name}' must not be null")
            if data[f.name] is None and f.default_factory is not dataclasses.MISSING:
                continue
            kwargs[f.name] = _decode_value(f.name, data[f.name])
        elif required:
            raise ValidationError(f"{entity_cls.__name__} is missing required field '{f.name}'")
    return entity_cls(**kwargs)


def _in_range(txn: Transaction, start_date: Optional[date], end_date: Optional[date]) -> bool:
    txn_date = txn.date.date()
    if start_date is not None and txn_date < start_date:
        return False
    if end_date is not None and txn_date > end_date:
        return False
    return True


def export_snapshot(
    store: EntityStore,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    clock: Clock = system_clock,
) -> dict[str, Any]:
    """Export the store as a JSON-ready dict.

    Args:
        store: Entity store to read from
        start_date: Optional inclusive start date for transactions
        end_date: Optional inclusive end date for transactions
        clock: Supplies the export timestamp

    Returns:
        Dict with version, exported_at and one list per collection
    """
    state = store.snapshot()
    snapshot: dict[str, Any] = {
        "version": SNAPSHOT_VERSION,
        "exported_at": clock().isoformat(),
    }
    for key, _entity_cls, _add_method in COLLECTIONS:
        entities = getattr(state, key)
        if key == "transactions":
            entities = [txn for txn in entities if _in_range(txn, start_date, end_date)]
        snapshot[key] = [entity_to_dict(entity) for entity in entities]
    return snapshot


def export_file(
    store: EntityStore,
    output_path: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    clock: Clock = system_clock,
) -> dict[str, Any]:
    """Write a snapshot to a JSON file and return it."""
    snapshot = export_snapshot(store, start_date=start_date, end_date=end_date, clock=clock)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(snapshot, f, indent=2)
    return snapshot


def export_transactions_csv(
    store: EntityStore,
    stream: TextIO,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> int:
    """Write transactions in a date range as CSV rows.

    Returns:
        Number of rows written, excluding the header
    """
    writer = csv.writer(stream)
    writer.writerow(CSV_HEADER)
    rows = 0
    for txn in store.list_transactions():
        if not _in_range(txn, start_date, end_date):
            continue
        writer.writerow(
            [
                txn.date.strftime("%Y-%m-%d"),
                txn.transaction_type.value,
                str(txn.amount),
                store.resolve_category_name(txn.category_id),
                txn.notes or "",
            ]
        )
        rows += 1
    return rows


def _natural_key(key: str, entity: Any) -> Any:
    if key == "transactions":
        return (entity.date, entity.amount, entity.notes)
    return entity.name


class ImportService:
    """Service for importing snapshots into an entity store."""

    def __init__(self, store: EntityStore):
        """Initialize import service.

        Args:
            store: Entity store receiving imported entities
        """
        self.store = store

    def import_snapshot(self, data: Any, dedupe: bool = False) -> dict[str, Any]:
        """Import every collection of a snapshot.

        The whole snapshot is parsed before anything is added, so malformed
        data leaves the store untouched.

        Args:
            data: Dict in the format produced by export_snapshot
            dedupe: If True, skip entities matching an existing one by name
                (transactions by date, amount and notes)

        Returns:
            Dict with import statistics:
            - imported: number of entities imported
            - skipped: number of entities skipped (duplicate IDs or natural keys)
            - errors: list of error messages

        Raises:
            ValidationError: If the snapshot is malformed
        """
        if not isinstance(data, dict):
            raise ValidationError("Snapshot must be a JSON object")

        parsed: list[tuple[str, str, list[Any]]] = []
        for key, entity_cls, add_method in COLLECTIONS:
            items = data.get(key, [])
            if not isinstance(items, list):
                raise ValidationError(f"Snapshot field '{key}' must be a list")
            parsed.append((key, add_method, [entity_from_dict(entity_cls, item) for item in items]))

        imported = 0
        skipped = 0
        errors: list[str] = []

        for key, add_method, entities in parsed:
            add: Callable[[Any], None] = getattr(self.store, add_method)
            seen = set()
            if dedupe:
                existing = getattr(self.store.snapshot(), key)
                seen = {_natural_key(key, entity) for entity in existing}

            for entity in entities:
                if dedupe and _natural_key(key, entity) in seen:
                    skipped += 1
                    continue
                try:
                    add(entity)
                except ConflictError:
                    skipped += 1
                    continue
                except ValidationError as e:
                    errors.append(f"{key} {entity.id}: {e}")
                    continue
                imported += 1
                if dedupe:
                    seen.add(_natural_key(key, entity))

        logger.info("Imported %d entities, skipped %d, %d errors", imported, skipped, len(errors))
        return {"imported": imported, "skipped": skipped, "errors": errors}

    def import_file(self, path: str, dedupe: bool = False) -> dict[str, Any]:
        """Import a snapshot from a JSON file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValidationError: If the file is not valid JSON or is malformed
        """
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Import file not found: {path}")

        with open(file_path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValidationError(f"Invalid JSON in {path}: {e}")

        return self.import_snapshot(data, dedupe=dedupe)
