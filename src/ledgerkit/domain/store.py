"""In-memory entity store.

The store owns the single mutable copy of the ledger. Add operations reject
duplicate IDs with ConflictError. Update operations merge partial fields and
are a silent no-op (returning None) when the ID is unknown. Delete operations
are idempotent. Nothing cascades: deleting an account or category leaves the
transactions that reference it in place.
"""

import dataclasses
import logging
import uuid
from typing import Any, Optional, TypeVar

from ledgerkit.domain.entities import (
    Account,
    Category,
    CategoryGroup,
    CategoryType,
    LedgerState,
    Project,
    RecurringTemplate,
    Transaction,
    TransactionType,
)
from ledgerkit.domain.errors import (
    ConflictError,
    ValidationError,
    duplicate_id,
    negative_amount,
    unknown_fields,
)

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"

E = TypeVar("E")


def new_id() -> str:
    """Generate a new entity ID."""
    return uuid.uuid4().hex


# Default categories seeded by the init-categories command
DEFAULT_CATEGORIES = [
    Category("1", "Salary", CategoryType.INCOME, CategoryGroup.NEED, "#10b981"),
    Category("2", "Business", CategoryType.INCOME, CategoryGroup.NEED, "#3b82f6"),
    Category("3", "Rent", CategoryType.EXPENSE, CategoryGroup.NEED, "#ef4444"),
    Category("4", "Food", CategoryType.EXPENSE, CategoryGroup.NEED, "#f59e0b"),
    Category("5", "Transport", CategoryType.EXPENSE, CategoryGroup.NEED, "#8b5cf6"),
    Category("6", "Entertainment", CategoryType.EXPENSE, CategoryGroup.WANT, "#06b6d4"),
    Category("7", "Dining Out", CategoryType.EXPENSE, CategoryGroup.WANT, "#ec4899"),
    Category("8", "Shopping", CategoryType.EXPENSE, CategoryGroup.WANT, "#84cc16"),
    Category("9", "Savings", CategoryType.SAVINGS, CategoryGroup.WEALTH, "#10b981"),
    Category("10", "Family Support", CategoryType.EXPENSE, CategoryGroup.OBLIGATION, "#6b7280"),
    Category("11", "OPEX - Petty Cash", CategoryType.EXPENSE, CategoryGroup.NEED, "#f97316"),
    Category("12", "OPEX - Daily Operations", CategoryType.EXPENSE, CategoryGroup.NEED, "#eab308"),
    Category("13", "Internet", CategoryType.EXPENSE, CategoryGroup.NEED, "#06b6d4"),
    Category("14", "Bundles", CategoryType.EXPENSE, CategoryGroup.NEED, "#8b5cf6"),
    Category("15", "Transfer", CategoryType.TRANSFER, CategoryGroup.NEED, "#64748b"),
]


def _validate_transaction(transaction: Transaction) -> None:
    if transaction.amount < 0:
        raise ValidationError(negative_amount(transaction.amount))


def _validate_template(template: RecurringTemplate) -> None:
    if template.amount < 0:
        raise ValidationError(negative_amount(template.amount))
    if template.transaction_type == TransactionType.TRANSFER:
        raise ValidationError(
            f"Recurring template '{template.id}' cannot be a transfer; use income or expense"
        )


class EntityStore:
    """Mutable collections of accounts, categories, transactions, projects
    and recurring templates, keyed by ID in insertion order."""

    def __init__(self):
        self._accounts: dict[str, Account] = {}
        self._categories: dict[str, Category] = {}
        self._transactions: dict[str, Transaction] = {}
        self._projects: dict[str, Project] = {}
        self._recurring_templates: dict[str, RecurringTemplate] = {}

    @classmethod
    def from_state(cls, state: LedgerState) -> "EntityStore":
        """Build a store holding every entity of a ledger snapshot.

        Args:
            state: Snapshot, usually loaded by the persistence layer

        Returns:
            New EntityStore

        Raises:
            ConflictError: If the snapshot repeats an ID within a collection
        """
        store = cls()
        for account in state.accounts:
            store.add_account(account)
        for category in state.categories:
            store.add_category(category)
        for transaction in state.transactions:
            store.add_transaction(transaction)
        for project in state.projects:
            store.add_project(project)
        for template in state.recurring_templates:
            store.add_recurring_template(template)
        return store

    def snapshot(self) -> LedgerState:
        """Return an immutable copy of the current collections."""
        return LedgerState(
            accounts=tuple(self._accounts.values()),
            categories=tuple(self._categories.values()),
            transactions=tuple(self._transactions.values()),
            projects=tuple(self._projects.values()),
            recurring_templates=tuple(self._recurring_templates.values()),
        )

    def is_empty(self) -> bool:
        """Return True if no collection holds an entity."""
        return not (
            self._accounts
            or self._categories
            or self._transactions
            or self._projects
            or self._recurring_templates
        )

    # Generic helpers
    def _add(self, collection: dict[str, E], kind: str, entity: E) -> None:
        entity_id = entity.id
        if entity_id in collection:
            raise ConflictError(duplicate_id(kind, entity_id))
        collection[entity_id] = entity

    def _update(
        self, collection: dict[str, E], kind: str, entity_id: str, fields: dict[str, Any]
    ) -> Optional[E]:
        current = collection.get(entity_id)
        if current is None:
            logger.debug("Ignoring update of unknown %s %s", kind, entity_id)
            return None

        allowed = {f.name for f in dataclasses.fields(current)} - {"id"}
        unknown = [name for name in fields if name not in allowed]
        if unknown:
            raise ValidationError(unknown_fields(kind, unknown))

        return dataclasses.replace(current, **fields)

    def _delete(self, collection: dict[str, E], kind: str, entity_id: str) -> None:
        if collection.pop(entity_id, None) is None:
            logger.debug("Ignoring delete of unknown %s %s", kind, entity_id)

    # Account operations
    def add_account(self, account: Account) -> None:
        """Add an account. Raises ConflictError if the ID is taken."""
        self._add(self._accounts, "Account", account)

    def update_account(self, account_id: str, **fields: Any) -> Optional[Account]:
        """Merge fields into an account. Returns None if the ID is unknown."""
        updated = self._update(self._accounts, "Account", account_id, fields)
        if updated is not None:
            self._accounts[account_id] = updated
        return updated

    def delete_account(self, account_id: str) -> None:
        """Delete an account. Referencing transactions are kept."""
        self._delete(self._accounts, "Account", account_id)

    def get_account(self, account_id: Optional[str]) -> Optional[Account]:
        """Get account by ID."""
        if account_id is None:
            return None
        return self._accounts.get(account_id)

    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        return list(self._accounts.values())

    # Category operations
    def add_category(self, category: Category) -> None:
        """Add a category. Raises ConflictError if the ID is taken."""
        self._add(self._categories, "Category", category)

    def update_category(self, category_id: str, **fields: Any) -> Optional[Category]:
        """Merge fields into a category. Returns None if the ID is unknown."""
        updated = self._update(self._categories, "Category", category_id, fields)
        if updated is not None:
            self._categories[category_id] = updated
        return updated

    def delete_category(self, category_id: str) -> None:
        """Delete a category. Referencing transactions are kept."""
        self._delete(self._categories, "Category", category_id)

    def get_category(self, category_id: Optional[str]) -> Optional[Category]:
        """Get category by ID."""
        if category_id is None:
            return None
        return self._categories.get(category_id)

    def list_categories(self) -> list[Category]:
        """List all categories."""
        return list(self._categories.values())

    # Transaction operations
    def add_transaction(self, transaction: Transaction) -> None:
        """Add a transaction.

        Account and category references are not checked.

        Raises:
            ValidationError: If the amount is negative
            ConflictError: If the ID is taken
        """
        _validate_transaction(transaction)
        self._add(self._transactions, "Transaction", transaction)

    def update_transaction(self, transaction_id: str, **fields: Any) -> Optional[Transaction]:
        """Merge fields into a transaction. Returns None if the ID is unknown."""
        if "tags" in fields and fields["tags"] is not None:
            fields["tags"] = frozenset(fields["tags"])
        updated = self._update(self._transactions, "Transaction", transaction_id, fields)
        if updated is not None:
            _validate_transaction(updated)
            self._transactions[transaction_id] = updated
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction."""
        self._delete(self._transactions, "Transaction", transaction_id)

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        return self._transactions.get(transaction_id)

    def list_transactions(self) -> list[Transaction]:
        """List all transactions in insertion order."""
        return list(self._transactions.values())

    # Project operations
    def add_project(self, project: Project) -> None:
        """Add a project. Raises ConflictError if the ID is taken."""
        self._add(self._projects, "Project", project)

    def update_project(self, project_id: str, **fields: Any) -> Optional[Project]:
        """Merge fields into a project. Returns None if the ID is unknown."""
        updated = self._update(self._projects, "Project", project_id, fields)
        if updated is not None:
            self._projects[project_id] = updated
        return updated

    def delete_project(self, project_id: str) -> None:
        """Delete a project."""
        self._delete(self._projects, "Project", project_id)

    def get_project(self, project_id: str) -> Optional[Project]:
        """Get project by ID."""
        return self._projects.get(project_id)

    def list_projects(self) -> list[Project]:
        """List all projects."""
        return list(self._projects.values())

    # Recurring template operations
    def add_recurring_template(self, template: RecurringTemplate) -> None:
        """Add a recurring template.

        Raises:
            ValidationError: If the amount is negative or the type is transfer
            ConflictError: If the ID is taken
        """
        _validate_template(template)
        self._add(self._recurring_templates, "Recurring template", template)

    def update_recurring_template(
        self, template_id: str, **fields: Any
    ) -> Optional[RecurringTemplate]:
        """Merge fields into a recurring template. Returns None if the ID is unknown."""
        updated = self._update(
            self._recurring_templates, "Recurring template", template_id, fields
        )
        if updated is not None:
            _validate_template(updated)
            self._recurring_templates[template_id] = updated
        return updated

    def delete_recurring_template(self, template_id: str) -> None:
        """Delete a recurring template."""
        self._delete(self._recurring_templates, "Recurring template", template_id)

    def get_recurring_template(self, template_id: str) -> Optional[RecurringTemplate]:
        """Get recurring template by ID."""
        return self._recurring_templates.get(template_id)

    def list_recurring_templates(self) -> list[RecurringTemplate]:
        """List all recurring templates."""
        return list(self._recurring_templates.values())

    # Reference resolution
    def resolve_category_name(self, category_id: Optional[str]) -> str:
        """Return the category name, or "Unknown" for a dangling reference."""
        category = self.get_category(category_id)
        return category.name if category is not None else UNKNOWN_NAME

    def resolve_account_name(self, account_id: Optional[str]) -> str:
        """Return the account name, or "Unknown" for a dangling reference."""
        account = self.get_account(account_id)
        return account.name if account is not None else UNKNOWN_NAME


def seed_default_categories(store: EntityStore) -> int:
    """Add every default category whose ID is not in the store yet.

    Returns:
        Number of categories added
    """
    added = 0
    for category in DEFAULT_CATEGORIES:
        if store.get_category(category.id) is None:
            store.add_category(category)
            added += 1
    return added
