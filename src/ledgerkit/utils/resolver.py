"""Utilities for resolving user-typed account and category references."""

from ledgerkit.domain.entities import Account, Category, Project
from ledgerkit.domain.errors import NotFoundError, account_not_found, category_not_found
from ledgerkit.domain.store import EntityStore


def resolve_account(store: EntityStore, account: str) -> Account:
    """Resolve an account ID or name to an account.

    An exact ID match wins over a name match.

    Args:
        store: Entity store
        account: Account ID or name

    Returns:
        Account entity

    Raises:
        NotFoundError: If no account has that ID or name
    """
    found = store.get_account(account)
    if found is not None:
        return found

    for acc in store.list_accounts():
        if acc.name == account:
            return acc

    raise NotFoundError(account_not_found(account))


def resolve_category(store: EntityStore, category: str) -> Category:
    """Resolve a category ID or name (case-insensitive) to a category.

    Raises:
        NotFoundError: If no category has that ID or name
    """
    found = store.get_category(category)
    if found is not None:
        return found

    wanted = category.strip().lower()
    for cat in store.list_categories():
        if cat.name.lower() == wanted:
            return cat

    raise NotFoundError(category_not_found(category))


def resolve_project(store: EntityStore, project: str) -> Project:
    """Resolve a project ID or exact name to a project.

    Raises:
        NotFoundError: If no project has that ID or name
    """
    found = store.get_project(project)
    if found is not None:
        return found

    for proj in store.list_projects():
        if proj.name == project:
            return proj

    raise NotFoundError(f"Project '{project}' not found")
