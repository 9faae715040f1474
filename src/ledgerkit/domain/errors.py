"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as duplicate identifiers."""


def account_not_found(account: str) -> str:
    """Return message for missing account."""
    return f"Account '{account}' not found"


def category_not_found(category: str) -> str:
    """Return message for missing category."""
    return f"Category '{category}' not found"


def duplicate_id(kind: str, entity_id: str) -> str:
    """Return message for an add that reuses an existing ID."""
    return f"{kind} with id '{entity_id}' already exists"


def negative_amount(amount) -> str:
    """Return message for an amount below zero."""
    return f"Amount must not be negative (got {amount})"


def unknown_fields(kind: str, names: list[str]) -> str:
    """Return message for an update naming fields the entity lacks."""
    return f"Cannot update {kind}: unknown field{'s' if len(names) != 1 else ''} {', '.join(sorted(names))}"
