"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay stable
when the database schema changes. Enum values are stored as their string
values and tags as a sorted JSON list.
"""

from ledgerkit.domain import entities as domain
from ledgerkit.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
    Project as ORMProject,
    RecurringTemplate as ORMRecurringTemplate,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        opening_balance=orm_account.opening_balance,
        currency=domain.Currency(orm_account.currency),
        is_active=orm_account.is_active,
        created_at=orm_account.created_at,
    )


def account_to_orm(account: domain.Account, position: int) -> ORMAccount:
    """Convert domain Account entity to SQLAlchemy Account model."""
    return ORMAccount(
        id=account.id,
        position=position,
        name=account.name,
        account_type=account.account_type.value,
        opening_balance=account.opening_balance,
        currency=account.currency.value,
        is_active=account.is_active,
        created_at=account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        category_type=domain.CategoryType(orm_category.category_type),
        group=domain.CategoryGroup(orm_category.group),
        color=orm_category.color,
    )


def category_to_orm(category: domain.Category, position: int) -> ORMCategory:
    """Convert domain Category entity to SQLAlchemy Category model."""
    return ORMCategory(
        id=category.id,
        position=position,
        name=category.name,
        category_type=category.category_type.value,
        group=category.group.value,
        color=category.color,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        amount=orm_transaction.amount,
        transaction_type=domain.TransactionType(orm_transaction.transaction_type),
        category_id=orm_transaction.category_id,
        created_at=orm_transaction.created_at,
        from_account_id=orm_transaction.from_account_id,
        to_account_id=orm_transaction.to_account_id,
        project_id=orm_transaction.project_id,
        notes=orm_transaction.notes,
        tags=frozenset(orm_transaction.tags or ()),
    )


def transaction_to_orm(transaction: domain.Transaction, position: int) -> ORMTransaction:
    """Convert domain Transaction entity to SQLAlchemy Transaction model."""
    return ORMTransaction(
        id=transaction.id,
        position=position,
        date=transaction.date,
        amount=transaction.amount,
        transaction_type=transaction.transaction_type.value,
        category_id=transaction.category_id,
        from_account_id=transaction.from_account_id,
        to_account_id=transaction.to_account_id,
        project_id=transaction.project_id,
        notes=transaction.notes,
        tags=sorted(transaction.tags),
        created_at=transaction.created_at,
    )


def project_to_domain(orm_project: ORMProject) -> domain.Project:
    """Convert SQLAlchemy Project model to domain Project entity."""
    return domain.Project(
        id=orm_project.id,
        name=orm_project.name,
        project_type=domain.ProjectType(orm_project.project_type),
        target_amount=orm_project.target_amount,
        current_amount=orm_project.current_amount,
        priority=domain.Priority(orm_project.priority),
        created_at=orm_project.created_at,
        target_date=orm_project.target_date,
        linked_account_id=orm_project.linked_account_id,
    )


def project_to_orm(project: domain.Project, position: int) -> ORMProject:
    """Convert domain Project entity to SQLAlchemy Project model."""
    return ORMProject(
        id=project.id,
        position=position,
        name=project.name,
        project_type=project.project_type.value,
        target_amount=project.target_amount,
        current_amount=project.current_amount,
        priority=project.priority.value,
        target_date=project.target_date,
        linked_account_id=project.linked_account_id,
        created_at=project.created_at,
    )


def recurring_template_to_domain(
    orm_template: ORMRecurringTemplate,
) -> domain.RecurringTemplate:
    """Convert SQLAlchemy RecurringTemplate model to domain RecurringTemplate entity."""
    return domain.RecurringTemplate(
        id=orm_template.id,
        name=orm_template.name,
        amount=orm_template.amount,
        transaction_type=domain.TransactionType(orm_template.transaction_type),
        category_id=orm_template.category_id,
        frequency=domain.Frequency(orm_template.frequency),
        start_date=orm_template.start_date,
        is_active=orm_template.is_active,
        created_at=orm_template.created_at,
        from_account_id=orm_template.from_account_id,
        to_account_id=orm_template.to_account_id,
        end_date=orm_template.end_date,
        last_processed=orm_template.last_processed,
    )


def recurring_template_to_orm(
    template: domain.RecurringTemplate, position: int
) -> ORMRecurringTemplate:
    """Convert domain RecurringTemplate entity to SQLAlchemy RecurringTemplate model."""
    return ORMRecurringTemplate(
        id=template.id,
        position=position,
        name=template.name,
        amount=template.amount,
        transaction_type=template.transaction_type.value,
        category_id=template.category_id,
        from_account_id=template.from_account_id,
        to_account_id=template.to_account_id,
        frequency=template.frequency.value,
        start_date=template.start_date,
        end_date=template.end_date,
        is_active=template.is_active,
        last_processed=template.last_processed,
        created_at=template.created_at,
    )
