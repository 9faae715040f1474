"""CLI helpers for account and category resolution."""

from __future__ import annotations

import click

from ledgerkit.domain.entities import Account, Category, Project
from ledgerkit.domain.errors import NotFoundError
from ledgerkit.domain.store import EntityStore
from ledgerkit.utils.resolver import resolve_account, resolve_category, resolve_project


def resolve_account_or_exit(ctx: click.Context, store: EntityStore, account: str) -> Account:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(store, account)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_category_or_exit(ctx: click.Context, store: EntityStore, category: str) -> Category:
    """Resolve category name or ID, or exit with a CLI error."""
    try:
        return resolve_category(store, category)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_project_or_exit(ctx: click.Context, store: EntityStore, project: str) -> Project:
    """Resolve project name or ID, or exit with a CLI error."""
    try:
        return resolve_project(store, project)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
