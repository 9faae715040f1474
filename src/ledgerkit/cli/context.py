"""Access to the per-invocation ledger objects stored on the click context."""

from datetime import datetime

import click

from ledgerkit.database.base import Database
from ledgerkit.domain.clock import Clock
from ledgerkit.domain.store import EntityStore


def get_store(ctx: click.Context) -> EntityStore:
    """Get the entity store loaded for this invocation."""
    return ctx.obj["store"]


def get_clock(ctx: click.Context) -> Clock:
    """Get the clock for this invocation (fixed when --as-of is given)."""
    return ctx.obj["clock"]


def now(ctx: click.Context) -> datetime:
    """Get the current time according to the invocation clock."""
    return get_clock(ctx)()


def save(ctx: click.Context) -> None:
    """Persist the whole store after a mutation."""
    db: Database = ctx.obj["db"]
    db.save_state(get_store(ctx).snapshot())
