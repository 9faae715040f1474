"""Recurring transaction scheduler.

A template is either active or paused. A pass pauses templates whose end
date has passed and materializes at most one occurrence per active template:
when several periods have elapsed since the last run, only one catch-up
transaction is created and last_processed jumps to "now", so the skipped
periods are not back-filled.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from dateutil.relativedelta import relativedelta

from ledgerkit.domain.clock import Clock, system_clock
from ledgerkit.domain.entities import (
    Frequency,
    ProcessingResult,
    RecurringTemplate,
    Transaction,
)
from ledgerkit.domain.store import EntityStore, new_id

logger = logging.getLogger(__name__)

RECURRING_TAG = "recurring"

_PERIODS = {
    Frequency.DAILY: timedelta(days=1),
    Frequency.WEEKLY: timedelta(days=7),
    Frequency.MONTHLY: relativedelta(months=1),
}


def auto_note(template: RecurringTemplate) -> str:
    """Return the note marking a transaction as generated from a template."""
    return f"Auto: {template.name}"


def next_due_date(template: RecurringTemplate) -> datetime:
    """Get the date the next occurrence of a template becomes due.

    The baseline is the last processed time, or the start date if the
    template has never run. Monthly steps use calendar months and clamp to
    the last day of shorter months (Jan 31 -> Feb 29 in a leap year).
    """
    baseline = template.last_processed or template.start_date
    return baseline + _PERIODS[template.frequency]


def is_expired(template: RecurringTemplate, now: datetime) -> bool:
    """Return True if the template's end date is strictly before now."""
    return template.end_date is not None and template.end_date < now


class RecurringScheduler:
    """Service materializing due recurring transactions."""

    def __init__(
        self,
        store: EntityStore,
        clock: Clock = system_clock,
        id_factory: Callable[[], str] = new_id,
    ):
        """Initialize recurring scheduler.

        Args:
            store: Entity store to read templates from and write transactions to
            clock: Supplies the evaluation time
            id_factory: Generates IDs for materialized transactions
        """
        self.store = store
        self.clock = clock
        self.id_factory = id_factory

    def process_recurring_transactions(self) -> ProcessingResult:
        """Evaluate every active template once against the current time.

        Templates missing the account reference their type needs are still
        materialized; the resulting transaction affects no balance.

        Returns:
            ProcessingResult listing created transactions and paused templates
        """
        now = self.clock()
        created: list[Transaction] = []
        deactivated: list[str] = []

        for template in self.store.list_recurring_templates():
            if not template.is_active:
                continue

            if is_expired(template, now):
                self.store.update_recurring_template(template.id, is_active=False)
                deactivated.append(template.id)
                logger.info("Paused recurring template %s: end date %s passed", template.id, template.end_date)
                continue

            if now < next_due_date(template):
                continue

            txn = self.materialize(template, now)
            created.append(txn)

        return ProcessingResult(created=tuple(created), deactivated=tuple(deactivated))

    def materialize(self, template: RecurringTemplate, now: datetime) -> Transaction:
        """Create the transaction for one due occurrence and mark it processed."""
        txn = Transaction(
            id=self.id_factory(),
            date=now,
            amount=template.amount,
            transaction_type=template.transaction_type,
            category_id=template.category_id,
            created_at=now,
            from_account_id=template.from_account_id,
            to_account_id=template.to_account_id,
            notes=auto_note(template),
            tags=frozenset({RECURRING_TAG}),
        )
        self.store.add_transaction(txn)
        self.store.update_recurring_template(template.id, last_processed=now)
        logger.info(
            "Materialized recurring template %s as transaction %s (%s %s)",
            template.id,
            txn.id,
            txn.transaction_type.value,
            txn.amount,
        )
        return txn
