"""Savings project domain service."""

import math
from decimal import Decimal
from typing import Optional

from ledgerkit.domain.clock import Clock, system_clock
from ledgerkit.domain.entities import Priority, Project
from ledgerkit.domain.store import EntityStore

_PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


class ProjectService:
    """Service for project progress figures.

    The current amount of a project is maintained by hand and is never
    synced with the linked account balance.
    """

    def __init__(self, store: EntityStore, clock: Clock = system_clock):
        """Initialize project service.

        Args:
            store: Entity store to read from
            clock: Supplies "now" for deadline figures
        """
        self.store = store
        self.clock = clock

    def get_progress(self, project: Project) -> Decimal:
        """Get progress as a percentage of the target (may exceed 100).

        Returns 0 when the target amount is 0.
        """
        if project.target_amount <= 0:
            return Decimal("0")
        return project.current_amount / project.target_amount * 100

    def get_days_left(self, project: Project) -> Optional[int]:
        """Get whole days until the target date, rounded up.

        Returns:
            Days left (negative when overdue), or None without a target date
        """
        if project.target_date is None:
            return None
        seconds = (project.target_date - self.clock()).total_seconds()
        return math.ceil(seconds / 86400)

    def list_projects_by_priority(self) -> list[Project]:
        """List projects, high priority first, then by name."""
        return sorted(
            self.store.list_projects(),
            key=lambda p: (_PRIORITY_ORDER[p.priority], p.name),
        )

    def get_project_contributions(self, project_id: str) -> Decimal:
        """Sum the amounts of transactions linked to a project."""
        return sum(
            (txn.amount for txn in self.store.list_transactions() if txn.project_id == project_id),
            Decimal("0"),
        )
