"""Domain layer for ledgerkit application."""

from ledgerkit.domain.store import EntityStore
from ledgerkit.domain.balance import BalanceCalculator
from ledgerkit.domain.statistics import StatisticsService
from ledgerkit.domain.recurring import RecurringScheduler
from ledgerkit.domain.project import ProjectService
from ledgerkit.domain.exchange import ImportService

__all__ = [
    "EntityStore",
    "BalanceCalculator",
    "StatisticsService",
    "RecurringScheduler",
    "ProjectService",
    "ImportService",
]
