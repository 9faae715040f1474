"""Statistics aggregation domain service."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from dateutil.relativedelta import relativedelta

from ledgerkit.domain.balance import BalanceCalculator
from ledgerkit.domain.clock import Clock, system_clock
from ledgerkit.domain.entities import (
    CategoryType,
    MonthlyStats,
    Transaction,
    TransactionType,
)
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.store import EntityStore


class StatisticsService:
    """Service for net worth and periodic income, expense and savings totals."""

    def __init__(self, store: EntityStore, clock: Clock = system_clock):
        """Initialize statistics service.

        Args:
            store: Entity store to read from
            clock: Supplies "now" for current-month and trend figures
        """
        self.store = store
        self.clock = clock
        self.balances = BalanceCalculator(store)

    def get_net_worth(self) -> Decimal:
        """Get the sum of all account balances."""
        return self.balances.get_net_worth()

    def get_monthly_stats(self, year: int, month: int) -> MonthlyStats:
        """Get totals for one calendar month.

        Transactions are matched on the year and month of their local date,
        not on a rolling window.

        Args:
            year: Calendar year
            month: Calendar month, 1-12

        Returns:
            MonthlyStats for the month

        Raises:
            ValidationError: If month is outside 1-12
        """
        if not 1 <= month <= 12:
            raise ValidationError(f"Month must be between 1 and 12 (got {month})")

        transactions = [
            txn
            for txn in self.store.list_transactions()
            if txn.date.year == year and txn.date.month == month
        ]
        return self.aggregate(transactions)

    def get_current_month_stats(self) -> MonthlyStats:
        """Get totals for the clock's current month."""
        now = self.clock()
        return self.get_monthly_stats(now.year, now.month)

    def get_period_stats(self, start_date: date, end_date: date) -> MonthlyStats:
        """Get totals for an inclusive date range."""
        return self.aggregate(self.filter_by_dates(start_date, end_date))

    def filter_by_dates(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Transaction]:
        """List transactions whose date falls within an inclusive range."""
        results = []
        for txn in self.store.list_transactions():
            txn_date = txn.date.date()
            if start_date is not None and txn_date < start_date:
                continue
            if end_date is not None and txn_date > end_date:
                continue
            results.append(txn)
        return results

    def aggregate(self, transactions: Iterable[Transaction]) -> MonthlyStats:
        """Sum income, expenses and savings over transactions.

        The stored transaction type is trusted literally. Savings are the
        transactions whose category resolves to the savings type, so a
        savings transaction may also count as income or expense.
        """
        income = Decimal("0")
        expenses = Decimal("0")
        savings = Decimal("0")

        for txn in transactions:
            if txn.transaction_type == TransactionType.INCOME:
                income += txn.amount
            elif txn.transaction_type == TransactionType.EXPENSE:
                expenses += txn.amount

            category = self.store.get_category(txn.category_id)
            if category is not None and category.category_type == CategoryType.SAVINGS:
                savings += txn.amount

        savings_rate = savings / income if income > 0 else Decimal("0")
        return MonthlyStats(
            income=income,
            expenses=expenses,
            savings=savings,
            savings_rate=savings_rate,
        )

    def get_expenses_by_category(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[dict[str, Any]]:
        """Group expense totals by category.

        Categories that no longer exist are reported as "Unknown". Categories
        without expenses are omitted.

        Returns:
            List of dicts with category_id, category_name, amount, count and
            share, sorted by amount descending
        """
        totals: dict[str, dict[str, Any]] = defaultdict(
            lambda: {"amount": Decimal("0"), "count": 0}
        )
        for txn in self.filter_by_dates(start_date, end_date):
            if txn.transaction_type != TransactionType.EXPENSE:
                continue
            totals[txn.category_id]["amount"] += txn.amount
            totals[txn.category_id]["count"] += 1

        total_expenses = sum((data["amount"] for data in totals.values()), Decimal("0"))

        results = []
        for category_id, data in totals.items():
            if data["amount"] == 0:
                continue
            results.append(
                {
                    "category_id": category_id,
                    "category_name": self.store.resolve_category_name(category_id),
                    "amount": data["amount"],
                    "count": data["count"],
                    "share": data["amount"] / total_expenses if total_expenses > 0 else Decimal("0"),
                }
            )

        return sorted(results, key=lambda item: (-item["amount"], item["category_name"]))

    def get_monthly_trend(self, months: int = 6) -> list[dict[str, Any]]:
        """Get income and expenses for recent calendar months.

        Args:
            months: Number of months, ending with the clock's current month

        Returns:
            List of dicts with period (YYYY-MM), income, expenses and net,
            oldest first
        """
        current = self.clock().date().replace(day=1)
        results = []
        for offset in range(months - 1, -1, -1):
            month_start = current - relativedelta(months=offset)
            stats = self.get_monthly_stats(month_start.year, month_start.month)
            results.append(
                {
                    "period": month_start.strftime("%Y-%m"),
                    "income": stats.income,
                    "expenses": stats.expenses,
                    "net": stats.income - stats.expenses,
                }
            )
        return results
