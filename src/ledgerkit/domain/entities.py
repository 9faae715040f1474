"""Domain model entities for ledgerkit.

These are pure data classes representing business concepts, independent of
the database schema. Current account balances are never stored here; they are
always derived from the opening balance and the transaction collection.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Kind of account money is held in."""

    KCB_BANK = "kcb_bank"
    ABSA_BANK = "absa_bank"
    MPESA = "mpesa"
    ZIIDI = "ziidi"
    CRYPTO = "crypto"
    MONEY_MARKET = "money_market"
    CASH = "cash"
    SACCO = "sacco"


class Currency(str, Enum):
    """Declared account currency. Amounts are never converted."""

    KES = "KES"
    USD = "USD"
    BTC = "BTC"
    ETH = "ETH"


class CategoryType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"
    SAVINGS = "savings"


class CategoryGroup(str, Enum):
    """Budgeting classification, independent of the category type."""

    NEED = "need"
    WANT = "want"
    WEALTH = "wealth"
    OBLIGATION = "obligation"


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ProjectType(str, Enum):
    CAR_PURCHASE = "car_purchase"
    LAND_BUY = "land_buy"
    FARMING = "farming"
    CUSTOM = "custom"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: str
    name: str
    account_type: AccountType
    opening_balance: Decimal
    currency: Currency
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: str
    name: str
    category_type: CategoryType
    group: CategoryGroup
    color: str


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    The amount is never negative; its direction is implied by the
    transaction type and applied by the balance calculator.
    """

    id: str
    date: datetime
    amount: Decimal
    transaction_type: TransactionType
    category_id: str
    created_at: datetime
    from_account_id: Optional[str] = None
    to_account_id: Optional[str] = None
    project_id: Optional[str] = None
    notes: Optional[str] = None
    tags: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Project:
    """Savings project domain entity."""

    id: str
    name: str
    project_type: ProjectType
    target_amount: Decimal
    current_amount: Decimal
    priority: Priority
    created_at: datetime
    target_date: Optional[datetime] = None
    linked_account_id: Optional[str] = None


@dataclass(frozen=True)
class RecurringTemplate:
    """Recurring transaction template domain entity."""

    id: str
    name: str
    amount: Decimal
    transaction_type: TransactionType
    category_id: str
    frequency: Frequency
    start_date: datetime
    is_active: bool
    created_at: datetime
    from_account_id: Optional[str] = None
    to_account_id: Optional[str] = None
    end_date: Optional[datetime] = None
    last_processed: Optional[datetime] = None


@dataclass(frozen=True)
class LedgerState:
    """Snapshot of every collection held by the entity store."""

    accounts: tuple[Account, ...] = ()
    categories: tuple[Category, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    projects: tuple[Project, ...] = ()
    recurring_templates: tuple[RecurringTemplate, ...] = ()


@dataclass(frozen=True)
class MonthlyStats:
    """Income, expense and savings totals for a period."""

    income: Decimal
    expenses: Decimal
    savings: Decimal
    savings_rate: Decimal


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of one recurring scheduler pass."""

    created: tuple[Transaction, ...] = ()
    deactivated: tuple[str, ...] = ()
