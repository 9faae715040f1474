"""SQLAlchemy models for ledgerkit database.

References between tables are plain string columns, not foreign keys: the
ledger tolerates transactions pointing at deleted accounts or categories.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Integer,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()

# Wide enough for crypto amounts
AMOUNT = Numeric(20, 8)


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    account_type = Column(String, nullable=False)
    opening_balance = Column(AMOUNT, nullable=False)
    currency = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, nullable=False)


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    category_type = Column(String, nullable=False)
    group = Column(String, nullable=False)
    color = Column(String, nullable=False)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    date = Column(DateTime, nullable=False)
    amount = Column(AMOUNT, nullable=False)
    transaction_type = Column(String, nullable=False)
    category_id = Column(String, nullable=False)
    from_account_id = Column(String, nullable=True)
    to_account_id = Column(String, nullable=True)
    project_id = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False)


class Project(Base):
    """Savings project model."""

    __tablename__ = "projects"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    project_type = Column(String, nullable=False)
    target_amount = Column(AMOUNT, nullable=False)
    current_amount = Column(AMOUNT, nullable=False)
    priority = Column(String, nullable=False)
    target_date = Column(DateTime, nullable=True)
    linked_account_id = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False)


class RecurringTemplate(Base):
    """Recurring transaction template model."""

    __tablename__ = "recurring_templates"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    amount = Column(AMOUNT, nullable=False)
    transaction_type = Column(String, nullable=False)
    category_id = Column(String, nullable=False)
    from_account_id = Column(String, nullable=True)
    to_account_id = Column(String, nullable=True)
    frequency = Column(String, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    last_processed = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
