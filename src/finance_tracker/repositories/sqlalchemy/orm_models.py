"""SQLAlchemy ORM model definitions."""

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from finance_tracker.core.timezone import now_utc, to_naive_utc
from finance_tracker.repositories.sqlalchemy.database import Base
from finance_tracker.domain.models.enums import (
    AccountKind,
    BudgetPeriod,
    CategoryType,
    RecurrenceInterval,
    TransactionType,
)


def _utcnow() -> datetime:
    return to_naive_utc(now_utc())


class UserORM(Base):
    """SQLAlchemy model for User."""

    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    created_at = Column(DateTime, nullable=False, default=_utcnow)

    accounts = relationship("AccountORM", back_populates="user")


class AccountORM(Base):
    """SQLAlchemy model for Account. Balance is in integer minor units."""

    __tablename__ = "accounts"

    account_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    balance = Column(BigInteger, nullable=False, default=0)
    kind = Column(SqlEnum(AccountKind), nullable=False, default=AccountKind.NORMAL)
    color = Column(String(50), nullable=False, default="bg-primary")
    created_at = Column(DateTime, nullable=False, default=_utcnow)

    user = relationship("UserORM", back_populates="accounts")
    transactions = relationship("TransactionORM", back_populates="account")


class CategoryORM(Base):
    """SQLAlchemy model for Category."""

    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    category_type = Column(SqlEnum(CategoryType), nullable=False)
    color = Column(String(50), nullable=True)
    icon = Column(String(50), nullable=True)


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (ledger entry)."""

    __tablename__ = "transactions"

    txn_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.account_id"), nullable=False, index=True)
    amount = Column(BigInteger, nullable=False)
    txn_type = Column(SqlEnum(TransactionType), nullable=False)
    description = Column(Text, nullable=False, default="")
    category_id = Column(Integer, ForeignKey("categories.category_id"), nullable=True)
    transfer_id = Column(String(36), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow)

    account = relationship("AccountORM", back_populates="transactions")


class ExchangeRateORM(Base):
    """One row per quoted currency of the persisted rate snapshot."""

    __tablename__ = "exchange_rates"

    currency = Column(String(3), primary_key=True)
    base_currency = Column(String(3), nullable=False, default="USD")
    rate = Column(Numeric(precision=20, scale=10), nullable=False)
    source_updated_at = Column(DateTime, nullable=True)
    updated_at = Column(DateTime, nullable=False, default=_utcnow)


class BudgetORM(Base):
    """SQLAlchemy model for Budget. A NULL category means all spending."""

    __tablename__ = "budgets"

    budget_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.category_id"), nullable=True)
    amount = Column(BigInteger, nullable=False)
    period = Column(SqlEnum(BudgetPeriod), nullable=False, default=BudgetPeriod.MONTHLY)
    created_at = Column(DateTime, nullable=False, default=_utcnow)


class GoalORM(Base):
    """SQLAlchemy model for Goal."""

    __tablename__ = "goals"

    goal_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    target_amount = Column(BigInteger, nullable=False)
    current_amount = Column(BigInteger, nullable=False, default=0)
    deadline = Column(DateTime, nullable=True)
    color = Column(String(50), nullable=True)
    icon = Column(String(50), nullable=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow)


class RecurringTransactionORM(Base):
    """SQLAlchemy model for a recurring transaction definition."""

    __tablename__ = "recurring_transactions"

    recurring_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.account_id"), nullable=False, index=True)
    amount = Column(BigInteger, nullable=False)
    txn_type = Column(SqlEnum(TransactionType), nullable=False)
    description = Column(Text, nullable=False, default="")
    category_id = Column(Integer, ForeignKey("categories.category_id"), nullable=True)
    interval = Column(SqlEnum(RecurrenceInterval), nullable=False)
    next_run_date = Column(DateTime, nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow)
