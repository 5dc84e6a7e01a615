"""SQLAlchemy repository implementations."""

from finance_tracker.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    atomic,
    Base,
)
from finance_tracker.repositories.sqlalchemy.user_repo import SqlAlchemyUserRepository
from finance_tracker.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from finance_tracker.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from finance_tracker.repositories.sqlalchemy.category_repo import SqlAlchemyCategoryRepository
from finance_tracker.repositories.sqlalchemy.exchange_rate_repo import (
    SqlAlchemyExchangeRateRepository,
)
from finance_tracker.repositories.sqlalchemy.budget_repo import SqlAlchemyBudgetRepository
from finance_tracker.repositories.sqlalchemy.goal_repo import SqlAlchemyGoalRepository
from finance_tracker.repositories.sqlalchemy.recurring_repo import (
    SqlAlchemyRecurringTransactionRepository,
)

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "atomic",
    "Base",
    "SqlAlchemyUserRepository",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyCategoryRepository",
    "SqlAlchemyExchangeRateRepository",
    "SqlAlchemyBudgetRepository",
    "SqlAlchemyGoalRepository",
    "SqlAlchemyRecurringTransactionRepository",
]
