"""Repository protocol definitions (interfaces)."""

from finance_tracker.repositories.protocols.user_repo import UserRepository
from finance_tracker.repositories.protocols.account_repo import AccountRepository
from finance_tracker.repositories.protocols.transaction_repo import TransactionRepository
from finance_tracker.repositories.protocols.category_repo import CategoryRepository
from finance_tracker.repositories.protocols.exchange_rate_repo import ExchangeRateRepository
from finance_tracker.repositories.protocols.budget_repo import BudgetRepository
from finance_tracker.repositories.protocols.goal_repo import GoalRepository
from finance_tracker.repositories.protocols.recurring_repo import RecurringTransactionRepository

__all__ = [
    "UserRepository",
    "AccountRepository",
    "TransactionRepository",
    "CategoryRepository",
    "ExchangeRateRepository",
    "BudgetRepository",
    "GoalRepository",
    "RecurringTransactionRepository",
]
