"""Repository layer - data access abstractions and implementations."""

from finance_tracker.repositories.protocols import (
    UserRepository,
    AccountRepository,
    TransactionRepository,
    CategoryRepository,
    ExchangeRateRepository,
    BudgetRepository,
    GoalRepository,
    RecurringTransactionRepository,
)

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
