"""Domain models package."""

from finance_tracker.domain.models.enums import (
    AccountKind,
    TransactionType,
    CategoryType,
    BudgetPeriod,
    RecurrenceInterval,
)
from finance_tracker.domain.models.user import User
from finance_tracker.domain.models.account import Account
from finance_tracker.domain.models.transaction import Transaction
from finance_tracker.domain.models.category import Category
from finance_tracker.domain.models.exchange_rate import ExchangeRateSnapshot
from finance_tracker.domain.models.budget import Budget
from finance_tracker.domain.models.goal import Goal
from finance_tracker.domain.models.recurring import RecurringTransaction

__all__ = [
    "AccountKind",
    "TransactionType",
    "CategoryType",
    "BudgetPeriod",
    "RecurrenceInterval",
    "User",
    "Account",
    "Transaction",
    "Category",
    "ExchangeRateSnapshot",
    "Budget",
    "Goal",
    "RecurringTransaction",
]
