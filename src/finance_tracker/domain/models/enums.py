"""Enumerations for domain models."""

from enum import Enum


class AccountKind(str, Enum):
    """Kinds of money accounts."""

    NORMAL = "normal"
    SAVINGS = "savings"
    BANK = "bank"
    CASH = "cash"
    CREDIT = "credit"


class TransactionType(str, Enum):
    """Direction of a ledger entry."""

    INCOME = "income"
    EXPENSE = "expense"


class CategoryType(str, Enum):
    """Which side of the ledger a category applies to."""

    INCOME = "income"
    EXPENSE = "expense"


class BudgetPeriod(str, Enum):
    """Window a budget's spending is measured over."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class RecurrenceInterval(str, Enum):
    """How often a recurring transaction falls due."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
