"""Domain layer - pure business models with no external dependencies."""

from finance_tracker.domain.models import (
    AccountKind,
    TransactionType,
    CategoryType,
    User,
    Account,
    Transaction,
    Category,
    ExchangeRateSnapshot,
)

__all__ = [
    "AccountKind",
    "TransactionType",
    "CategoryType",
    "User",
    "Account",
    "Transaction",
    "Category",
    "ExchangeRateSnapshot",
]
