"""View models for service outputs."""

from finance_tracker.domain.views.reports import (
    TransferResult,
    AccountBalanceView,
    AccountSummaryView,
    ConvertedTransactionView,
    CategoryTotal,
    MonthlyRecapView,
    SpendingView,
    BudgetStatusView,
)

__all__ = [
    "TransferResult",
    "AccountBalanceView",
    "AccountSummaryView",
    "ConvertedTransactionView",
    "CategoryTotal",
    "MonthlyRecapView",
    "SpendingView",
    "BudgetStatusView",
]
