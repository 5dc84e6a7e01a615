"""Service layer - business logic orchestration."""

from finance_tracker.services.currency_converter import convert, conversion_rate
from finance_tracker.services.exchange_rate_service import ExchangeRateService
from finance_tracker.services.user_service import UserService
from finance_tracker.services.ledger_service import LedgerService, AccountUpdate, TransactionCreate
from finance_tracker.services.category_service import CategoryService, CategoryUpdate
from finance_tracker.services.transfer_service import TransferService, FundsPolicy
from finance_tracker.services.report_service import ReportService
from finance_tracker.services.budget_service import BudgetService, BudgetUpdate
from finance_tracker.services.goal_service import GoalService, GoalUpdate
from finance_tracker.services.recurring_service import (
    RecurringService,
    RecurringCreate,
    RecurringUpdate,
)

__all__ = [
    "convert",
    "conversion_rate",
    "ExchangeRateService",
    "UserService",
    "LedgerService",
    "AccountUpdate",
    "TransactionCreate",
    "CategoryService",
    "CategoryUpdate",
    "TransferService",
    "FundsPolicy",
    "ReportService",
    "BudgetService",
    "BudgetUpdate",
    "GoalService",
    "GoalUpdate",
    "RecurringService",
    "RecurringCreate",
    "RecurringUpdate",
]
