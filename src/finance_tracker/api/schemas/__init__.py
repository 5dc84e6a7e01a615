"""Pydantic schemas for API request/response."""

from finance_tracker.api.schemas.user import UserCreate, UserUpdate, UserResponse
from finance_tracker.api.schemas.account import (
    AccountCreate,
    AccountUpdateRequest,
    AccountResponse,
    AccountListResponse,
    AccountBalanceResponse,
    AccountSummaryResponse,
)
from finance_tracker.api.schemas.transaction import (
    TransactionCreateRequest,
    TransactionResponse,
    TransactionListResponse,
    TransactionDeleteResponse,
)
from finance_tracker.api.schemas.transfer import TransferRequest, TransferResponse
from finance_tracker.api.schemas.category import (
    CategoryCreate,
    CategoryUpdateRequest,
    CategoryResponse,
)
from finance_tracker.api.schemas.exchange_rate import ExchangeRatesResponse
from finance_tracker.api.schemas.report import CategoryTotalResponse, MonthlyRecapResponse
from finance_tracker.api.schemas.budget import BudgetCreate, BudgetUpdateRequest, BudgetResponse
from finance_tracker.api.schemas.goal import (
    GoalCreate,
    GoalUpdateRequest,
    GoalContribution,
    GoalResponse,
)
from finance_tracker.api.schemas.recurring import (
    RecurringCreateRequest,
    RecurringUpdateRequest,
    RecurringResponse,
    UpcomingRunsResponse,
)

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "AccountCreate",
    "AccountUpdateRequest",
    "AccountResponse",
    "AccountListResponse",
    "AccountBalanceResponse",
    "AccountSummaryResponse",
    "TransactionCreateRequest",
    "TransactionResponse",
    "TransactionListResponse",
    "TransactionDeleteResponse",
    "TransferRequest",
    "TransferResponse",
    "CategoryCreate",
    "CategoryUpdateRequest",
    "CategoryResponse",
    "ExchangeRatesResponse",
    "CategoryTotalResponse",
    "MonthlyRecapResponse",
    "BudgetCreate",
    "BudgetUpdateRequest",
    "BudgetResponse",
    "GoalCreate",
    "GoalUpdateRequest",
    "GoalContribution",
    "GoalResponse",
    "RecurringCreateRequest",
    "RecurringUpdateRequest",
    "RecurringResponse",
    "UpcomingRunsResponse",
]
