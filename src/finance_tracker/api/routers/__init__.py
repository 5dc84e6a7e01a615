"""API routers package."""

from finance_tracker.api.routers.users import router as users_router
from finance_tracker.api.routers.accounts import router as accounts_router
from finance_tracker.api.routers.transactions import router as transactions_router
from finance_tracker.api.routers.transfers import router as transfers_router
from finance_tracker.api.routers.categories import router as categories_router
from finance_tracker.api.routers.exchange_rates import router as exchange_rates_router
from finance_tracker.api.routers.reports import router as reports_router
from finance_tracker.api.routers.budgets import router as budgets_router
from finance_tracker.api.routers.goals import router as goals_router
from finance_tracker.api.routers.recurring import router as recurring_router

__all__ = [
    "users_router",
    "accounts_router",
    "transactions_router",
    "transfers_router",
    "categories_router",
    "exchange_rates_router",
    "reports_router",
    "budgets_router",
    "goals_router",
    "recurring_router",
]
