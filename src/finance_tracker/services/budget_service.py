"""Budget service: spending limits and how much of them is used."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.core.exceptions import NotFoundError, RateUnavailableError, ValidationError
from finance_tracker.core.money import require_amount
from finance_tracker.core.timezone import month_bounds, now_utc, week_bounds, year_bounds
from finance_tracker.domain.models import Budget, BudgetPeriod, CategoryType
from finance_tracker.domain.views import BudgetStatusView
from finance_tracker.repositories.protocols import (
    BudgetRepository,
    CategoryRepository,
    UserRepository,
)
from finance_tracker.repositories.sqlalchemy.database import atomic
from finance_tracker.services.report_service import ReportService

logger = logging.getLogger(__name__)


@dataclass
class BudgetUpdate:
    """Partial update data for editing a budget."""

    amount: Optional[int] = None
    period: Optional[BudgetPeriod] = None


def period_bounds(period: BudgetPeriod, at: datetime) -> tuple[datetime, datetime]:
    """[start, end) of the budget period containing ``at`` (UTC calendar)."""
    if period == BudgetPeriod.WEEKLY:
        return week_bounds(at)
    if period == BudgetPeriod.YEARLY:
        return year_bounds(at.year)
    return month_bounds(at.year, at.month)


class BudgetService:
    """
    Service for a user's budgets.

    Budget amounts are in the user's display currency. Spending is measured
    over the budget's current period, counts expenses only (transfer legs are
    internal moves) and is converted through ReportService.
    """

    def __init__(
        self,
        db: Session,
        user_repo: UserRepository,
        budget_repo: BudgetRepository,
        category_repo: CategoryRepository,
        reports: ReportService,
    ):
        self._db = db
        self._user_repo = user_repo
        self._budget_repo = budget_repo
        self._category_repo = category_repo
        self._reports = reports

    def create_budget(
        self,
        user_id: int,
        amount: int,
        period: BudgetPeriod = BudgetPeriod.MONTHLY,
        category_id: Optional[int] = None,
    ) -> Budget:
        """
        Create a budget for one expense category, or an overall one.

        Raises:
            InvalidAmountError: amount not a positive whole number of minor units
            NotFoundError: category missing or owned by another user
            ValidationError: income category, or a budget for it already exists
        """
        amount = require_amount(amount)
        if category_id is not None:
            category = self._category_repo.get_by_id(category_id, user_id=user_id)
            if not category:
                raise NotFoundError("Category", category_id)
            if category.category_type != CategoryType.EXPENSE:
                raise ValidationError(f"Category '{category.name}' is not an expense category")
        if self._budget_repo.get_by_category(user_id, category_id):
            target = f"category {category_id}" if category_id is not None else "overall spending"
            raise ValidationError(f"A budget for {target} already exists")

        budget = Budget(
            budget_id=None,
            user_id=user_id,
            amount=amount,
            period=BudgetPeriod(period),
            category_id=category_id,
            created_at=now_utc(),
        )
        with atomic(self._db):
            return self._budget_repo.create(budget)

    def get_budget(self, user_id: int, budget_id: int) -> Budget:
        """Get one of the user's budgets."""
        budget = self._budget_repo.get_by_id(budget_id, user_id=user_id)
        if not budget:
            raise NotFoundError("Budget", budget_id)
        return budget

    def list_budgets(self, user_id: int) -> list[Budget]:
        return self._budget_repo.list_by_user(user_id)

    def budget_status(self, user_id: int, at: Optional[datetime] = None) -> list[BudgetStatusView]:
        """
        Every budget with what was spent in its period containing ``at`` (default now).

        Periods sharing a window are measured with one query. When rates are
        missing the budgets are still listed with ``spent`` left unknown.
        """
        user = self._user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        at = at or now_utc()

        statuses = []
        spending_by_window = {}
        for budget in self._budget_repo.list_by_user(user_id):
            start, end = period_bounds(budget.period, at)
            if (start, end) not in spending_by_window:
                try:
                    spending_by_window[(start, end)] = self._reports.spending_between(
                        user_id, start, end
                    )
                except RateUnavailableError as exc:
                    logger.warning("Budget spending unknown for user %s: %s", user_id, exc.message)
                    spending_by_window[(start, end)] = None

            status = BudgetStatusView(
                budget=budget,
                currency=user.currency,
                period_start=start,
                period_end=end,
            )
            spending = spending_by_window[(start, end)]
            if spending is not None:
                if budget.category_id is None:
                    status.spent = spending.total
                else:
                    status.spent = spending.by_category.get(budget.category_id, 0)
                status.remaining = budget.amount - status.spent
            statuses.append(status)
        return statuses

    def update_budget(self, user_id: int, budget_id: int, patch: BudgetUpdate) -> Budget:
        """Change a budget's amount or period; its category is fixed."""
        budget = self.get_budget(user_id, budget_id)
        if patch.amount is not None:
            budget.amount = require_amount(patch.amount)
        if patch.period is not None:
            budget.period = BudgetPeriod(patch.period)
        with atomic(self._db):
            return self._budget_repo.update(budget)

    def delete_budget(self, user_id: int, budget_id: int) -> None:
        self.get_budget(user_id, budget_id)
        with atomic(self._db):
            self._budget_repo.delete(budget_id)
