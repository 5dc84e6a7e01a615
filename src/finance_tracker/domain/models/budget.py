"""Budget domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from finance_tracker.domain.models.enums import BudgetPeriod


@dataclass
class Budget:
    """
    Spending limit for one period, in the owner's display currency.

    A budget without a category covers all spending. A user has at most one
    budget per category, and at most one overall budget.
    """

    budget_id: Optional[int]
    user_id: int
    amount: int
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    category_id: Optional[int] = None
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.period, str):
            self.period = BudgetPeriod(self.period)
