"""Pydantic schemas for budget endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from finance_tracker.domain.models.enums import BudgetPeriod


class BudgetCreate(BaseModel):
    """Request schema for creating a budget."""

    amount: Decimal = Field(..., description="Limit in major units of the display currency")
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    category_id: Optional[int] = Field(
        default=None, description="Expense category; omit for an overall budget"
    )


class BudgetUpdateRequest(BaseModel):
    """Request schema for editing a budget (partial update)."""

    amount: Optional[Decimal] = None
    period: Optional[BudgetPeriod] = None


class BudgetResponse(BaseModel):
    """A budget with its spending in the current period."""

    budget_id: int
    category_id: Optional[int] = None
    period: BudgetPeriod
    amount: Decimal
    currency: str
    spent: Optional[Decimal] = None
    remaining: Optional[Decimal] = None
    period_start: datetime
    period_end: datetime
