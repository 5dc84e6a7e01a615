"""Pydantic schemas for report endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from finance_tracker.api.schemas.transaction import TransactionResponse


class CategoryTotalResponse(BaseModel):
    """Spending attributed to one category."""

    category_id: int
    name: str
    amount: Decimal
    color: Optional[str] = None
    icon: Optional[str] = None


class MonthlyRecapResponse(BaseModel):
    """Income and spending for one month in the display currency."""

    year: int
    month: int
    currency: str
    total_income: Decimal
    total_spent: Decimal
    transaction_count: int
    top_category: Optional[CategoryTotalResponse] = None
    biggest_expense: Optional[TransactionResponse] = None
    last_month_spent: Decimal
    percentage_change: int
