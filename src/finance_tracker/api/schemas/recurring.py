"""Pydantic schemas for recurring transaction endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from finance_tracker.domain.models.enums import RecurrenceInterval, TransactionType


class RecurringCreateRequest(BaseModel):
    """Request schema for a recurring income or expense."""

    account_id: int
    txn_type: TransactionType
    amount: Decimal = Field(..., description="Positive amount in major units")
    interval: RecurrenceInterval
    start_date: datetime = Field(..., description="First due date; naive values are UTC")
    description: str = Field(default="", max_length=500)
    category_id: Optional[int] = None


class RecurringUpdateRequest(BaseModel):
    """Request schema for editing a recurring definition (partial update)."""

    amount: Optional[Decimal] = None
    description: Optional[str] = Field(default=None, max_length=500)
    interval: Optional[RecurrenceInterval] = None
    next_run_date: Optional[datetime] = None
    category_id: Optional[int] = None
    active: Optional[bool] = None


class RecurringResponse(BaseModel):
    """Response schema for a recurring definition."""

    recurring_id: int
    account_id: int
    txn_type: TransactionType
    amount: Decimal
    interval: RecurrenceInterval
    next_run_date: datetime
    description: str
    category_id: Optional[int] = None
    active: bool
    created_at: Optional[datetime] = None


class UpcomingRunsResponse(BaseModel):
    """Next due dates of a recurring definition."""

    recurring_id: int
    dates: list[datetime]
