"""Pydantic schemas for transaction endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from finance_tracker.domain.models.enums import TransactionType


class TransactionCreateRequest(BaseModel):
    """Request schema for recording income or an expense."""

    account_id: int = Field(..., description="Account ID")
    txn_type: TransactionType = Field(..., description="income or expense")
    amount: Decimal = Field(..., description="Positive amount in major units")
    description: str = Field(default="", max_length=500)
    category_id: Optional[int] = None
    created_at: Optional[datetime] = Field(
        default=None,
        description="When it happened; naive values are UTC; defaults to now",
    )


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    txn_id: int
    account_id: int
    txn_type: TransactionType
    amount: Decimal
    currency: Optional[str] = None
    converted_amount: Optional[Decimal] = None
    converted_currency: Optional[str] = None
    description: str
    category_id: Optional[int] = None
    transfer_id: Optional[str] = None
    created_at: Optional[datetime] = None


class TransactionListResponse(BaseModel):
    """Response schema for listing transactions."""

    transactions: list[TransactionResponse]
    count: int


class TransactionDeleteResponse(BaseModel):
    """IDs removed by a delete (both legs for a transfer)."""

    deleted_ids: list[int]
