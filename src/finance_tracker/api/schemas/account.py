"""Pydantic schemas for account endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from finance_tracker.domain.models.enums import AccountKind


class AccountCreate(BaseModel):
    """Request schema for creating an account."""

    name: str = Field(..., min_length=1, max_length=255, description="Account name")
    currency: Optional[str] = Field(
        default=None,
        min_length=3,
        max_length=3,
        description="ISO 4217 code; defaults to the user's display currency",
    )
    balance: Decimal = Field(default=Decimal("0"), description="Opening balance in major units")
    kind: AccountKind = Field(default=AccountKind.NORMAL, description="Account kind")
    color: Optional[str] = Field(default=None, max_length=50)


class AccountUpdateRequest(BaseModel):
    """Request schema for editing an account (partial update)."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    kind: Optional[AccountKind] = None
    color: Optional[str] = Field(default=None, max_length=50)


class AccountResponse(BaseModel):
    """Response schema for a single account."""

    account_id: int
    name: str
    currency: str
    balance: Decimal
    kind: AccountKind
    color: str
    created_at: Optional[datetime] = None


class AccountListResponse(BaseModel):
    """Response schema for listing accounts."""

    accounts: list[AccountResponse]
    count: int


class AccountBalanceResponse(BaseModel):
    """One line of the account summary."""

    account_id: int
    name: str
    currency: str
    balance: Decimal
    converted_balance: Decimal


class AccountSummaryResponse(BaseModel):
    """All balances aggregated into the display currency."""

    currency: str
    total_balance: Decimal
    account_count: int
    accounts: list[AccountBalanceResponse]
    rates_as_of: Optional[datetime] = None
