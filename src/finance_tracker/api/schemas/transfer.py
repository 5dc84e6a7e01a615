"""Pydantic schemas for transfer endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class TransferRequest(BaseModel):
    """Request schema for moving money between two accounts."""

    from_account_id: int
    to_account_id: int
    amount: Decimal = Field(..., description="Amount in the source account's currency")
    description: Optional[str] = Field(default=None, max_length=500)


class TransferResponse(BaseModel):
    """Response schema for a committed transfer."""

    transfer_id: str
    debit_transaction_id: int
    credit_transaction_id: int
    from_account_id: int
    to_account_id: int
    debited_amount: Decimal
    credited_amount: Decimal
    from_currency: str
    to_currency: str
    rate: Decimal
    from_balance: Decimal
    to_balance: Decimal
