"""Pydantic schemas for exchange rate endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class ExchangeRatesResponse(BaseModel):
    """The current rate snapshot."""

    base_currency: str
    rates: dict[str, Decimal]
    fetched_at: datetime
    source_updated_at: Optional[datetime] = None
