"""Pydantic schemas for savings goal endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class GoalCreate(BaseModel):
    """Request schema for creating a goal."""

    name: str = Field(..., min_length=1, max_length=100)
    target_amount: Decimal = Field(..., description="Target in major units")
    current_amount: Decimal = Field(default=Decimal("0"), description="Saved so far")
    currency: Optional[str] = Field(
        default=None, min_length=3, max_length=3, description="Defaults to the display currency"
    )
    deadline: Optional[datetime] = None
    color: Optional[str] = Field(default=None, max_length=50)
    icon: Optional[str] = Field(default=None, max_length=50)


class GoalUpdateRequest(BaseModel):
    """Request schema for editing a goal (partial update)."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    target_amount: Optional[Decimal] = None
    current_amount: Optional[Decimal] = None
    deadline: Optional[datetime] = None
    color: Optional[str] = Field(default=None, max_length=50)
    icon: Optional[str] = Field(default=None, max_length=50)


class GoalContribution(BaseModel):
    """Money set aside towards a goal."""

    amount: Decimal = Field(..., description="Positive amount in major units")


class GoalResponse(BaseModel):
    """Response schema for a goal."""

    goal_id: int
    name: str
    currency: str
    target_amount: Decimal
    current_amount: Decimal
    progress_percent: int
    is_reached: bool
    deadline: Optional[datetime] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    created_at: Optional[datetime] = None
