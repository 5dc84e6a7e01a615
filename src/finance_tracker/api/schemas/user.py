"""Pydantic schemas for user endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Request schema for creating a user."""

    username: str = Field(..., min_length=1, max_length=100, description="Unique username")
    currency: Optional[str] = Field(
        default=None,
        min_length=3,
        max_length=3,
        description="Display currency; defaults to the configured default",
    )


class UserUpdate(BaseModel):
    """Request schema for changing the display currency."""

    currency: str = Field(..., min_length=3, max_length=3, description="ISO 4217 code")


class UserResponse(BaseModel):
    """Response schema for a user."""

    model_config = {"from_attributes": True}

    user_id: int
    username: str
    currency: str
    created_at: Optional[datetime] = None
