"""Pydantic schemas for category endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from finance_tracker.domain.models.enums import CategoryType


class CategoryCreate(BaseModel):
    """Request schema for creating a category."""

    name: str = Field(..., min_length=1, max_length=100)
    category_type: CategoryType
    color: Optional[str] = Field(default=None, max_length=50)
    icon: Optional[str] = Field(default=None, max_length=50)


class CategoryUpdateRequest(BaseModel):
    """Request schema for editing a category (partial update)."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    category_type: Optional[CategoryType] = None
    color: Optional[str] = Field(default=None, max_length=50)
    icon: Optional[str] = Field(default=None, max_length=50)


class CategoryResponse(BaseModel):
    """Response schema for a category."""

    model_config = {"from_attributes": True}

    category_id: int
    name: str
    category_type: CategoryType
    color: Optional[str] = None
    icon: Optional[str] = None
