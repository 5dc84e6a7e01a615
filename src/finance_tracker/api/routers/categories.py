"""Category endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from finance_tracker.api.deps import get_current_user_id, get_category_service
from finance_tracker.api.schemas import CategoryCreate, CategoryUpdateRequest, CategoryResponse
from finance_tracker.domain.models import CategoryType
from finance_tracker.services import CategoryService, CategoryUpdate

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("/", response_model=CategoryResponse, status_code=201)
def create_category(
    data: CategoryCreate,
    user_id: int = Depends(get_current_user_id),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Create a category."""
    category = service.create_category(
        user_id,
        name=data.name,
        category_type=data.category_type,
        color=data.color,
        icon=data.icon,
    )
    return CategoryResponse.model_validate(category)


@router.get("/", response_model=list[CategoryResponse])
def list_categories(
    category_type: Optional[CategoryType] = Query(None, description="income or expense"),
    user_id: int = Depends(get_current_user_id),
    service: CategoryService = Depends(get_category_service),
) -> list[CategoryResponse]:
    """List the user's categories."""
    return [
        CategoryResponse.model_validate(c)
        for c in service.list_categories(user_id, category_type=category_type)
    ]


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    data: CategoryUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Edit a category."""
    patch = CategoryUpdate(
        name=data.name,
        category_type=data.category_type,
        color=data.color,
        icon=data.icon,
    )
    return CategoryResponse.model_validate(service.update_category(user_id, category_id, patch))


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: int,
    user_id: int = Depends(get_current_user_id),
    service: CategoryService = Depends(get_category_service),
) -> None:
    """Delete a category; its transactions keep existing uncategorised."""
    service.delete_category(user_id, category_id)
