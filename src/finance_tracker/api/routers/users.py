"""User endpoints."""

from fastapi import APIRouter, Depends

from finance_tracker.api.deps import get_current_user_id, get_user_service
from finance_tracker.api.schemas import UserCreate, UserUpdate, UserResponse
from finance_tracker.services import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserResponse, status_code=201)
def create_user(
    data: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Create a user."""
    user = service.create_user(data.username, currency=data.currency)
    return UserResponse.model_validate(user)


@router.get("/me", response_model=UserResponse)
def get_me(
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Get the acting user."""
    return UserResponse.model_validate(service.get_user(user_id))


@router.patch("/me", response_model=UserResponse)
def update_me(
    data: UserUpdate,
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Change the acting user's display currency."""
    return UserResponse.model_validate(service.update_currency(user_id, data.currency))
