"""Savings goal endpoints."""

from decimal import Decimal

from fastapi import APIRouter, Depends

from finance_tracker.api.deps import get_current_user_id, get_goal_service
from finance_tracker.api.schemas import (
    GoalCreate,
    GoalUpdateRequest,
    GoalContribution,
    GoalResponse,
)
from finance_tracker.core.exceptions import InvalidAmountError
from finance_tracker.core.money import from_cents, to_cents_exact
from finance_tracker.domain.models import Goal
from finance_tracker.services import GoalService, GoalUpdate

router = APIRouter(prefix="/goals", tags=["goals"])


def _cents(amount: Decimal) -> int:
    try:
        return to_cents_exact(amount)
    except ValueError:
        raise InvalidAmountError(amount)


def _to_response(goal: Goal) -> GoalResponse:
    return GoalResponse(
        goal_id=goal.goal_id,
        name=goal.name,
        currency=goal.currency,
        target_amount=from_cents(goal.target_amount),
        current_amount=from_cents(goal.current_amount),
        progress_percent=goal.progress_percent,
        is_reached=goal.is_reached,
        deadline=goal.deadline,
        color=goal.color,
        icon=goal.icon,
        created_at=goal.created_at,
    )


@router.post("/", response_model=GoalResponse, status_code=201)
def create_goal(
    data: GoalCreate,
    user_id: int = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
) -> GoalResponse:
    """Create a savings goal."""
    goal = service.create_goal(
        user_id,
        name=data.name,
        target_amount=_cents(data.target_amount),
        current_amount=_cents(data.current_amount),
        currency=data.currency,
        deadline=data.deadline,
        color=data.color,
        icon=data.icon,
    )
    return _to_response(goal)


@router.get("/", response_model=list[GoalResponse])
def list_goals(
    user_id: int = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
) -> list[GoalResponse]:
    """List the user's goals, newest first."""
    return [_to_response(g) for g in service.list_goals(user_id)]


@router.get("/{goal_id}", response_model=GoalResponse)
def get_goal(
    goal_id: int,
    user_id: int = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
) -> GoalResponse:
    return _to_response(service.get_goal(user_id, goal_id))


@router.patch("/{goal_id}", response_model=GoalResponse)
def update_goal(
    goal_id: int,
    data: GoalUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
) -> GoalResponse:
    """Edit a goal."""
    patch = GoalUpdate(
        name=data.name,
        target_amount=_cents(data.target_amount) if data.target_amount is not None else None,
        current_amount=_cents(data.current_amount) if data.current_amount is not None else None,
        deadline=data.deadline,
        color=data.color,
        icon=data.icon,
    )
    return _to_response(service.update_goal(user_id, goal_id, patch))


@router.post("/{goal_id}/contributions", response_model=GoalResponse)
def contribute(
    goal_id: int,
    data: GoalContribution,
    user_id: int = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
) -> GoalResponse:
    """Add money to what has been saved towards a goal."""
    return _to_response(service.contribute(user_id, goal_id, _cents(data.amount)))


@router.delete("/{goal_id}", status_code=204)
def delete_goal(
    goal_id: int,
    user_id: int = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
) -> None:
    service.delete_goal(user_id, goal_id)
