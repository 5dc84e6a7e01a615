"""Budget endpoints."""

from decimal import Decimal

from fastapi import APIRouter, Depends

from finance_tracker.api.deps import get_current_user_id, get_budget_service
from finance_tracker.api.schemas import BudgetCreate, BudgetUpdateRequest, BudgetResponse
from finance_tracker.core.exceptions import InvalidAmountError, NotFoundError
from finance_tracker.core.money import from_cents, to_cents_exact
from finance_tracker.domain.views import BudgetStatusView
from finance_tracker.services import BudgetService, BudgetUpdate

router = APIRouter(prefix="/budgets", tags=["budgets"])


def _cents(amount: Decimal) -> int:
    try:
        return to_cents_exact(amount)
    except ValueError:
        raise InvalidAmountError(amount)


def _to_response(status: BudgetStatusView) -> BudgetResponse:
    return BudgetResponse(
        budget_id=status.budget.budget_id,
        category_id=status.budget.category_id,
        period=status.budget.period,
        amount=from_cents(status.budget.amount),
        currency=status.currency,
        spent=from_cents(status.spent) if status.spent is not None else None,
        remaining=from_cents(status.remaining) if status.remaining is not None else None,
        period_start=status.period_start,
        period_end=status.period_end,
    )


def _status_of(service: BudgetService, user_id: int, budget_id: int) -> BudgetResponse:
    for status in service.budget_status(user_id):
        if status.budget.budget_id == budget_id:
            return _to_response(status)
    raise NotFoundError("Budget", budget_id)


@router.post("/", response_model=BudgetResponse, status_code=201)
def create_budget(
    data: BudgetCreate,
    user_id: int = Depends(get_current_user_id),
    service: BudgetService = Depends(get_budget_service),
) -> BudgetResponse:
    """Create a budget for an expense category, or an overall one."""
    budget = service.create_budget(
        user_id,
        amount=_cents(data.amount),
        period=data.period,
        category_id=data.category_id,
    )
    return _status_of(service, user_id, budget.budget_id)


@router.get("/", response_model=list[BudgetResponse])
def list_budgets(
    user_id: int = Depends(get_current_user_id),
    service: BudgetService = Depends(get_budget_service),
) -> list[BudgetResponse]:
    """List budgets with what has been spent in their current period."""
    return [_to_response(s) for s in service.budget_status(user_id)]


@router.get("/{budget_id}", response_model=BudgetResponse)
def get_budget(
    budget_id: int,
    user_id: int = Depends(get_current_user_id),
    service: BudgetService = Depends(get_budget_service),
) -> BudgetResponse:
    return _status_of(service, user_id, budget_id)


@router.patch("/{budget_id}", response_model=BudgetResponse)
def update_budget(
    budget_id: int,
    data: BudgetUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    service: BudgetService = Depends(get_budget_service),
) -> BudgetResponse:
    """Change a budget's amount or period."""
    patch = BudgetUpdate(
        amount=_cents(data.amount) if data.amount is not None else None,
        period=data.period,
    )
    service.update_budget(user_id, budget_id, patch)
    return _status_of(service, user_id, budget_id)


@router.delete("/{budget_id}", status_code=204)
def delete_budget(
    budget_id: int,
    user_id: int = Depends(get_current_user_id),
    service: BudgetService = Depends(get_budget_service),
) -> None:
    service.delete_budget(user_id, budget_id)
