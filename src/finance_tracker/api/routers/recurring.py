"""Recurring transaction endpoints. Definitions only; nothing here books entries."""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from finance_tracker.api.deps import get_current_user_id, get_recurring_service
from finance_tracker.api.schemas import (
    RecurringCreateRequest,
    RecurringUpdateRequest,
    RecurringResponse,
    UpcomingRunsResponse,
)
from finance_tracker.core.exceptions import InvalidAmountError
from finance_tracker.core.money import from_cents, to_cents_exact
from finance_tracker.domain.models import RecurringTransaction
from finance_tracker.services import RecurringService, RecurringCreate, RecurringUpdate

router = APIRouter(prefix="/recurring", tags=["recurring"])


def _cents(amount: Decimal) -> int:
    try:
        return to_cents_exact(amount)
    except ValueError:
        raise InvalidAmountError(amount)


def _to_response(recurring: RecurringTransaction) -> RecurringResponse:
    return RecurringResponse(
        recurring_id=recurring.recurring_id,
        account_id=recurring.account_id,
        txn_type=recurring.txn_type,
        amount=from_cents(recurring.amount),
        interval=recurring.interval,
        next_run_date=recurring.next_run_date,
        description=recurring.description,
        category_id=recurring.category_id,
        active=recurring.active,
        created_at=recurring.created_at,
    )


@router.post("/", response_model=RecurringResponse, status_code=201)
def create_recurring(
    data: RecurringCreateRequest,
    user_id: int = Depends(get_current_user_id),
    service: RecurringService = Depends(get_recurring_service),
) -> RecurringResponse:
    """Store a recurring income or expense."""
    recurring = service.create_recurring(
        user_id,
        RecurringCreate(
            account_id=data.account_id,
            amount=_cents(data.amount),
            txn_type=data.txn_type,
            interval=data.interval,
            start_date=data.start_date,
            description=data.description,
            category_id=data.category_id,
        ),
    )
    return _to_response(recurring)


@router.get("/", response_model=list[RecurringResponse])
def list_recurring(
    active_only: bool = Query(False, description="Hide paused definitions"),
    user_id: int = Depends(get_current_user_id),
    service: RecurringService = Depends(get_recurring_service),
) -> list[RecurringResponse]:
    """List recurring definitions, newest first."""
    return [_to_response(r) for r in service.list_recurring(user_id, active_only=active_only)]


@router.get("/{recurring_id}", response_model=RecurringResponse)
def get_recurring(
    recurring_id: int,
    user_id: int = Depends(get_current_user_id),
    service: RecurringService = Depends(get_recurring_service),
) -> RecurringResponse:
    return _to_response(service.get_recurring(user_id, recurring_id))


@router.get("/{recurring_id}/upcoming", response_model=UpcomingRunsResponse)
def upcoming_runs(
    recurring_id: int,
    count: int = Query(3, description="How many due dates to list"),
    user_id: int = Depends(get_current_user_id),
    service: RecurringService = Depends(get_recurring_service),
) -> UpcomingRunsResponse:
    """Next due dates of a definition."""
    return UpcomingRunsResponse(
        recurring_id=recurring_id,
        dates=service.upcoming(user_id, recurring_id, count=count),
    )


@router.patch("/{recurring_id}", response_model=RecurringResponse)
def update_recurring(
    recurring_id: int,
    data: RecurringUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    service: RecurringService = Depends(get_recurring_service),
) -> RecurringResponse:
    """Edit or pause a recurring definition."""
    patch = RecurringUpdate(
        amount=_cents(data.amount) if data.amount is not None else None,
        description=data.description,
        interval=data.interval,
        next_run_date=data.next_run_date,
        category_id=data.category_id,
        active=data.active,
    )
    return _to_response(service.update_recurring(user_id, recurring_id, patch))


@router.delete("/{recurring_id}", status_code=204)
def delete_recurring(
    recurring_id: int,
    user_id: int = Depends(get_current_user_id),
    service: RecurringService = Depends(get_recurring_service),
) -> None:
    service.delete_recurring(user_id, recurring_id)
