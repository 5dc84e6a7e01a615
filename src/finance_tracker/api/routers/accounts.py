"""Account management endpoints."""

from fastapi import APIRouter, Depends

from finance_tracker.api.deps import get_current_user_id, get_ledger_service, get_report_service
from finance_tracker.api.schemas import (
    AccountCreate,
    AccountUpdateRequest,
    AccountResponse,
    AccountListResponse,
    AccountBalanceResponse,
    AccountSummaryResponse,
)
from finance_tracker.core.exceptions import InvalidAmountError
from finance_tracker.core.money import from_cents, to_cents_exact
from finance_tracker.domain.models import Account
from finance_tracker.services import LedgerService, ReportService, AccountUpdate

router = APIRouter(prefix="/accounts", tags=["accounts"])


def _to_response(account: Account) -> AccountResponse:
    return AccountResponse(
        account_id=account.account_id,
        name=account.name,
        currency=account.currency,
        balance=from_cents(account.balance),
        kind=account.kind,
        color=account.color,
        created_at=account.created_at,
    )


@router.post("/", response_model=AccountResponse, status_code=201)
def create_account(
    data: AccountCreate,
    user_id: int = Depends(get_current_user_id),
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """Create a new account."""
    try:
        balance = to_cents_exact(data.balance)
    except ValueError:
        raise InvalidAmountError(data.balance)
    account = service.create_account(
        user_id,
        name=data.name,
        currency=data.currency,
        balance=balance,
        kind=data.kind,
        color=data.color,
    )
    return _to_response(account)


@router.get("/", response_model=AccountListResponse)
def list_accounts(
    user_id: int = Depends(get_current_user_id),
    service: LedgerService = Depends(get_ledger_service),
) -> AccountListResponse:
    """List the user's accounts."""
    accounts = service.list_accounts(user_id)
    return AccountListResponse(
        accounts=[_to_response(a) for a in accounts],
        count=len(accounts),
    )


@router.get("/summary", response_model=AccountSummaryResponse)
def get_summary(
    user_id: int = Depends(get_current_user_id),
    reports: ReportService = Depends(get_report_service),
) -> AccountSummaryResponse:
    """Total balance across accounts in the user's display currency."""
    summary = reports.account_summary(user_id)
    return AccountSummaryResponse(
        currency=summary.currency,
        total_balance=from_cents(summary.total_balance),
        account_count=summary.account_count,
        accounts=[
            AccountBalanceResponse(
                account_id=item.account_id,
                name=item.name,
                currency=item.currency,
                balance=from_cents(item.balance),
                converted_balance=from_cents(item.converted_balance),
            )
            for item in summary.accounts
        ],
        rates_as_of=summary.rates_as_of,
    )


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    user_id: int = Depends(get_current_user_id),
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """Get account by ID."""
    return _to_response(service.get_account(user_id, account_id))


@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: int,
    data: AccountUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """Edit an account's name, kind, color or (when empty) currency."""
    patch = AccountUpdate(
        name=data.name,
        kind=data.kind,
        currency=data.currency,
        color=data.color,
    )
    return _to_response(service.update_account(user_id, account_id, patch))


@router.delete("/{account_id}", status_code=204)
def delete_account(
    account_id: int,
    user_id: int = Depends(get_current_user_id),
    service: LedgerService = Depends(get_ledger_service),
) -> None:
    """Delete an account and its transactions."""
    service.delete_account(user_id, account_id)
