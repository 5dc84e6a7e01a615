"""Income and expense transaction endpoints."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from finance_tracker.api.deps import get_current_user_id, get_ledger_service, get_report_service
from finance_tracker.api.schemas import (
    TransactionCreateRequest,
    TransactionResponse,
    TransactionListResponse,
    TransactionDeleteResponse,
)
from finance_tracker.core.exceptions import InvalidAmountError
from finance_tracker.core.money import from_cents, to_cents_exact
from finance_tracker.core.timezone import to_utc
from finance_tracker.domain.models import TransactionType
from finance_tracker.domain.views import ConvertedTransactionView
from finance_tracker.services import LedgerService, ReportService, TransactionCreate

router = APIRouter(prefix="/transactions", tags=["transactions"])


def to_transaction_response(view: ConvertedTransactionView) -> TransactionResponse:
    """Build the response for a transaction and its display-currency amount."""
    txn = view.transaction
    return TransactionResponse(
        txn_id=txn.txn_id,
        account_id=txn.account_id,
        txn_type=txn.txn_type,
        amount=from_cents(txn.amount),
        currency=view.currency,
        converted_amount=(
            from_cents(view.converted_amount) if view.converted_amount is not None else None
        ),
        converted_currency=view.converted_currency,
        description=txn.description,
        category_id=txn.category_id,
        transfer_id=txn.transfer_id,
        created_at=txn.created_at,
    )


@router.post("/", response_model=TransactionResponse, status_code=201)
def create_transaction(
    data: TransactionCreateRequest,
    user_id: int = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Record income or an expense."""
    try:
        amount = to_cents_exact(data.amount)
    except ValueError:
        raise InvalidAmountError(data.amount)

    txn = ledger.add_transaction(
        user_id,
        TransactionCreate(
            account_id=data.account_id,
            amount=amount,
            txn_type=data.txn_type,
            description=data.description,
            category_id=data.category_id,
            created_at=to_utc(data.created_at) if data.created_at else None,
        ),
    )
    account = ledger.get_account(user_id, txn.account_id)
    return to_transaction_response(
        ConvertedTransactionView(transaction=txn, currency=account.currency)
    )


@router.get("/", response_model=TransactionListResponse)
def list_transactions(
    account_id: Optional[int] = Query(None, description="Only this account"),
    txn_type: Optional[TransactionType] = Query(None, description="income or expense"),
    start_date: Optional[datetime] = Query(None, description="Inclusive lower bound"),
    end_date: Optional[datetime] = Query(None, description="Exclusive upper bound"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user_id: int = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
    reports: ReportService = Depends(get_report_service),
) -> TransactionListResponse:
    """List transactions newest first, with amounts in the display currency."""
    transactions = ledger.query_transactions(
        user_id,
        account_id=account_id,
        txn_types=[txn_type] if txn_type else None,
        start_date=to_utc(start_date) if start_date else None,
        end_date=to_utc(end_date) if end_date else None,
        limit=limit,
        offset=offset,
    )
    views = reports.convert_transactions(user_id, transactions)
    return TransactionListResponse(
        transactions=[to_transaction_response(v) for v in views],
        count=len(views),
    )


@router.get("/{txn_id}", response_model=TransactionResponse)
def get_transaction(
    txn_id: int,
    user_id: int = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
    reports: ReportService = Depends(get_report_service),
) -> TransactionResponse:
    """Get transaction by ID."""
    txn = ledger.get_transaction(user_id, txn_id)
    return to_transaction_response(reports.convert_transactions(user_id, [txn])[0])


@router.delete("/{txn_id}", response_model=TransactionDeleteResponse)
def delete_transaction(
    txn_id: int,
    user_id: int = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionDeleteResponse:
    """Delete a transaction; deleting a transfer leg removes both legs."""
    return TransactionDeleteResponse(deleted_ids=ledger.delete_transaction(user_id, txn_id))
