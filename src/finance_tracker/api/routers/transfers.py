"""Transfer endpoints."""

from fastapi import APIRouter, Depends

from finance_tracker.api.deps import get_current_user_id, get_transfer_service
from finance_tracker.api.schemas import TransferRequest, TransferResponse
from finance_tracker.core.exceptions import InvalidAmountError
from finance_tracker.core.money import from_cents, to_cents_exact
from finance_tracker.services import TransferService

router = APIRouter(prefix="/transfers", tags=["transfers"])


@router.post("/", response_model=TransferResponse, status_code=201)
def create_transfer(
    data: TransferRequest,
    user_id: int = Depends(get_current_user_id),
    service: TransferService = Depends(get_transfer_service),
) -> TransferResponse:
    """Move money between two of the user's accounts."""
    try:
        amount = to_cents_exact(data.amount)
    except ValueError:
        raise InvalidAmountError(data.amount)

    result = service.transfer(
        user_id,
        from_account_id=data.from_account_id,
        to_account_id=data.to_account_id,
        amount=amount,
        description=data.description,
    )
    return TransferResponse(
        transfer_id=result.transfer_id,
        debit_transaction_id=result.debit_transaction_id,
        credit_transaction_id=result.credit_transaction_id,
        from_account_id=result.from_account_id,
        to_account_id=result.to_account_id,
        debited_amount=from_cents(result.debited_amount),
        credited_amount=from_cents(result.credited_amount),
        from_currency=result.from_currency,
        to_currency=result.to_currency,
        rate=result.rate,
        from_balance=from_cents(result.from_balance),
        to_balance=from_cents(result.to_balance),
    )
