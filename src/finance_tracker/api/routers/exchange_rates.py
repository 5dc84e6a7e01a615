"""Exchange rate endpoints."""

from fastapi import APIRouter, Depends

from finance_tracker.api.deps import get_exchange_rate_service
from finance_tracker.api.schemas import ExchangeRatesResponse
from finance_tracker.services import ExchangeRateService

router = APIRouter(prefix="/exchange-rates", tags=["exchange-rates"])


@router.get("/", response_model=ExchangeRatesResponse)
def get_exchange_rates(
    service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> ExchangeRatesResponse:
    """Current rate snapshot, refreshed first if stale."""
    snapshot = service.get_snapshot()
    return ExchangeRatesResponse(
        base_currency=snapshot.base_currency,
        rates=dict(snapshot.rates),
        fetched_at=snapshot.fetched_at,
        source_updated_at=snapshot.source_updated_at,
    )
