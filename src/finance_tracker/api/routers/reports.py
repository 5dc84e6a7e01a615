"""Reporting endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from finance_tracker.api.deps import get_current_user_id, get_ledger_service, get_report_service
from finance_tracker.api.routers.transactions import to_transaction_response
from finance_tracker.api.schemas import CategoryTotalResponse, MonthlyRecapResponse
from finance_tracker.core.money import from_cents
from finance_tracker.domain.views import ConvertedTransactionView
from finance_tracker.services import LedgerService, ReportService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/monthly-recap", response_model=MonthlyRecapResponse)
def get_monthly_recap(
    year: Optional[int] = Query(None, ge=1970, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    user_id: int = Depends(get_current_user_id),
    reports: ReportService = Depends(get_report_service),
    ledger: LedgerService = Depends(get_ledger_service),
) -> MonthlyRecapResponse:
    """Income and spending for a month (current month by default)."""
    recap = reports.monthly_recap(user_id, year=year, month=month)

    top_category = None
    if recap.top_category:
        top_category = CategoryTotalResponse(
            category_id=recap.top_category.category_id,
            name=recap.top_category.name,
            amount=from_cents(recap.top_category.amount),
            color=recap.top_category.color,
            icon=recap.top_category.icon,
        )

    biggest_expense = None
    if recap.biggest_expense:
        account = ledger.get_account(user_id, recap.biggest_expense.account_id)
        biggest_expense = to_transaction_response(
            ConvertedTransactionView(
                transaction=recap.biggest_expense,
                currency=account.currency,
                converted_amount=recap.biggest_expense_converted,
                converted_currency=recap.currency,
            )
        )

    return MonthlyRecapResponse(
        year=recap.year,
        month=recap.month,
        currency=recap.currency,
        total_income=from_cents(recap.total_income),
        total_spent=from_cents(recap.total_spent),
        transaction_count=recap.transaction_count,
        top_category=top_category,
        biggest_expense=biggest_expense,
        last_month_spent=from_cents(recap.last_month_spent),
        percentage_change=recap.percentage_change,
    )
