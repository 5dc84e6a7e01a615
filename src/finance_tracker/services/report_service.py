"""Reporting service: balances and spending in the user's display currency."""

import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from finance_tracker.core.exceptions import NotFoundError, RateUnavailableError
from finance_tracker.core.timezone import month_bounds, now_utc, previous_month
from finance_tracker.domain.models import ExchangeRateSnapshot, Transaction, TransactionType, User
from finance_tracker.domain.views import (
    AccountBalanceView,
    AccountSummaryView,
    CategoryTotal,
    ConvertedTransactionView,
    MonthlyRecapView,
    SpendingView,
)
from finance_tracker.repositories.protocols import (
    AccountRepository,
    CategoryRepository,
    TransactionRepository,
    UserRepository,
)
from finance_tracker.services.currency_converter import convert
from finance_tracker.services.exchange_rate_service import ExchangeRateService

logger = logging.getLogger(__name__)


class ReportService:
    """
    Service for multi-currency aggregation and monthly reporting.

    Totals abort with RateUnavailableError when a needed rate is missing:
    leaving an account out, or adding it unconverted, would misstate the total.
    Per-transaction listings degrade instead, marking the converted amount as
    unknown.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        account_repo: AccountRepository,
        transaction_repo: TransactionRepository,
        category_repo: CategoryRepository,
        exchange_rates: ExchangeRateService,
    ):
        self._user_repo = user_repo
        self._account_repo = account_repo
        self._transaction_repo = transaction_repo
        self._category_repo = category_repo
        self._exchange_rates = exchange_rates

    def account_summary(self, user_id: int) -> AccountSummaryView:
        """Total of all account balances in the user's display currency."""
        user = self._get_user(user_id)
        accounts = self._account_repo.list_by_user(user_id)

        snapshot = self._snapshot_if_needed((a.currency for a in accounts), user.currency)
        rates = snapshot.rates if snapshot else {}

        items = [
            AccountBalanceView(
                account_id=account.account_id,
                name=account.name,
                currency=account.currency,
                balance=account.balance,
                converted_balance=convert(account.balance, account.currency, user.currency, rates),
            )
            for account in accounts
        ]
        return AccountSummaryView(
            currency=user.currency,
            total_balance=sum(item.converted_balance for item in items),
            account_count=len(items),
            accounts=items,
            rates_as_of=snapshot.fetched_at if snapshot else None,
        )

    def convert_transactions(
        self,
        user_id: int,
        transactions: list[Transaction],
    ) -> list[ConvertedTransactionView]:
        """Attach display-currency amounts to transactions where rates allow."""
        user = self._get_user(user_id)
        currencies = {a.account_id: a.currency for a in self._account_repo.list_by_user(user_id)}

        rates = {}
        try:
            snapshot = self._snapshot_if_needed(
                (currencies.get(t.account_id, user.currency) for t in transactions),
                user.currency,
            )
        except RateUnavailableError as exc:
            logger.warning("Listing transactions without conversion: %s", exc.message)
        else:
            rates = snapshot.rates if snapshot else {}

        views = []
        for txn in transactions:
            currency = currencies.get(txn.account_id, user.currency)
            try:
                converted: Optional[int] = convert(txn.amount, currency, user.currency, rates)
                converted_currency: Optional[str] = user.currency
            except RateUnavailableError:
                converted, converted_currency = None, None
            views.append(
                ConvertedTransactionView(
                    transaction=txn,
                    currency=currency,
                    converted_amount=converted,
                    converted_currency=converted_currency,
                )
            )
        return views

    def monthly_recap(
        self,
        user_id: int,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> MonthlyRecapView:
        """
        Income and spending for one month compared with the month before.

        Transfer legs are internal moves and are left out of every figure.
        Defaults to the current UTC month.
        """
        user = self._get_user(user_id)
        if year is None or month is None:
            today = now_utc()
            year, month = today.year, today.month

        currencies = {a.account_id: a.currency for a in self._account_repo.list_by_user(user_id)}
        current = self._month_entries(user_id, year, month)
        last = self._month_entries(user_id, *previous_month(year, month))

        snapshot = self._snapshot_if_needed(
            (currencies.get(t.account_id, user.currency) for t in current + last),
            user.currency,
        )
        rates = snapshot.rates if snapshot else {}

        def in_display(txn: Transaction) -> int:
            currency = currencies.get(txn.account_id, user.currency)
            return convert(txn.amount, currency, user.currency, rates)

        recap = MonthlyRecapView(year=year, month=month, currency=user.currency)
        category_totals: dict[int, int] = {}
        for txn in current:
            amount = in_display(txn)
            recap.transaction_count += 1
            if txn.txn_type == TransactionType.INCOME:
                recap.total_income += amount
                continue
            recap.total_spent += amount
            if recap.biggest_expense_converted is None or amount > recap.biggest_expense_converted:
                recap.biggest_expense = txn
                recap.biggest_expense_converted = amount
            if txn.category_id is not None:
                category_totals[txn.category_id] = category_totals.get(txn.category_id, 0) + amount

        recap.last_month_spent = sum(
            in_display(t) for t in last if t.txn_type == TransactionType.EXPENSE
        )
        recap.percentage_change = _percentage_change(recap.total_spent, recap.last_month_spent)

        if category_totals:
            top_id = max(category_totals, key=lambda cid: (category_totals[cid], -cid))
            category = self._category_repo.get_by_id(top_id)
            if category:
                recap.top_category = CategoryTotal(
                    category_id=top_id,
                    name=category.name,
                    amount=category_totals[top_id],
                    color=category.color,
                    icon=category.icon,
                )
        return recap

    def spending_between(self, user_id: int, start: datetime, end: datetime) -> SpendingView:
        """Expenses in [start, end) in the display currency, in total and per category."""
        user = self._get_user(user_id)
        currencies = {a.account_id: a.currency for a in self._account_repo.list_by_user(user_id)}
        expenses = [
            t
            for t in self._transaction_repo.query(
                user_id=user_id,
                txn_types=[TransactionType.EXPENSE],
                start_date=start,
                end_date=end,
            )
            if not t.is_transfer
        ]

        snapshot = self._snapshot_if_needed(
            (currencies.get(t.account_id, user.currency) for t in expenses),
            user.currency,
        )
        rates = snapshot.rates if snapshot else {}

        spending = SpendingView(currency=user.currency, start=start, end=end)
        for txn in expenses:
            currency = currencies.get(txn.account_id, user.currency)
            amount = convert(txn.amount, currency, user.currency, rates)
            spending.total += amount
            if txn.category_id is not None:
                spending.by_category[txn.category_id] = (
                    spending.by_category.get(txn.category_id, 0) + amount
                )
        return spending

    def _get_user(self, user_id: int) -> User:
        user = self._user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    def _month_entries(self, user_id: int, year: int, month: int) -> list[Transaction]:
        start, end = month_bounds(year, month)
        entries = self._transaction_repo.query(user_id=user_id, start_date=start, end_date=end)
        return [t for t in entries if not t.is_transfer]

    def _snapshot_if_needed(
        self,
        currencies: Iterable[str],
        display_currency: str,
    ) -> Optional[ExchangeRateSnapshot]:
        # Amounts already in the display currency need no rates.
        if all(c.upper() == display_currency.upper() for c in currencies):
            return None
        return self._exchange_rates.get_snapshot()


def _percentage_change(current: int, previous: int) -> int:
    """Whole-percent change of spending; a rise from zero counts as 100%."""
    if previous == 0:
        return 100 if current > 0 else 0
    change = (Decimal(current) - Decimal(previous)) / Decimal(previous) * 100
    return int(change.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
