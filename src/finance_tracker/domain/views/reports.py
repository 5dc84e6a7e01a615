"""View models for service outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from finance_tracker.domain.models import Budget, Transaction


@dataclass
class TransferResult:
    """Outcome of a committed transfer."""

    transfer_id: str
    debit_transaction_id: int
    credit_transaction_id: int
    from_account_id: int
    to_account_id: int
    debited_amount: int
    credited_amount: int
    from_currency: str
    to_currency: str
    rate: Decimal
    from_balance: int
    to_balance: int


@dataclass
class AccountBalanceView:
    """One account's balance, natively and in the display currency."""

    account_id: int
    name: str
    currency: str
    balance: int
    converted_balance: int


@dataclass
class AccountSummaryView:
    """All account balances aggregated into the display currency."""

    currency: str
    total_balance: int
    account_count: int
    accounts: list[AccountBalanceView] = field(default_factory=list)
    rates_as_of: Optional[datetime] = None


@dataclass
class ConvertedTransactionView:
    """
    Transaction with its amount also in the display currency.

    ``converted_amount`` and ``converted_currency`` are None when no rate was
    available; the original amount is never relabelled.
    """

    transaction: Transaction
    currency: str
    converted_amount: Optional[int] = None
    converted_currency: Optional[str] = None


@dataclass
class CategoryTotal:
    """Spending attributed to one category."""

    category_id: int
    name: str
    amount: int
    color: Optional[str] = None
    icon: Optional[str] = None


@dataclass
class MonthlyRecapView:
    """Income and spending for one calendar month in the display currency."""

    year: int
    month: int
    currency: str
    total_income: int = 0
    total_spent: int = 0
    transaction_count: int = 0
    top_category: Optional[CategoryTotal] = None
    biggest_expense: Optional[Transaction] = None
    biggest_expense_converted: Optional[int] = None
    last_month_spent: int = 0
    percentage_change: int = 0


@dataclass
class SpendingView:
    """Expenses between two instants in the display currency, excluding transfers."""

    currency: str
    start: datetime
    end: datetime
    total: int = 0
    by_category: dict[int, int] = field(default_factory=dict)


@dataclass
class BudgetStatusView:
    """
    A budget with what has been spent in its current period.

    ``spent`` and ``remaining`` are None when a rate needed to express the
    spending in the display currency was unavailable.
    """

    budget: Budget
    currency: str
    period_start: datetime
    period_end: datetime
    spent: Optional[int] = None
    remaining: Optional[int] = None
