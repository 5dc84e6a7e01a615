"""Recurring transaction definition."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from dateutil.relativedelta import relativedelta

from finance_tracker.domain.models.enums import RecurrenceInterval, TransactionType

_STEPS = {
    RecurrenceInterval.WEEKLY: relativedelta(weeks=1),
    RecurrenceInterval.MONTHLY: relativedelta(months=1),
    RecurrenceInterval.YEARLY: relativedelta(years=1),
}


@dataclass
class RecurringTransaction:
    """
    Template for an income or expense that repeats on a fixed interval.

    Only the definition is stored; nothing here books transactions.
    ``next_run_date`` is the next date the entry falls due.
    """

    recurring_id: Optional[int]
    user_id: int
    account_id: int
    amount: int
    txn_type: TransactionType
    interval: RecurrenceInterval
    next_run_date: datetime
    description: str = ""
    category_id: Optional[int] = None
    active: bool = True
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str):
            self.txn_type = TransactionType(self.txn_type)
        if isinstance(self.interval, str):
            self.interval = RecurrenceInterval(self.interval)

    def upcoming(self, count: int) -> list[datetime]:
        """
        The next ``count`` due dates, starting with ``next_run_date``.

        Month and year steps are taken from the first date, so a series
        starting on the 31st lands on the last day of shorter months and
        returns to the 31st afterwards.
        """
        step = _STEPS[self.interval]
        return [self.next_run_date + step * i for i in range(count)]
