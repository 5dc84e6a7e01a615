"""Recurring transaction definitions."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.core.exceptions import NotFoundError, ValidationError
from finance_tracker.core.money import require_amount
from finance_tracker.core.timezone import now_utc, to_utc
from finance_tracker.domain.models import RecurrenceInterval, RecurringTransaction, TransactionType
from finance_tracker.repositories.protocols import RecurringTransactionRepository
from finance_tracker.repositories.sqlalchemy.database import atomic
from finance_tracker.services.ledger_service import LedgerService

MAX_PREVIEW = 24


@dataclass
class RecurringCreate:
    """Input data for a new recurring definition."""

    account_id: int
    amount: int
    txn_type: TransactionType
    interval: RecurrenceInterval
    start_date: datetime
    description: str = ""
    category_id: Optional[int] = None


@dataclass
class RecurringUpdate:
    """Partial update data; the account and entry type are fixed."""

    amount: Optional[int] = None
    description: Optional[str] = None
    interval: Optional[RecurrenceInterval] = None
    next_run_date: Optional[datetime] = None
    category_id: Optional[int] = None
    active: Optional[bool] = None


class RecurringService:
    """
    Service for storing recurring income and expenses.

    Definitions are kept and validated here; booking the due entries is left
    to whatever runs on a schedule.
    """

    def __init__(
        self,
        db: Session,
        recurring_repo: RecurringTransactionRepository,
        ledger: LedgerService,
    ):
        self._db = db
        self._recurring_repo = recurring_repo
        self._ledger = ledger

    def create_recurring(self, user_id: int, data: RecurringCreate) -> RecurringTransaction:
        """Store a definition whose first run is ``data.start_date``."""
        amount = require_amount(data.amount)
        self._ledger.get_account(user_id, data.account_id)
        self._ledger.check_category(user_id, data.category_id, data.txn_type)

        recurring = RecurringTransaction(
            recurring_id=None,
            user_id=user_id,
            account_id=data.account_id,
            amount=amount,
            txn_type=data.txn_type,
            interval=data.interval,
            next_run_date=to_utc(data.start_date),
            description=data.description,
            category_id=data.category_id,
            created_at=now_utc(),
        )
        with atomic(self._db):
            return self._recurring_repo.create(recurring)

    def get_recurring(self, user_id: int, recurring_id: int) -> RecurringTransaction:
        recurring = self._recurring_repo.get_by_id(recurring_id, user_id=user_id)
        if not recurring:
            raise NotFoundError("Recurring transaction", recurring_id)
        return recurring

    def list_recurring(self, user_id: int, active_only: bool = False) -> list[RecurringTransaction]:
        return self._recurring_repo.list_by_user(user_id, active_only=active_only)

    def update_recurring(
        self,
        user_id: int,
        recurring_id: int,
        patch: RecurringUpdate,
    ) -> RecurringTransaction:
        """Apply a partial update to a definition."""
        recurring = self.get_recurring(user_id, recurring_id)
        if patch.amount is not None:
            recurring.amount = require_amount(patch.amount)
        if patch.description is not None:
            recurring.description = patch.description
        if patch.interval is not None:
            recurring.interval = RecurrenceInterval(patch.interval)
        if patch.next_run_date is not None:
            recurring.next_run_date = to_utc(patch.next_run_date)
        if patch.category_id is not None:
            self._ledger.check_category(user_id, patch.category_id, recurring.txn_type)
            recurring.category_id = patch.category_id
        if patch.active is not None:
            recurring.active = patch.active
        with atomic(self._db):
            return self._recurring_repo.update(recurring)

    def upcoming(self, user_id: int, recurring_id: int, count: int = 3) -> list[datetime]:
        """The next ``count`` due dates of a definition."""
        if not 1 <= count <= MAX_PREVIEW:
            raise ValidationError(f"count must be between 1 and {MAX_PREVIEW}")
        return self.get_recurring(user_id, recurring_id).upcoming(count)

    def delete_recurring(self, user_id: int, recurring_id: int) -> None:
        self.get_recurring(user_id, recurring_id)
        with atomic(self._db):
            self._recurring_repo.delete(recurring_id)
