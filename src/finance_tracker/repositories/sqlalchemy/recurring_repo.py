"""SQLAlchemy implementation of RecurringTransactionRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.core.timezone import to_naive_utc, to_utc
from finance_tracker.domain.models import RecurringTransaction
from finance_tracker.repositories.sqlalchemy.orm_models import RecurringTransactionORM


class SqlAlchemyRecurringTransactionRepository:
    """SQLAlchemy-backed repository for recurring transaction definitions."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, recurring: RecurringTransaction) -> RecurringTransaction:
        """Persist a new definition."""
        orm_recurring = RecurringTransactionORM(
            user_id=recurring.user_id,
            account_id=recurring.account_id,
            amount=recurring.amount,
            txn_type=recurring.txn_type,
            description=recurring.description,
            category_id=recurring.category_id,
            interval=recurring.interval,
            next_run_date=to_naive_utc(recurring.next_run_date),
            active=recurring.active,
        )
        self._db.add(orm_recurring)
        self._db.flush()
        self._db.refresh(orm_recurring)
        return self._to_domain(orm_recurring)

    def get_by_id(
        self,
        recurring_id: int,
        user_id: Optional[int] = None,
    ) -> Optional[RecurringTransaction]:
        """Retrieve a definition by ID, optionally restricted to one owner."""
        query = self._db.query(RecurringTransactionORM).filter(
            RecurringTransactionORM.recurring_id == recurring_id
        )
        if user_id is not None:
            query = query.filter(RecurringTransactionORM.user_id == user_id)
        orm_recurring = query.first()
        return self._to_domain(orm_recurring) if orm_recurring else None

    def list_by_user(self, user_id: int, active_only: bool = False) -> list[RecurringTransaction]:
        """List a user's definitions, newest first."""
        query = self._db.query(RecurringTransactionORM).filter(
            RecurringTransactionORM.user_id == user_id
        )
        if active_only:
            query = query.filter(RecurringTransactionORM.active.is_(True))
        orm_items = query.order_by(
            RecurringTransactionORM.created_at.desc(),
            RecurringTransactionORM.recurring_id.desc(),
        ).all()
        return [self._to_domain(r) for r in orm_items]

    def update(self, recurring: RecurringTransaction) -> RecurringTransaction:
        """Update an existing definition."""
        orm_recurring = self._db.query(RecurringTransactionORM).filter(
            RecurringTransactionORM.recurring_id == recurring.recurring_id
        ).first()
        if not orm_recurring:
            raise ValueError(f"Recurring transaction not found: {recurring.recurring_id}")
        orm_recurring.amount = recurring.amount
        orm_recurring.description = recurring.description
        orm_recurring.category_id = recurring.category_id
        orm_recurring.interval = recurring.interval
        orm_recurring.next_run_date = to_naive_utc(recurring.next_run_date)
        orm_recurring.active = recurring.active
        self._db.flush()
        return self._to_domain(orm_recurring)

    def delete(self, recurring_id: int) -> None:
        """Delete a definition."""
        self._db.query(RecurringTransactionORM).filter(
            RecurringTransactionORM.recurring_id == recurring_id
        ).delete()
        self._db.flush()

    def delete_by_account(self, account_id: int) -> None:
        self._db.query(RecurringTransactionORM).filter(
            RecurringTransactionORM.account_id == account_id
        ).delete()
        self._db.flush()

    def clear_category(self, category_id: int) -> None:
        self._db.query(RecurringTransactionORM).filter(
            RecurringTransactionORM.category_id == category_id
        ).update({RecurringTransactionORM.category_id: None}, synchronize_session=False)

    @staticmethod
    def _to_domain(orm: RecurringTransactionORM) -> RecurringTransaction:
        """Convert ORM model to domain model."""
        return RecurringTransaction(
            recurring_id=orm.recurring_id,
            user_id=orm.user_id,
            account_id=orm.account_id,
            amount=int(orm.amount),
            txn_type=orm.txn_type,
            interval=orm.interval,
            next_run_date=to_utc(orm.next_run_date),
            description=orm.description or "",
            category_id=orm.category_id,
            active=bool(orm.active),
            created_at=to_utc(orm.created_at) if orm.created_at else None,
        )
