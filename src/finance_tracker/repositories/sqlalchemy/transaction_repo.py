"""SQLAlchemy implementation of TransactionRepository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from finance_tracker.core.timezone import now_utc, to_naive_utc, to_utc
from finance_tracker.domain.models import Transaction, TransactionType
from finance_tracker.repositories.sqlalchemy.orm_models import TransactionORM


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        orm_txn = self._to_orm(transaction)
        self._db.add(orm_txn)
        self._db.flush()
        self._db.refresh(orm_txn)
        return self._to_domain(orm_txn)

    def get_by_id(self, txn_id: int, user_id: Optional[int] = None) -> Optional[Transaction]:
        """Retrieve transaction by ID, optionally restricted to one owner."""
        query = self._db.query(TransactionORM).filter(TransactionORM.txn_id == txn_id)
        if user_id is not None:
            query = query.filter(TransactionORM.user_id == user_id)
        orm_txn = query.first()
        return self._to_domain(orm_txn) if orm_txn else None

    def list_by_transfer(self, transfer_id: str) -> list[Transaction]:
        """List both legs of a transfer, debit first."""
        orm_txns = (
            self._db.query(TransactionORM)
            .filter(TransactionORM.transfer_id == transfer_id)
            .order_by(TransactionORM.txn_id)
            .all()
        )
        return [self._to_domain(t) for t in orm_txns]

    def query(
        self,
        user_id: int,
        account_ids: Optional[list[int]] = None,
        txn_types: Optional[list[TransactionType]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Transaction]:
        """Query a user's transactions, newest first."""
        conditions = [TransactionORM.user_id == user_id]
        if account_ids:
            conditions.append(TransactionORM.account_id.in_(account_ids))
        if txn_types:
            conditions.append(TransactionORM.txn_type.in_(txn_types))
        if start_date:
            conditions.append(TransactionORM.created_at >= to_naive_utc(start_date))
        if end_date:
            conditions.append(TransactionORM.created_at < to_naive_utc(end_date))

        query = (
            self._db.query(TransactionORM)
            .filter(and_(*conditions))
            .order_by(TransactionORM.created_at.desc(), TransactionORM.txn_id.desc())
        )
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_domain(t) for t in query.all()]

    def count_by_account(self, account_id: int, transfers_only: bool = False) -> int:
        """Count transactions on an account."""
        query = self._db.query(TransactionORM).filter(TransactionORM.account_id == account_id)
        if transfers_only:
            query = query.filter(TransactionORM.transfer_id.isnot(None))
        return query.count()

    def clear_category(self, category_id: int) -> None:
        """Detach a category from every transaction that references it."""
        self._db.query(TransactionORM).filter(
            TransactionORM.category_id == category_id
        ).update({TransactionORM.category_id: None}, synchronize_session=False)

    def delete(self, txn_id: int) -> None:
        """Delete a transaction."""
        self._db.query(TransactionORM).filter(TransactionORM.txn_id == txn_id).delete()
        self._db.flush()

    def delete_by_account(self, account_id: int) -> None:
        """Delete every transaction on an account."""
        self._db.query(TransactionORM).filter(
            TransactionORM.account_id == account_id
        ).delete()
        self._db.flush()

    @staticmethod
    def _to_orm(txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        return TransactionORM(
            user_id=txn.user_id,
            account_id=txn.account_id,
            amount=txn.amount,
            txn_type=txn.txn_type,
            description=txn.description,
            category_id=txn.category_id,
            transfer_id=txn.transfer_id,
            created_at=to_naive_utc(txn.created_at or now_utc()),
        )

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            user_id=orm.user_id,
            account_id=orm.account_id,
            amount=int(orm.amount),
            txn_type=orm.txn_type,
            description=orm.description or "",
            category_id=orm.category_id,
            transfer_id=orm.transfer_id,
            created_at=to_utc(orm.created_at) if orm.created_at else None,
        )
