"""SQLAlchemy implementation of AccountRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.core.timezone import now_utc, to_naive_utc, to_utc
from finance_tracker.domain.models import Account
from finance_tracker.repositories.sqlalchemy.orm_models import AccountORM


class SqlAlchemyAccountRepository:
    """
    SQLAlchemy-backed account repository.

    Writes are flushed, never committed; the caller owns the transaction.
    Balance changes go through ``apply_balance_delta`` as relative SQL updates
    so concurrent writers cannot lose each other's changes.
    """

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        orm_account = AccountORM(
            user_id=account.user_id,
            name=account.name,
            currency=account.currency,
            balance=account.balance,
            kind=account.kind,
            color=account.color,
            created_at=to_naive_utc(account.created_at or now_utc()),
        )
        self._db.add(orm_account)
        self._db.flush()
        self._db.refresh(orm_account)
        return self._to_domain(orm_account)

    def get_by_id(self, account_id: int, user_id: Optional[int] = None) -> Optional[Account]:
        """Retrieve account by ID, optionally restricted to one owner."""
        query = self._db.query(AccountORM).filter(AccountORM.account_id == account_id)
        if user_id is not None:
            query = query.filter(AccountORM.user_id == user_id)
        orm_account = query.populate_existing().first()
        return self._to_domain(orm_account) if orm_account else None

    def get_many_for_update(self, account_ids: list[int], user_id: int) -> dict[int, Account]:
        """
        Load and lock the owner's accounts with the given IDs.

        Rows are locked in ascending ID order so two transfers touching the
        same pair of accounts cannot deadlock. SQLite ignores FOR UPDATE and
        serializes writers at the database level instead.
        """
        orm_accounts = (
            self._db.query(AccountORM)
            .filter(
                AccountORM.account_id.in_(account_ids),
                AccountORM.user_id == user_id,
            )
            .order_by(AccountORM.account_id)
            .populate_existing()
            .with_for_update()
            .all()
        )
        return {a.account_id: self._to_domain(a) for a in orm_accounts}

    def list_by_user(self, user_id: int) -> list[Account]:
        """List a user's accounts, oldest first."""
        orm_accounts = (
            self._db.query(AccountORM)
            .filter(AccountORM.user_id == user_id)
            .order_by(AccountORM.created_at, AccountORM.account_id)
            .populate_existing()
            .all()
        )
        return [self._to_domain(a) for a in orm_accounts]

    def update(self, account: Account) -> Account:
        """Update descriptive fields of an existing account (not the balance)."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.account_id == account.account_id
        ).first()
        if not orm_account:
            raise ValueError(f"Account not found: {account.account_id}")
        orm_account.name = account.name
        orm_account.currency = account.currency
        orm_account.kind = account.kind
        orm_account.color = account.color
        self._db.flush()
        self._db.refresh(orm_account)
        return self._to_domain(orm_account)

    def apply_balance_delta(
        self,
        account_id: int,
        delta: int,
        require_funds: bool = False,
    ) -> bool:
        """Add ``delta`` to the balance; guarded against going negative if asked."""
        query = self._db.query(AccountORM).filter(AccountORM.account_id == account_id)
        if require_funds:
            query = query.filter(AccountORM.balance + delta >= 0)
        changed = query.update(
            {AccountORM.balance: AccountORM.balance + delta},
            synchronize_session=False,
        )
        return changed == 1

    def delete(self, account_id: int) -> None:
        """Delete an account."""
        self._db.query(AccountORM).filter(AccountORM.account_id == account_id).delete()
        self._db.flush()

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            account_id=orm.account_id,
            user_id=orm.user_id,
            name=orm.name,
            currency=orm.currency,
            balance=int(orm.balance or 0),
            kind=orm.kind,
            color=orm.color,
            created_at=to_utc(orm.created_at) if orm.created_at else None,
        )
