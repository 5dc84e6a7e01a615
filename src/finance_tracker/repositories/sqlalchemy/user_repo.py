"""SQLAlchemy implementation of UserRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.core.timezone import now_utc, to_naive_utc, to_utc
from finance_tracker.domain.models import User
from finance_tracker.repositories.sqlalchemy.orm_models import UserORM


class SqlAlchemyUserRepository:
    """SQLAlchemy-backed user repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, user: User) -> User:
        """Persist a new user."""
        orm_user = UserORM(
            username=user.username,
            currency=user.currency,
            created_at=to_naive_utc(user.created_at or now_utc()),
        )
        self._db.add(orm_user)
        self._db.flush()
        self._db.refresh(orm_user)
        return self._to_domain(orm_user)

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Retrieve user by ID."""
        orm_user = self._db.query(UserORM).filter(UserORM.user_id == user_id).first()
        return self._to_domain(orm_user) if orm_user else None

    def get_by_username(self, username: str) -> Optional[User]:
        """Retrieve user by username."""
        orm_user = self._db.query(UserORM).filter(UserORM.username == username).first()
        return self._to_domain(orm_user) if orm_user else None

    def update(self, user: User) -> User:
        """Update an existing user."""
        orm_user = self._db.query(UserORM).filter(UserORM.user_id == user.user_id).first()
        if not orm_user:
            raise ValueError(f"User not found: {user.user_id}")
        orm_user.username = user.username
        orm_user.currency = user.currency
        self._db.flush()
        return self._to_domain(orm_user)

    @staticmethod
    def _to_domain(orm: UserORM) -> User:
        """Convert ORM model to domain model."""
        return User(
            user_id=orm.user_id,
            username=orm.username,
            currency=orm.currency,
            created_at=to_utc(orm.created_at) if orm.created_at else None,
        )
