"""User profile service."""

from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.core.exceptions import NotFoundError, ValidationError
from finance_tracker.core.money import normalize_currency
from finance_tracker.core.timezone import now_utc
from finance_tracker.domain.models import User
from finance_tracker.repositories.protocols import UserRepository
from finance_tracker.repositories.sqlalchemy.database import atomic


class UserService:
    """Creates users and manages their display currency."""

    def __init__(self, db: Session, user_repo: UserRepository, default_currency: str = "USD"):
        self._db = db
        self._user_repo = user_repo
        self._default_currency = default_currency

    def create_user(self, username: str, currency: Optional[str] = None) -> User:
        """Create a user; usernames are unique."""
        username = username.strip()
        if not username:
            raise ValidationError("Username is required")
        if self._user_repo.get_by_username(username):
            raise ValidationError(f"User '{username}' already exists")

        user = User(
            user_id=None,
            username=username,
            currency=_currency(currency or self._default_currency),
            created_at=now_utc(),
        )
        with atomic(self._db):
            return self._user_repo.create(user)

    def get_user(self, user_id: int) -> User:
        """Get user by ID."""
        user = self._user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    def update_currency(self, user_id: int, currency: str) -> User:
        """Change the currency reports and summaries are expressed in."""
        user = self.get_user(user_id)
        user.currency = _currency(currency)
        with atomic(self._db):
            return self._user_repo.update(user)


def _currency(code: str) -> str:
    try:
        return normalize_currency(code)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
