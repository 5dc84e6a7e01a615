"""User repository protocol."""

from typing import Protocol, Optional

from finance_tracker.domain.models import User


class UserRepository(Protocol):
    """Interface for user data access."""

    def create(self, user: User) -> User:
        """Persist a new user."""
        ...

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Retrieve user by ID."""
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        """Retrieve user by username."""
        ...

    def update(self, user: User) -> User:
        """Update an existing user."""
        ...
