"""Recurring transaction repository protocol."""

from typing import Protocol, Optional

from finance_tracker.domain.models import RecurringTransaction


class RecurringTransactionRepository(Protocol):
    """Interface for recurring transaction definitions."""

    def create(self, recurring: RecurringTransaction) -> RecurringTransaction:
        """Persist a new definition."""
        ...

    def get_by_id(
        self,
        recurring_id: int,
        user_id: Optional[int] = None,
    ) -> Optional[RecurringTransaction]:
        """Retrieve a definition by ID, optionally restricted to one owner."""
        ...

    def list_by_user(self, user_id: int, active_only: bool = False) -> list[RecurringTransaction]:
        """List a user's definitions, newest first."""
        ...

    def update(self, recurring: RecurringTransaction) -> RecurringTransaction:
        """Update an existing definition."""
        ...

    def delete(self, recurring_id: int) -> None:
        """Delete a definition."""
        ...

    def delete_by_account(self, account_id: int) -> None:
        """Delete every definition that books to an account."""
        ...

    def clear_category(self, category_id: int) -> None:
        """Detach a category from every definition that references it."""
        ...
