"""Account repository protocol."""

from typing import Protocol, Optional

from finance_tracker.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access."""

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        ...

    def get_by_id(self, account_id: int, user_id: Optional[int] = None) -> Optional[Account]:
        """Retrieve account by ID, optionally restricted to one owner."""
        ...

    def get_many_for_update(self, account_ids: list[int], user_id: int) -> dict[int, Account]:
        """Load and row-lock the owner's accounts with the given IDs."""
        ...

    def list_by_user(self, user_id: int) -> list[Account]:
        """List a user's accounts, oldest first."""
        ...

    def update(self, account: Account) -> Account:
        """Update descriptive fields of an existing account (not the balance)."""
        ...

    def apply_balance_delta(
        self,
        account_id: int,
        delta: int,
        require_funds: bool = False,
    ) -> bool:
        """
        Add ``delta`` minor units to the balance.

        With ``require_funds`` the update only happens when the resulting
        balance stays at or above zero. Returns False if no row was changed.
        """
        ...

    def delete(self, account_id: int) -> None:
        """Delete an account (hard delete)."""
        ...
