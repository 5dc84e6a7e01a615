"""Transaction repository protocol."""

from datetime import datetime
from typing import Protocol, Optional

from finance_tracker.domain.models import Transaction, TransactionType


class TransactionRepository(Protocol):
    """Interface for transaction (ledger) data access."""

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        ...

    def get_by_id(self, txn_id: int, user_id: Optional[int] = None) -> Optional[Transaction]:
        """Retrieve transaction by ID, optionally restricted to one owner."""
        ...

    def list_by_transfer(self, transfer_id: str) -> list[Transaction]:
        """List both legs of a transfer."""
        ...

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
        """Query a user's transactions, newest first. ``end_date`` is exclusive."""
        ...

    def count_by_account(self, account_id: int, transfers_only: bool = False) -> int:
        """Count transactions on an account."""
        ...

    def clear_category(self, category_id: int) -> None:
        """Detach a category from every transaction that references it."""
        ...

    def delete(self, txn_id: int) -> None:
        """Delete a transaction."""
        ...

    def delete_by_account(self, account_id: int) -> None:
        """Delete every transaction on an account."""
        ...
