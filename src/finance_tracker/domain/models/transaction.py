"""Transaction domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from finance_tracker.domain.models.enums import TransactionType


@dataclass
class Transaction:
    """
    Ledger entry on one account.

    ``amount`` is a positive number of minor units in the account's currency;
    the direction comes from ``txn_type``. Entries created by a transfer carry
    the shared ``transfer_id``.
    """

    txn_id: Optional[int]
    user_id: int
    account_id: int
    amount: int
    txn_type: TransactionType
    description: str = ""
    category_id: Optional[int] = None
    transfer_id: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str):
            self.txn_type = TransactionType(self.txn_type)

    @property
    def is_transfer(self) -> bool:
        """Return True if this entry is one leg of a transfer."""
        return self.transfer_id is not None

    @property
    def signed_amount(self) -> int:
        """Balance effect: positive for income, negative for expense."""
        if self.txn_type == TransactionType.INCOME:
            return self.amount
        return -self.amount
