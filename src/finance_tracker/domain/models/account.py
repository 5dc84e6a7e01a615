"""Account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from finance_tracker.domain.models.enums import AccountKind


@dataclass
class Account:
    """
    A money account owned by one user.

    The balance is an integer amount of minor units and is always expressed
    in the account's own currency.
    """

    account_id: Optional[int]
    user_id: int
    name: str
    currency: str = "USD"
    balance: int = 0
    kind: AccountKind = AccountKind.NORMAL
    color: str = "bg-primary"
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.kind, str):
            self.kind = AccountKind(self.kind)
        self.currency = self.currency.upper()
