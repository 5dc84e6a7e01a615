"""User domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """Owner of accounts, transactions and categories."""

    user_id: Optional[int]
    username: str
    currency: str = "USD"
    created_at: Optional[datetime] = field(default=None)
