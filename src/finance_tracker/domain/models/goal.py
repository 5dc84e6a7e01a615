"""Savings goal domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Goal:
    """A savings target tracked in minor units of its own currency."""

    goal_id: Optional[int]
    user_id: int
    name: str
    target_amount: int
    currency: str = "USD"
    current_amount: int = 0
    deadline: Optional[datetime] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        self.currency = self.currency.upper()

    @property
    def progress_percent(self) -> int:
        """Whole percent of the target saved so far, capped at 100."""
        if self.current_amount <= 0:
            return 0
        return min(100, self.current_amount * 100 // self.target_amount)

    @property
    def is_reached(self) -> bool:
        return self.current_amount >= self.target_amount
