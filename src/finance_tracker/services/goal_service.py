"""Savings goal service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.core.exceptions import InvalidAmountError, NotFoundError, ValidationError
from finance_tracker.core.money import normalize_currency, require_amount, within_limit
from finance_tracker.core.timezone import now_utc, to_utc
from finance_tracker.domain.models import Goal
from finance_tracker.repositories.protocols import GoalRepository, UserRepository
from finance_tracker.repositories.sqlalchemy.database import atomic


@dataclass
class GoalUpdate:
    """Partial update data for editing a goal."""

    name: Optional[str] = None
    target_amount: Optional[int] = None
    current_amount: Optional[int] = None
    deadline: Optional[datetime] = None
    color: Optional[str] = None
    icon: Optional[str] = None


class GoalService:
    """Service for savings goals. Goals are bookkeeping only and move no money."""

    def __init__(self, db: Session, user_repo: UserRepository, goal_repo: GoalRepository):
        self._db = db
        self._user_repo = user_repo
        self._goal_repo = goal_repo

    def create_goal(
        self,
        user_id: int,
        name: str,
        target_amount: int,
        current_amount: int = 0,
        currency: Optional[str] = None,
        deadline: Optional[datetime] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> Goal:
        """
        Create a goal.

        Args:
            user_id: Owner
            name: Display name
            target_amount: Amount to reach, in minor units
            current_amount: Amount saved so far, in minor units
            currency: ISO code; defaults to the owner's display currency
            deadline: Optional date to reach the target by
            color: UI color tag
            icon: UI icon name

        Returns:
            Created Goal instance
        """
        user = self._user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        if not name.strip():
            raise ValidationError("Goal name is required")
        try:
            goal_currency = normalize_currency(currency or user.currency)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        goal = Goal(
            goal_id=None,
            user_id=user_id,
            name=name.strip(),
            target_amount=require_amount(target_amount),
            current_amount=require_amount(current_amount, allow_zero=True),
            currency=goal_currency,
            deadline=to_utc(deadline) if deadline else None,
            color=color,
            icon=icon,
            created_at=now_utc(),
        )
        with atomic(self._db):
            return self._goal_repo.create(goal)

    def get_goal(self, user_id: int, goal_id: int) -> Goal:
        """Get one of the user's goals."""
        goal = self._goal_repo.get_by_id(goal_id, user_id=user_id)
        if not goal:
            raise NotFoundError("Goal", goal_id)
        return goal

    def list_goals(self, user_id: int) -> list[Goal]:
        """List the user's goals, newest first."""
        return self._goal_repo.list_by_user(user_id)

    def update_goal(self, user_id: int, goal_id: int, patch: GoalUpdate) -> Goal:
        """Apply a partial update to a goal."""
        goal = self.get_goal(user_id, goal_id)
        if patch.name is not None:
            if not patch.name.strip():
                raise ValidationError("Goal name is required")
            goal.name = patch.name.strip()
        if patch.target_amount is not None:
            goal.target_amount = require_amount(patch.target_amount)
        if patch.current_amount is not None:
            goal.current_amount = require_amount(patch.current_amount, allow_zero=True)
        if patch.deadline is not None:
            goal.deadline = to_utc(patch.deadline)
        if patch.color is not None:
            goal.color = patch.color
        if patch.icon is not None:
            goal.icon = patch.icon
        with atomic(self._db):
            return self._goal_repo.update(goal)

    def contribute(self, user_id: int, goal_id: int, amount: int) -> Goal:
        """Add ``amount`` minor units to what has been saved towards a goal."""
        goal = self.get_goal(user_id, goal_id)
        amount = require_amount(amount)
        if not within_limit(goal.current_amount + amount):
            raise InvalidAmountError(amount, "goal total would leave the supported range")
        goal.current_amount += amount
        with atomic(self._db):
            return self._goal_repo.update(goal)

    def delete_goal(self, user_id: int, goal_id: int) -> None:
        """Delete a goal."""
        self.get_goal(user_id, goal_id)
        with atomic(self._db):
            self._goal_repo.delete(goal_id)
