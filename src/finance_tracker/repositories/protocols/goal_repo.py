"""Goal repository protocol."""

from typing import Protocol, Optional

from finance_tracker.domain.models import Goal


class GoalRepository(Protocol):
    """Interface for savings goal data access."""

    def create(self, goal: Goal) -> Goal:
        """Persist a new goal."""
        ...

    def get_by_id(self, goal_id: int, user_id: Optional[int] = None) -> Optional[Goal]:
        """Retrieve goal by ID, optionally restricted to one owner."""
        ...

    def list_by_user(self, user_id: int) -> list[Goal]:
        """List a user's goals, newest first."""
        ...

    def update(self, goal: Goal) -> Goal:
        """Update an existing goal."""
        ...

    def delete(self, goal_id: int) -> None:
        """Delete a goal."""
        ...
