"""Budget repository protocol."""

from typing import Protocol, Optional

from finance_tracker.domain.models import Budget


class BudgetRepository(Protocol):
    """Interface for budget data access."""

    def create(self, budget: Budget) -> Budget:
        """Persist a new budget."""
        ...

    def get_by_id(self, budget_id: int, user_id: Optional[int] = None) -> Optional[Budget]:
        """Retrieve budget by ID, optionally restricted to one owner."""
        ...

    def get_by_category(self, user_id: int, category_id: Optional[int]) -> Optional[Budget]:
        """The user's budget for a category, or the overall budget when ``category_id`` is None."""
        ...

    def list_by_user(self, user_id: int) -> list[Budget]:
        """List a user's budgets, oldest first."""
        ...

    def update(self, budget: Budget) -> Budget:
        """Update amount and period of an existing budget."""
        ...

    def delete(self, budget_id: int) -> None:
        """Delete a budget."""
        ...

    def delete_by_category(self, category_id: int) -> None:
        """Delete the budget tied to a category, if any."""
        ...
