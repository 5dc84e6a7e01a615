"""Category repository protocol."""

from typing import Protocol, Optional

from finance_tracker.domain.models import Category, CategoryType


class CategoryRepository(Protocol):
    """Interface for category data access."""

    def create(self, category: Category) -> Category:
        """Persist a new category."""
        ...

    def get_by_id(self, category_id: int, user_id: Optional[int] = None) -> Optional[Category]:
        """Retrieve category by ID, optionally restricted to one owner."""
        ...

    def list_by_user(
        self,
        user_id: int,
        category_type: Optional[CategoryType] = None,
    ) -> list[Category]:
        """List a user's categories by name."""
        ...

    def update(self, category: Category) -> Category:
        """Update an existing category."""
        ...

    def delete(self, category_id: int) -> None:
        """Delete a category."""
        ...
