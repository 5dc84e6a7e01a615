"""Category management service."""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.core.exceptions import NotFoundError, ValidationError
from finance_tracker.domain.models import Category, CategoryType
from finance_tracker.repositories.protocols import (
    BudgetRepository,
    CategoryRepository,
    RecurringTransactionRepository,
    TransactionRepository,
)
from finance_tracker.repositories.sqlalchemy.database import atomic


@dataclass
class CategoryUpdate:
    """Partial update data for editing a category."""

    name: Optional[str] = None
    category_type: Optional[CategoryType] = None
    color: Optional[str] = None
    icon: Optional[str] = None


class CategoryService:
    """Service for a user's income and expense categories."""

    def __init__(
        self,
        db: Session,
        category_repo: CategoryRepository,
        transaction_repo: TransactionRepository,
        budget_repo: BudgetRepository,
        recurring_repo: RecurringTransactionRepository,
    ):
        self._db = db
        self._category_repo = category_repo
        self._transaction_repo = transaction_repo
        self._budget_repo = budget_repo
        self._recurring_repo = recurring_repo

    def create_category(
        self,
        user_id: int,
        name: str,
        category_type: CategoryType,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> Category:
        """Create a category."""
        if not name.strip():
            raise ValidationError("Category name is required")
        category = Category(
            category_id=None,
            user_id=user_id,
            name=name.strip(),
            category_type=category_type,
            color=color,
            icon=icon,
        )
        with atomic(self._db):
            return self._category_repo.create(category)

    def get_category(self, user_id: int, category_id: int) -> Category:
        """Get one of the user's categories."""
        category = self._category_repo.get_by_id(category_id, user_id=user_id)
        if not category:
            raise NotFoundError("Category", category_id)
        return category

    def list_categories(
        self,
        user_id: int,
        category_type: Optional[CategoryType] = None,
    ) -> list[Category]:
        """List the user's categories."""
        return self._category_repo.list_by_user(user_id, category_type=category_type)

    def update_category(self, user_id: int, category_id: int, patch: CategoryUpdate) -> Category:
        """Apply a partial update to a category."""
        category = self.get_category(user_id, category_id)
        if patch.name is not None:
            if not patch.name.strip():
                raise ValidationError("Category name is required")
            category.name = patch.name.strip()
        if patch.category_type is not None:
            if (
                patch.category_type == CategoryType.INCOME
                and self._budget_repo.get_by_category(user_id, category_id)
            ):
                raise ValidationError("Category has a budget; delete it before making it income")
            category.category_type = patch.category_type
        if patch.color is not None:
            category.color = patch.color
        if patch.icon is not None:
            category.icon = patch.icon
        with atomic(self._db):
            return self._category_repo.update(category)

    def delete_category(self, user_id: int, category_id: int) -> None:
        """
        Delete a category and its budget.

        Transactions and recurring definitions stay, uncategorised.
        """
        self.get_category(user_id, category_id)
        with atomic(self._db):
            self._transaction_repo.clear_category(category_id)
            self._recurring_repo.clear_category(category_id)
            self._budget_repo.delete_by_category(category_id)
            self._category_repo.delete(category_id)
