"""SQLAlchemy implementation of CategoryRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.domain.models import Category, CategoryType
from finance_tracker.repositories.sqlalchemy.orm_models import CategoryORM


class SqlAlchemyCategoryRepository:
    """SQLAlchemy-backed category repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, category: Category) -> Category:
        """Persist a new category."""
        orm_category = CategoryORM(
            user_id=category.user_id,
            name=category.name,
            category_type=category.category_type,
            color=category.color,
            icon=category.icon,
        )
        self._db.add(orm_category)
        self._db.flush()
        self._db.refresh(orm_category)
        return self._to_domain(orm_category)

    def get_by_id(self, category_id: int, user_id: Optional[int] = None) -> Optional[Category]:
        """Retrieve category by ID, optionally restricted to one owner."""
        query = self._db.query(CategoryORM).filter(CategoryORM.category_id == category_id)
        if user_id is not None:
            query = query.filter(CategoryORM.user_id == user_id)
        orm_category = query.first()
        return self._to_domain(orm_category) if orm_category else None

    def list_by_user(
        self,
        user_id: int,
        category_type: Optional[CategoryType] = None,
    ) -> list[Category]:
        """List a user's categories by name."""
        query = self._db.query(CategoryORM).filter(CategoryORM.user_id == user_id)
        if category_type is not None:
            query = query.filter(CategoryORM.category_type == category_type)
        return [self._to_domain(c) for c in query.order_by(CategoryORM.name).all()]

    def update(self, category: Category) -> Category:
        """Update an existing category."""
        orm_category = self._db.query(CategoryORM).filter(
            CategoryORM.category_id == category.category_id
        ).first()
        if not orm_category:
            raise ValueError(f"Category not found: {category.category_id}")
        orm_category.name = category.name
        orm_category.category_type = category.category_type
        orm_category.color = category.color
        orm_category.icon = category.icon
        self._db.flush()
        return self._to_domain(orm_category)

    def delete(self, category_id: int) -> None:
        """Delete a category."""
        self._db.query(CategoryORM).filter(CategoryORM.category_id == category_id).delete()
        self._db.flush()

    @staticmethod
    def _to_domain(orm: CategoryORM) -> Category:
        """Convert ORM model to domain model."""
        return Category(
            category_id=orm.category_id,
            user_id=orm.user_id,
            name=orm.name,
            category_type=orm.category_type,
            color=orm.color,
            icon=orm.icon,
        )
