"""SQLAlchemy implementation of BudgetRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.core.timezone import to_utc
from finance_tracker.domain.models import Budget
from finance_tracker.repositories.sqlalchemy.orm_models import BudgetORM


class SqlAlchemyBudgetRepository:
    """SQLAlchemy-backed budget repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, budget: Budget) -> Budget:
        """Persist a new budget."""
        orm_budget = BudgetORM(
            user_id=budget.user_id,
            category_id=budget.category_id,
            amount=budget.amount,
            period=budget.period,
        )
        self._db.add(orm_budget)
        self._db.flush()
        self._db.refresh(orm_budget)
        return self._to_domain(orm_budget)

    def get_by_id(self, budget_id: int, user_id: Optional[int] = None) -> Optional[Budget]:
        """Retrieve budget by ID, optionally restricted to one owner."""
        query = self._db.query(BudgetORM).filter(BudgetORM.budget_id == budget_id)
        if user_id is not None:
            query = query.filter(BudgetORM.user_id == user_id)
        orm_budget = query.first()
        return self._to_domain(orm_budget) if orm_budget else None

    def get_by_category(self, user_id: int, category_id: Optional[int]) -> Optional[Budget]:
        query = self._db.query(BudgetORM).filter(BudgetORM.user_id == user_id)
        if category_id is None:
            query = query.filter(BudgetORM.category_id.is_(None))
        else:
            query = query.filter(BudgetORM.category_id == category_id)
        orm_budget = query.first()
        return self._to_domain(orm_budget) if orm_budget else None

    def list_by_user(self, user_id: int) -> list[Budget]:
        """List a user's budgets, oldest first."""
        orm_budgets = (
            self._db.query(BudgetORM)
            .filter(BudgetORM.user_id == user_id)
            .order_by(BudgetORM.budget_id)
            .all()
        )
        return [self._to_domain(b) for b in orm_budgets]

    def update(self, budget: Budget) -> Budget:
        """Update amount and period of an existing budget."""
        orm_budget = self._db.query(BudgetORM).filter(
            BudgetORM.budget_id == budget.budget_id
        ).first()
        if not orm_budget:
            raise ValueError(f"Budget not found: {budget.budget_id}")
        orm_budget.amount = budget.amount
        orm_budget.period = budget.period
        self._db.flush()
        return self._to_domain(orm_budget)

    def delete(self, budget_id: int) -> None:
        """Delete a budget."""
        self._db.query(BudgetORM).filter(BudgetORM.budget_id == budget_id).delete()
        self._db.flush()

    def delete_by_category(self, category_id: int) -> None:
        self._db.query(BudgetORM).filter(BudgetORM.category_id == category_id).delete()
        self._db.flush()

    @staticmethod
    def _to_domain(orm: BudgetORM) -> Budget:
        """Convert ORM model to domain model."""
        return Budget(
            budget_id=orm.budget_id,
            user_id=orm.user_id,
            amount=int(orm.amount),
            period=orm.period,
            category_id=orm.category_id,
            created_at=to_utc(orm.created_at) if orm.created_at else None,
        )
