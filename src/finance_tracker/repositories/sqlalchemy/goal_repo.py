"""SQLAlchemy implementation of GoalRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.core.timezone import to_naive_utc, to_utc
from finance_tracker.domain.models import Goal
from finance_tracker.repositories.sqlalchemy.orm_models import GoalORM


class SqlAlchemyGoalRepository:
    """SQLAlchemy-backed savings goal repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, goal: Goal) -> Goal:
        """Persist a new goal."""
        orm_goal = GoalORM(
            user_id=goal.user_id,
            name=goal.name,
            currency=goal.currency,
            target_amount=goal.target_amount,
            current_amount=goal.current_amount,
            deadline=to_naive_utc(goal.deadline) if goal.deadline else None,
            color=goal.color,
            icon=goal.icon,
        )
        self._db.add(orm_goal)
        self._db.flush()
        self._db.refresh(orm_goal)
        return self._to_domain(orm_goal)

    def get_by_id(self, goal_id: int, user_id: Optional[int] = None) -> Optional[Goal]:
        """Retrieve goal by ID, optionally restricted to one owner."""
        query = self._db.query(GoalORM).filter(GoalORM.goal_id == goal_id)
        if user_id is not None:
            query = query.filter(GoalORM.user_id == user_id)
        orm_goal = query.first()
        return self._to_domain(orm_goal) if orm_goal else None

    def list_by_user(self, user_id: int) -> list[Goal]:
        """List a user's goals, newest first."""
        orm_goals = (
            self._db.query(GoalORM)
            .filter(GoalORM.user_id == user_id)
            .order_by(GoalORM.created_at.desc(), GoalORM.goal_id.desc())
            .all()
        )
        return [self._to_domain(g) for g in orm_goals]

    def update(self, goal: Goal) -> Goal:
        """Update an existing goal."""
        orm_goal = self._db.query(GoalORM).filter(GoalORM.goal_id == goal.goal_id).first()
        if not orm_goal:
            raise ValueError(f"Goal not found: {goal.goal_id}")
        orm_goal.name = goal.name
        orm_goal.target_amount = goal.target_amount
        orm_goal.current_amount = goal.current_amount
        orm_goal.deadline = to_naive_utc(goal.deadline) if goal.deadline else None
        orm_goal.color = goal.color
        orm_goal.icon = goal.icon
        self._db.flush()
        return self._to_domain(orm_goal)

    def delete(self, goal_id: int) -> None:
        """Delete a goal."""
        self._db.query(GoalORM).filter(GoalORM.goal_id == goal_id).delete()
        self._db.flush()

    @staticmethod
    def _to_domain(orm: GoalORM) -> Goal:
        """Convert ORM model to domain model."""
        return Goal(
            goal_id=orm.goal_id,
            user_id=orm.user_id,
            name=orm.name,
            currency=orm.currency,
            target_amount=int(orm.target_amount),
            current_amount=int(orm.current_amount),
            deadline=to_utc(orm.deadline) if orm.deadline else None,
            color=orm.color,
            icon=orm.icon,
            created_at=to_utc(orm.created_at) if orm.created_at else None,
        )
