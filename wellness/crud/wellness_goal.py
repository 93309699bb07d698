# crud/wellness_goal.py
from typing import Optional, List, Dict, Any
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import desc, asc
from sqlalchemy.exc import SQLAlchemyError

from wellness.core.exceptions import DataFetchError, PersistenceError
from wellness.models.wellness_goal import WellnessGoal
from wellness.schemas.wellness_goal import WellnessGoalCreate


class CRUDWellnessGoal:
    """CRUD operations for WellnessGoal model."""

    # =====================================================================
    # CREATE OPERATIONS
    # =====================================================================

    def create(self, db: Session, *, obj_in: WellnessGoalCreate) -> WellnessGoal:
        db_obj = WellnessGoal(**obj_in.model_dump())
        try:
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to create goal: {e}") from e
        return db_obj

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get(self, db: Session, id: UUID) -> Optional[WellnessGoal]:
        try:
            return db.query(WellnessGoal).filter(WellnessGoal.id == id).first()
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to fetch goal: {e}") from e

    def get_by_user(self, db: Session, *, user_id: UUID) -> List[WellnessGoal]:
        """All of a user's goals, newest first."""
        try:
            return (
                db.query(WellnessGoal)
                .filter(WellnessGoal.user_id == user_id)
                .order_by(desc(WellnessGoal.created_at))
                .all()
            )
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to fetch goals: {e}") from e

    def get_incomplete_by_user(self, db: Session, *, user_id: UUID) -> List[WellnessGoal]:
        """A user's open goals, oldest first."""
        try:
            return (
                db.query(WellnessGoal)
                .filter(
                    WellnessGoal.user_id == user_id,
                    WellnessGoal.is_completed.is_(False),
                )
                .order_by(asc(WellnessGoal.created_at))
                .all()
            )
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to fetch goals: {e}") from e

    # =====================================================================
    # UPDATE OPERATIONS
    # =====================================================================

    def update(
        self, db: Session, *, db_obj: WellnessGoal, patch: Dict[str, Any]
    ) -> WellnessGoal:
        """
        Apply a field patch to a goal.

        Args:
            db: Database session
            db_obj: Existing WellnessGoal instance
            patch: Column name to new value

        Returns:
            Updated WellnessGoal instance

        Raises:
            PersistenceError: If the write fails
        """
        for field, value in patch.items():
            setattr(db_obj, field, value)
        try:
            db.commit()
            db.refresh(db_obj)
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to update goal {db_obj.id}: {e}") from e
        return db_obj

    # =====================================================================
    # DELETE OPERATIONS
    # =====================================================================

    def delete(self, db: Session, *, db_obj: WellnessGoal) -> WellnessGoal:
        try:
            db.delete(db_obj)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to delete goal: {e}") from e
        return db_obj


# Create singleton instance
crud_wellness_goal = CRUDWellnessGoal()
