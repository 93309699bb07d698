# crud/achievement.py
from typing import Optional, List
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError

from wellness.core.exceptions import DataFetchError, PersistenceError
from wellness.data.achievement_catalog import AchievementDefinition
from wellness.models.achievement import Achievement


class CRUDAchievement:
    """CRUD operations for Achievement model. One row per (user, type)."""

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get_by_user(self, db: Session, *, user_id: UUID) -> List[Achievement]:
        """
        Get all achievement rows for a user, most recently unlocked first.

        Args:
            db: Database session
            user_id: User UUID

        Returns:
            List of Achievement instances
        """
        try:
            return (
                db.query(Achievement)
                .filter(Achievement.user_id == user_id)
                .order_by(desc(Achievement.unlocked_at))
                .all()
            )
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to fetch achievements: {e}") from e

    def get_by_user_and_type(
        self, db: Session, *, user_id: UUID, achievement_type: str
    ) -> Optional[Achievement]:
        try:
            return (
                db.query(Achievement)
                .filter(
                    Achievement.user_id == user_id,
                    Achievement.achievement_type == achievement_type,
                )
                .first()
            )
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to fetch achievement: {e}") from e

    # =====================================================================
    # UPSERT OPERATIONS
    # =====================================================================

    def upsert_unlocked(
        self,
        db: Session,
        *,
        user_id: UUID,
        definition: AchievementDefinition,
        progress: int,
        unlocked_at: datetime,
    ) -> Achievement:
        """
        Insert or update the (user, type) row as unlocked.

        Args:
            db: Database session
            user_id: User UUID
            definition: Catalog entry being unlocked
            progress: Final progress value
            unlocked_at: Unlock timestamp

        Returns:
            The unlocked Achievement instance

        Raises:
            PersistenceError: If the write fails
        """
        try:
            db_obj = self.get_by_user_and_type(
                db, user_id=user_id, achievement_type=definition.type
            )
            if db_obj is None:
                db_obj = Achievement(user_id=user_id, achievement_type=definition.type)
                db.add(db_obj)

            db_obj.title = definition.title
            db_obj.description = definition.description
            db_obj.icon = definition.icon
            db_obj.target = definition.target
            db_obj.progress = progress
            db_obj.is_unlocked = True
            db_obj.unlocked_at = unlocked_at

            db.commit()
            db.refresh(db_obj)
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(
                f"Failed to save achievement {definition.type}: {e}"
            ) from e
        return db_obj


# Create singleton instance
crud_achievement = CRUDAchievement()
