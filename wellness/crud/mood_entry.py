# crud/mood_entry.py
from typing import Optional, List, Iterable
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import asc, desc
from sqlalchemy.exc import SQLAlchemyError

from wellness.core.exceptions import DataFetchError, PersistenceError
from wellness.models.mood_entry import MoodEntry
from wellness.schemas.mood_entry import MoodEntryCreate


class CRUDMoodEntry:
    """CRUD operations for MoodEntry model."""

    # =====================================================================
    # CREATE OPERATIONS
    # =====================================================================

    def create(self, db: Session, *, obj_in: MoodEntryCreate) -> MoodEntry:
        """
        Create a new mood entry.

        Args:
            db: Database session
            obj_in: MoodEntryCreate schema with entry data

        Returns:
            Created MoodEntry instance

        Raises:
            PersistenceError: If the insert fails
        """
        obj_data = obj_in.model_dump(exclude_unset=True)
        obj_data["mood"] = obj_in.mood.value

        db_obj = MoodEntry(**obj_data)
        try:
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to save mood entry: {e}") from e
        return db_obj

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get_since(
        self,
        db: Session,
        *,
        since: datetime,
        user_id: Optional[UUID] = None,
    ) -> List[MoodEntry]:
        """
        Get mood entries created at or after `since`, oldest first.

        Args:
            db: Database session
            since: Lower bound on created_at
            user_id: Restrict to one user when given

        Returns:
            List of MoodEntry instances ordered by created_at ascending
        """
        try:
            query = db.query(MoodEntry).filter(MoodEntry.created_at >= since)
            if user_id is not None:
                query = query.filter(MoodEntry.user_id == user_id)
            return query.order_by(asc(MoodEntry.created_at)).all()
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to fetch mood entries: {e}") from e

    def get_by_user(
        self, db: Session, *, user_id: UUID, skip: int = 0, limit: int = 100
    ) -> List[MoodEntry]:
        """Get a user's mood entries, newest first."""
        try:
            return (
                db.query(MoodEntry)
                .filter(MoodEntry.user_id == user_id)
                .order_by(desc(MoodEntry.created_at))
                .offset(skip)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to fetch mood entries: {e}") from e

    def get_timestamps_since(
        self, db: Session, *, user_id: UUID, since: datetime
    ) -> List[datetime]:
        """created_at of every entry for the user since `since`, newest first."""
        try:
            rows = (
                db.query(MoodEntry.created_at)
                .filter(MoodEntry.user_id == user_id, MoodEntry.created_at >= since)
                .order_by(desc(MoodEntry.created_at))
                .all()
            )
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to fetch mood timestamps: {e}") from e
        return [row[0] for row in rows]

    # =====================================================================
    # UTILITY OPERATIONS
    # =====================================================================

    def count_by_user(
        self,
        db: Session,
        *,
        user_id: UUID,
        moods: Optional[Iterable[str]] = None,
        since: Optional[datetime] = None,
    ) -> int:
        """
        Count a user's mood entries, optionally restricted to some labels
        and to entries created at or after `since`.
        """
        try:
            query = db.query(MoodEntry).filter(MoodEntry.user_id == user_id)
            if moods is not None:
                query = query.filter(MoodEntry.mood.in_(list(moods)))
            if since is not None:
                query = query.filter(MoodEntry.created_at >= since)
            return query.count()
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to count mood entries: {e}") from e


# Create singleton instance
crud_mood_entry = CRUDMoodEntry()
