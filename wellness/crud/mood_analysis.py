# crud/mood_analysis.py
from typing import List
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError

from wellness.core.exceptions import DataFetchError, PersistenceError
from wellness.models.mood_analysis import MoodAnalysis
from wellness.schemas.mood_analysis import MoodAnalysisCreate


class CRUDMoodAnalysis:
    """Append-only access to the ai_mood_analysis log. No update or delete."""

    def create(self, db: Session, *, obj_in: MoodAnalysisCreate) -> MoodAnalysis:
        """
        Append one analysis row.

        Raises:
            PersistenceError: If the insert fails
        """
        db_obj = MoodAnalysis(**obj_in.model_dump())
        try:
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to store mood analysis: {e}") from e
        return db_obj

    def get_by_user(self, db: Session, *, user_id: UUID, limit: int = 30) -> List[MoodAnalysis]:
        """A user's analysis runs, newest first."""
        try:
            return (
                db.query(MoodAnalysis)
                .filter(MoodAnalysis.user_id == user_id)
                .order_by(desc(MoodAnalysis.analysis_date))
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to fetch mood analyses: {e}") from e

    def count_by_user(self, db: Session, *, user_id: UUID) -> int:
        try:
            return db.query(MoodAnalysis).filter(MoodAnalysis.user_id == user_id).count()
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to count mood analyses: {e}") from e


# Create singleton instance
crud_mood_analysis = CRUDMoodAnalysis()
