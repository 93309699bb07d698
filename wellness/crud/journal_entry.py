# crud/journal_entry.py
from typing import Optional, List
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import asc
from sqlalchemy.exc import SQLAlchemyError

from wellness.core.exceptions import DataFetchError, PersistenceError
from wellness.models.journal_entry import JournalEntry
from wellness.schemas.journal_entry import JournalEntryCreate, JournalEntryUpdate


class CRUDJournalEntry:
    """CRUD operations for JournalEntry model."""

    # =====================================================================
    # CREATE OPERATIONS
    # =====================================================================

    def create(self, db: Session, *, obj_in: JournalEntryCreate) -> JournalEntry:
        db_obj = JournalEntry(**obj_in.model_dump())
        try:
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to save journal entry: {e}") from e
        return db_obj

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get(self, db: Session, id: UUID) -> Optional[JournalEntry]:
        try:
            return db.query(JournalEntry).filter(JournalEntry.id == id).first()
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to fetch journal entry: {e}") from e

    def get_since(
        self,
        db: Session,
        *,
        since: datetime,
        user_id: Optional[UUID] = None,
    ) -> List[JournalEntry]:
        """
        Get journal entries created at or after `since`, oldest first.

        Args:
            db: Database session
            since: Lower bound on created_at
            user_id: Restrict to one user when given

        Returns:
            List of JournalEntry instances
        """
        try:
            query = db.query(JournalEntry).filter(JournalEntry.created_at >= since)
            if user_id is not None:
                query = query.filter(JournalEntry.user_id == user_id)
            return query.order_by(asc(JournalEntry.created_at)).all()
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to fetch journal entries: {e}") from e

    # =====================================================================
    # UPDATE OPERATIONS
    # =====================================================================

    def update(
        self, db: Session, *, db_obj: JournalEntry, obj_in: JournalEntryUpdate
    ) -> JournalEntry:
        """
        Edit a journal entry in place.

        Args:
            db: Database session
            db_obj: Existing JournalEntry instance
            obj_in: JournalEntryUpdate schema with the changed fields

        Returns:
            Updated JournalEntry instance
        """
        update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            setattr(db_obj, field, value)

        db_obj.updated_at = datetime.now(timezone.utc)
        try:
            db.commit()
            db.refresh(db_obj)
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to update journal entry: {e}") from e
        return db_obj

    # =====================================================================
    # DELETE OPERATIONS
    # =====================================================================

    def delete(self, db: Session, *, db_obj: JournalEntry) -> JournalEntry:
        try:
            db.delete(db_obj)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to delete journal entry: {e}") from e
        return db_obj

    # =====================================================================
    # UTILITY OPERATIONS
    # =====================================================================

    def count_by_user(self, db: Session, *, user_id: UUID) -> int:
        try:
            return db.query(JournalEntry).filter(JournalEntry.user_id == user_id).count()
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to count journal entries: {e}") from e


# Create singleton instance
crud_journal_entry = CRUDJournalEntry()
